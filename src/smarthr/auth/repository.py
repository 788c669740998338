from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import Role, UserStatus
from .model import User


class UserRepository(Protocol):
    def get(self, uid: str) -> Optional[User]:
        raise NotImplementedError

    def create(
        self,
        *,
        uid: str,
        email: str,
        role: Role,
        status: Optional[UserStatus] = None,
        company_name: Optional[str] = None,
        created_at: datetime,
    ) -> None:
        raise NotImplementedError

    def mark_active(self, uid: str, *, accepted_at: datetime) -> bool:
        raise NotImplementedError

    def set_company_name(self, uid: str, company_name: str) -> bool:
        raise NotImplementedError

    def find_employer(self, company_name: str) -> Optional[User]:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[User]:
        raise NotImplementedError


class CompanyDataRepository(Protocol):
    """Bulk removal of everything a company owns."""

    def list_user_ids(self, company_name: str) -> Sequence[str]:
        raise NotImplementedError

    def delete_company_records(self, collection: str, company_name: str) -> int:
        raise NotImplementedError
