from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import ProfileUpdateRequest


class ProfileUpdateRepository(Protocol):
    def create(
        self,
        *,
        emp_email: str,
        emp_name: str,
        changes: Dict[str, str],
        company_name: str,
        created_at: datetime,
    ) -> str:
        raise NotImplementedError

    def get(self, request_id: str) -> Optional[ProfileUpdateRequest]:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[ProfileUpdateRequest]:
        raise NotImplementedError

    def list_by_email(self, company_name: str, emp_email: str) -> Sequence[ProfileUpdateRequest]:
        raise NotImplementedError

    def decide(self, request_id: str, *, status: RequestStatus, decided_at: datetime) -> bool:
        raise NotImplementedError
