from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role, UserStatus
from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import User
from .repository import CompanyDataRepository, UserRepository


def _to_user(data: Dict[str, Any]) -> User:
    return User(
        uid=data["id"],
        email=data.get("email") or "",
        role=Role(data.get("role") or Role.EMPLOYEE.value),
        status=UserStatus(data.get("status") or UserStatus.ACTIVE.value),
        company_name=data.get("companyName"),
        created_at=data.get("createdAt"),
        accepted_at=data.get("acceptedAt"),
    )


class FirestoreUserRepository(FirestoreRepository, UserRepository):
    collection = collections.USERS

    def get(self, uid: str) -> Optional[User]:
        data = self._fetch(uid)
        return _to_user(data) if data else None

    def create(self, *, uid, email, role, status=None, company_name=None, created_at: datetime) -> None:
        doc: Dict[str, Any] = {"email": email, "role": role.value, "createdAt": created_at}
        if status is not None:
            doc["status"] = status.value
        if company_name:
            doc["companyName"] = company_name
        self._set(uid, doc)

    def mark_active(self, uid: str, *, accepted_at: datetime) -> bool:
        return self._update(uid, {"status": UserStatus.ACTIVE.value, "acceptedAt": accepted_at})

    def set_company_name(self, uid: str, company_name: str) -> bool:
        return self._update(uid, {"companyName": company_name})

    def find_employer(self, company_name: str) -> Optional[User]:
        rows = self._where(limit=1, companyName=company_name, role=Role.EMPLOYER.value)
        return _to_user(rows[0]) if rows else None

    def list_by_company(self, company_name: str) -> Sequence[User]:
        users = [_to_user(r) for r in self._where(companyName=company_name)]
        users.sort(key=lambda u: u.email)
        return users


class FirestoreCompanyDataRepository(FirestoreRepository, CompanyDataRepository):
    collection = collections.USERS

    def list_user_ids(self, company_name: str) -> Sequence[str]:
        return [r["id"] for r in self._where(companyName=company_name)]

    def delete_company_records(self, collection: str, company_name: str) -> int:
        scoped = FirestoreRepository(self._conn)
        scoped.collection = collection
        return len(scoped._delete_where(companyName=company_name))
