from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import RequestStatus
from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import ProfileUpdateRequest
from .repository import ProfileUpdateRepository


def _to_request(data: Dict[str, Any]) -> ProfileUpdateRequest:
    return ProfileUpdateRequest(
        id=data["id"],
        emp_email=data.get("empEmail") or "",
        emp_name=data.get("empName") or "",
        status=RequestStatus(data.get("status") or RequestStatus.PENDING.value),
        company_name=data.get("companyName") or "",
        created_at=data.get("createdAt"),
        changes=dict(data.get("changes") or {}),
        decided_at=data.get("decidedAt"),
    )


class FirestoreProfileUpdateRepository(FirestoreRepository, ProfileUpdateRepository):
    collection = collections.PROFILE_UPDATES

    def create(self, *, emp_email, emp_name, changes, company_name, created_at) -> str:
        return self._add(
            {
                "empEmail": emp_email,
                "empName": emp_name,
                "changes": dict(changes),
                "status": RequestStatus.PENDING.value,
                "companyName": company_name,
                "createdAt": created_at,
            }
        )

    def get(self, request_id: str) -> Optional[ProfileUpdateRequest]:
        data = self._fetch(request_id)
        return _to_request(data) if data else None

    def list_by_company(self, company_name: str) -> Sequence[ProfileUpdateRequest]:
        return [_to_request(r) for r in self._where(companyName=company_name)]

    def list_by_email(self, company_name: str, emp_email: str) -> Sequence[ProfileUpdateRequest]:
        return [_to_request(r) for r in self._where(companyName=company_name, empEmail=emp_email)]

    def decide(self, request_id: str, *, status: RequestStatus, decided_at) -> bool:
        return self._update(request_id, {"status": status.value, "decidedAt": decided_at})
