from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import parse_iso_datetime
from ..core.enums import PunchType
from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import Punch
from .repository import AttendanceRepository


def _to_punch(data: Dict[str, Any]) -> Punch:
    timestamp = data.get("timestamp")
    if isinstance(timestamp, str):
        timestamp = parse_iso_datetime(timestamp)
    return Punch(
        id=data["id"],
        emp_email=data.get("empEmail") or "",
        type=PunchType(data["type"]),
        timestamp=timestamp,
        company_name=data.get("companyName") or "",
    )


class FirestoreAttendanceRepository(FirestoreRepository, AttendanceRepository):
    collection = collections.ATTENDANCE

    def create(self, *, emp_email, type, timestamp, company_name) -> str:
        return self._add({"empEmail": emp_email, "type": type.value, "timestamp": timestamp, "companyName": company_name})

    def list_by_company(self, company_name: str) -> Sequence[Punch]:
        return [_to_punch(r) for r in self._where(companyName=company_name)]

    def list_by_email(self, company_name: str, emp_email: str) -> Sequence[Punch]:
        return [_to_punch(r) for r in self._where(companyName=company_name, empEmail=emp_email)]

    def last_for(self, company_name: str, emp_email: str) -> Optional[Punch]:
        punches = sorted(self.list_by_email(company_name, emp_email), key=lambda p: p.timestamp)
        return punches[-1] if punches else None
