from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PunchType
from .model import Punch


class AttendanceRepository(Protocol):
    def create(self, *, emp_email: str, type: PunchType, timestamp: datetime, company_name: str) -> str:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[Punch]:
        raise NotImplementedError

    def list_by_email(self, company_name: str, emp_email: str) -> Sequence[Punch]:
        raise NotImplementedError

    def last_for(self, company_name: str, emp_email: str) -> Optional[Punch]:
        raise NotImplementedError
