from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Iterable, Optional

from ..auth.model import SessionUser
from ..auth.policies import require_company
from ..common.datetime_utils import format_minutes, now_utc
from ..core.enums import PunchType
from ..core.exceptions import ValidationError
from .model import AttendanceSummary, Punch
from .repository import AttendanceRepository


def worked_minutes(punches: Iterable[Punch]) -> int:
    """Sum In->Out pairs for one employee; unmatched punches are ignored."""
    total = 0
    clocked_in_at = None
    for punch in sorted(punches, key=lambda p: p.timestamp):
        if punch.type == PunchType.CLOCK_IN:
            clocked_in_at = punch.timestamp
        elif clocked_in_at is not None:
            total += max(int((punch.timestamp - clocked_in_at).total_seconds() // 60), 0)
            clocked_in_at = None
    return total


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def clock_in(self, user: SessionUser, *, now: Optional[datetime] = None) -> str:
        company_name = require_company(user)
        last = self._attendance.last_for(company_name, user.email)
        if last and last.type == PunchType.CLOCK_IN:
            raise ValidationError("You are already clocked in")
        return self._attendance.create(
            emp_email=user.email,
            type=PunchType.CLOCK_IN,
            timestamp=now or now_utc(),
            company_name=company_name,
        )

    def clock_out(self, user: SessionUser, *, now: Optional[datetime] = None) -> str:
        company_name = require_company(user)
        last = self._attendance.last_for(company_name, user.email)
        if not last or last.type != PunchType.CLOCK_IN:
            raise ValidationError("You are not clocked in")
        now = now or now_utc()
        if now < last.timestamp:
            raise ValidationError("Clock-out time cannot be before clock-in time")
        return self._attendance.create(
            emp_email=user.email,
            type=PunchType.CLOCK_OUT,
            timestamp=now,
            company_name=company_name,
        )

    def list_for(self, user: SessionUser) -> AttendanceSummary:
        company_name = require_company(user)
        if user.is_employer:
            punches = list(self._attendance.list_by_company(company_name))
        else:
            punches = list(self._attendance.list_by_email(company_name, user.email))

        by_email = defaultdict(list)
        for punch in punches:
            by_email[punch.emp_email].append(punch)
        minutes = {email: worked_minutes(items) for email, items in by_email.items()}

        punches.sort(key=lambda p: p.timestamp, reverse=True)
        return AttendanceSummary(
            punches=punches,
            total_worked=format_minutes(sum(minutes.values())),
            worked_by_employee={email: format_minutes(m) for email, m in sorted(minutes.items())},
        )
