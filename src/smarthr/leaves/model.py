from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    id: str
    emp_name: str
    emp_email: str
    type: str
    is_half_day: bool
    days: float
    from_date: date
    to_date: date
    status: LeaveStatus
    description: str
    company_name: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class LeaveBalance:
    id: str
    emp_email: str
    type: str
    balance: float
    company_name: str
