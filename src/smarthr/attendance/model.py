from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List

from ..core.enums import PunchType


@dataclass(frozen=True)
class Punch:
    id: str
    emp_email: str
    type: PunchType
    timestamp: datetime
    company_name: str


@dataclass(frozen=True)
class AttendanceSummary:
    punches: List[Punch] = field(default_factory=list)
    total_worked: str = "00:00"
    worked_by_employee: Dict[str, str] = field(default_factory=dict)
