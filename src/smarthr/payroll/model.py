from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..core.enums import PayrollStatus, PayslipRequestStatus


@dataclass(frozen=True)
class PayrollEntry:
    id: str
    transaction_id: str
    name: str
    emp_email: str
    department: str
    amount: float
    withholding: float
    net_pay: float
    status: PayrollStatus
    date: str
    company_name: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class PayrollSummary:
    entries: List[PayrollEntry] = field(default_factory=list)
    total: float = 0.0
    withholding: float = 0.0


@dataclass(frozen=True)
class PayslipRequest:
    id: str
    emp_email: str
    emp_name: str
    period: str
    status: PayslipRequestStatus
    company_name: str
    created_at: datetime
    fulfilled_at: Optional[datetime] = None
