from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    id: str
    uid: Optional[str]
    name: str
    email: str
    role: str
    department: str
    status: EmployeeStatus
    company_name: Optional[str] = None
    leave_balance: float = 0
    permissions: list[str] = field(default_factory=list)
    joined_at: Optional[datetime] = None
    salary: Optional[float] = None
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    routing_number: Optional[str] = None
    gov_id_number: Optional[str] = None
    address: Optional[str] = None
