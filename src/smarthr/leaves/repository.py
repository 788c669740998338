from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveBalance, LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        emp_name: str,
        emp_email: str,
        type: str,
        is_half_day: bool,
        days: float,
        from_date: date,
        to_date: date,
        description: str,
        company_name: str,
        created_at: datetime,
    ) -> str:
        raise NotImplementedError

    def get(self, leave_id: str) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_by_email(self, company_name: str, emp_email: str) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def set_status(self, leave_id: str, status: LeaveStatus) -> bool:
        raise NotImplementedError


class LeaveBalanceRepository(Protocol):
    def create(self, *, emp_email: str, type: str, balance: float, company_name: str) -> str:
        raise NotImplementedError

    def get(self, balance_id: str) -> Optional[LeaveBalance]:
        raise NotImplementedError

    def find(self, company_name: str, emp_email: str, type: str) -> Optional[LeaveBalance]:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[LeaveBalance]:
        raise NotImplementedError

    def list_by_email(self, company_name: str, emp_email: str) -> Sequence[LeaveBalance]:
        raise NotImplementedError

    def set_balance(self, balance_id: str, balance: float) -> bool:
        raise NotImplementedError

    def delete(self, balance_id: str) -> bool:
        raise NotImplementedError
