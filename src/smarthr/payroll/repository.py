from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import PayrollEntry, PayslipRequest


class PayrollRepository(Protocol):
    def create(
        self,
        *,
        transaction_id: str,
        name: str,
        emp_email: str,
        department: str,
        amount: float,
        withholding: float,
        net_pay: float,
        date: str,
        company_name: str,
        created_at: datetime,
    ) -> str:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[PayrollEntry]:
        raise NotImplementedError

    def list_by_email(self, company_name: str, emp_email: str) -> Sequence[PayrollEntry]:
        raise NotImplementedError


class PayslipRequestRepository(Protocol):
    def create(self, *, emp_email: str, emp_name: str, period: str, company_name: str, created_at: datetime) -> str:
        raise NotImplementedError

    def get(self, request_id: str) -> Optional[PayslipRequest]:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[PayslipRequest]:
        raise NotImplementedError

    def list_by_email(self, company_name: str, emp_email: str) -> Sequence[PayslipRequest]:
        raise NotImplementedError

    def mark_fulfilled(self, request_id: str, fulfilled_at: datetime) -> bool:
        raise NotImplementedError
