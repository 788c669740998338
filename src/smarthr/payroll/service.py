from __future__ import annotations

import random
from datetime import datetime
from typing import Optional, Sequence

from ..auth.model import SessionUser
from ..auth.policies import require_company, require_employee, require_employer
from ..common.datetime_utils import now_utc
from ..core.enums import EmployeeStatus, PayslipRequestStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging import get_logger
from ..employees.repository import EmployeeRepository
from ..notifications.service import NotificationService
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollSummary, PayslipRequest
from .repository import PayrollRepository, PayslipRequestRepository

logger = get_logger(__name__)


def make_transaction_id(now: datetime, rng: Optional[random.Random] = None) -> str:
    """``PR-<last 6 digits of epoch millis>-<0..99>``."""
    rng = rng or random
    millis = str(int(now.timestamp() * 1000))[-6:]
    return f"PR-{millis}-{rng.randint(0, 99)}"


def _sort_key(item) -> float:
    return item.created_at.timestamp() if item.created_at else 0.0


class PayrollService:
    def __init__(
        self,
        payroll: PayrollRepository,
        payslips: PayslipRequestRepository,
        employees: EmployeeRepository,
        notifications: NotificationService,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payroll = payroll
        self._payslips = payslips
        self._employees = employees
        self._notifications = notifications
        self._calculator = calculator or StandardPayrollCalculator()

    def run(self, *, user: SessionUser, now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> list[str]:
        """Pay every active employee once per calendar month; returns the new entry ids."""
        require_employer(user)
        company_name = require_company(user)
        now = now or now_utc()

        already_paid = {
            e.emp_email
            for e in self._payroll.list_by_company(company_name)
            if e.created_at and (e.created_at.year, e.created_at.month) == (now.year, now.month)
        }
        active = [
            e
            for e in self._employees.list_by_company(company_name)
            if e.status == EmployeeStatus.ACTIVE and e.email not in already_paid
        ]
        ids = []
        for employee in active:
            pay = self._calculator.calculate(employee)
            ids.append(
                self._payroll.create(
                    transaction_id=make_transaction_id(now, rng),
                    name=employee.name,
                    emp_email=employee.email,
                    department=employee.department,
                    amount=pay.gross,
                    withholding=pay.withholding,
                    net_pay=pay.net_pay,
                    date=now.strftime("%d %b %Y"),
                    company_name=company_name,
                    created_at=now,
                )
            )
        logger.info("payroll_run_completed", company_name=company_name, created=len(ids), skipped=len(already_paid))
        return ids

    def list_for(self, user: SessionUser) -> PayrollSummary:
        company_name = require_company(user)
        if user.is_employer:
            entries = list(self._payroll.list_by_company(company_name))
        else:
            entries = list(self._payroll.list_by_email(company_name, user.email))
        entries.sort(key=_sort_key, reverse=True)
        return PayrollSummary(
            entries=entries,
            total=round(sum(e.amount for e in entries), 2),
            withholding=round(sum(e.withholding for e in entries), 2),
        )

    # Payslip requests

    def request_payslip(self, *, user: SessionUser, period: Optional[str] = None, now: Optional[datetime] = None) -> str:
        require_employee(user, "Only employees can request payslips")
        company_name = require_company(user)
        now = now or now_utc()

        employee = self._employees.get_by_uid(user.uid)
        emp_name = employee.name if employee else user.display_name
        period = (period or "").strip() or now.strftime("%B %Y")

        request_id = self._payslips.create(
            emp_email=user.email,
            emp_name=emp_name,
            period=period,
            company_name=company_name,
            created_at=now,
        )
        self._notifications.notify_employer(
            company_name=company_name,
            title="Payslip Requested",
            message=f"Employee {user.email} has requested their payslip for {period}.",
            now=now,
        )
        return request_id

    def list_payslip_requests(self, user: SessionUser) -> Sequence[PayslipRequest]:
        company_name = require_company(user)
        if user.is_employer:
            items = list(self._payslips.list_by_company(company_name))
        else:
            items = list(self._payslips.list_by_email(company_name, user.email))
        items.sort(key=_sort_key, reverse=True)
        return items

    def fulfil_payslip_request(self, *, user: SessionUser, request_id: str, now: Optional[datetime] = None) -> None:
        require_employer(user)
        req = self._payslips.get(request_id)
        if not req or req.company_name != user.company_name:
            raise NotFoundError("Payslip request not found")
        if req.status != PayslipRequestStatus.PENDING:
            raise ValidationError("Payslip request has already been fulfilled")

        now = now or now_utc()
        self._payslips.mark_fulfilled(request_id, now)
        self._notifications.notify_employee(
            company_name=req.company_name,
            email=req.emp_email,
            title="Payslip Ready",
            message=f"Your payslip for {req.period} is ready.",
            now=now,
        )
