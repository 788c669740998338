from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..auth.model import SessionUser
from ..auth.policies import require_company, require_employee, require_employer
from ..common.datetime_utils import now_utc, parse_iso_date
from ..common.validators import require_non_empty, require_non_negative_number
from ..core.constants import HALF_DAY_BALANCE_TYPE, HALF_DAY_LEAVE, LEAVE_ALLOCATION_TYPES
from ..core.enums import LeaveStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging import get_logger
from ..employees.repository import EmployeeRepository
from ..notifications.service import NotificationService
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveBalanceRepository, LeaveRepository

logger = get_logger(__name__)


def leave_days(from_date: date, to_date: date, *, is_half_day: bool = False) -> float:
    """Days a request deducts: 0.5 for a half day, otherwise inclusive calendar days."""
    if is_half_day:
        return 0.5
    return float(max(1, (to_date - from_date).days + 1))


class LeaveService:
    """Use cases: leave requests, approvals and per-type balances."""

    def __init__(
        self,
        leaves: LeaveRepository,
        balances: LeaveBalanceRepository,
        employees: EmployeeRepository,
        notifications: NotificationService,
    ):
        self._leaves = leaves
        self._balances = balances
        self._employees = employees
        self._notifications = notifications

    @staticmethod
    def _parse_date(value: Optional[str], field_name: str) -> date:
        value = require_non_empty(value, field_name)
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")

    def request_leave(
        self,
        *,
        user: SessionUser,
        type: str,
        from_date: Optional[str],
        to_date: Optional[str] = None,
        is_half_day: bool = False,
        description: str = "",
        now: Optional[datetime] = None,
    ) -> str:
        require_employee(user, "Only employees can request leave")
        company_name = require_company(user)

        start = self._parse_date(from_date, "From")
        if is_half_day:
            end = start
            type = HALF_DAY_LEAVE
        else:
            end = self._parse_date(to_date, "To")
            type = require_non_empty(type, "Leave type")
        if end < start:
            raise ValidationError("End date must be on or after start date")

        employee = self._employees.get_by_uid(user.uid)
        emp_name = employee.name if employee else user.display_name
        days = leave_days(start, end, is_half_day=is_half_day)

        leave_id = self._leaves.create(
            emp_name=emp_name,
            emp_email=user.email,
            type=type,
            is_half_day=bool(is_half_day),
            days=days,
            from_date=start,
            to_date=end,
            description=require_non_empty(description, "Description"),
            company_name=company_name,
            created_at=now or now_utc(),
        )
        self._notifications.notify_employer(
            company_name=company_name,
            title="New Leave Request",
            message=f"{emp_name} requested {days:g} day(s) of {type}.",
            now=now,
        )
        return leave_id

    def _get_pending(self, user: SessionUser, leave_id: str) -> LeaveRequest:
        require_employer(user)
        leave = self._leaves.get(leave_id)
        if not leave or leave.company_name != user.company_name:
            raise NotFoundError("Leave request not found")
        if leave.status != LeaveStatus.PENDING:
            raise ValidationError("Leave request has already been decided")
        return leave

    def approve(self, *, user: SessionUser, leave_id: str, now: Optional[datetime] = None) -> None:
        leave = self._get_pending(user, leave_id)
        if not self._leaves.set_status(leave_id, LeaveStatus.APPROVED):
            raise NotFoundError("Leave request not found")

        balance_type = HALF_DAY_BALANCE_TYPE if leave.type == HALF_DAY_LEAVE else leave.type
        balance = self._balances.find(leave.company_name, leave.emp_email, balance_type)
        if balance:
            self._balances.set_balance(balance.id, max(balance.balance - leave.days, 0.0))
        else:
            logger.info("leave_balance_missing", emp_email=leave.emp_email, type=balance_type)

        self._notifications.notify_employee(
            company_name=leave.company_name,
            email=leave.emp_email,
            title="Leave Approved",
            message=f"Your {leave.type} from {leave.from_date.isoformat()} has been approved.",
            now=now,
        )

    def deny(self, *, user: SessionUser, leave_id: str, now: Optional[datetime] = None) -> None:
        leave = self._get_pending(user, leave_id)
        if not self._leaves.set_status(leave_id, LeaveStatus.DENIED):
            raise NotFoundError("Leave request not found")

        self._notifications.notify_employee(
            company_name=leave.company_name,
            email=leave.emp_email,
            title="Leave Denied",
            message=f"Your {leave.type} from {leave.from_date.isoformat()} was denied.",
            now=now,
        )

    def list_for(self, user: SessionUser, *, type: Optional[str] = None) -> Sequence[LeaveRequest]:
        company_name = require_company(user)
        if user.is_employer:
            items = list(self._leaves.list_by_company(company_name))
        else:
            items = list(self._leaves.list_by_email(company_name, user.email))
        if type:
            items = [l for l in items if l.type == type]
        items.sort(key=lambda l: l.from_date, reverse=True)
        return items

    # Balances

    def allocate_balances(self, *, user: SessionUser, emp_email: str, **allocations) -> list[str]:
        """Set one balance per leave type; re-allocating a type overwrites it."""
        require_employer(user)
        company_name = require_company(user)
        emp_email = require_non_empty(emp_email, "Employee email").lower()
        if not self._employees.get_by_email(company_name, emp_email):
            raise NotFoundError("Employee not found")

        amounts = {}
        for key, leave_type in LEAVE_ALLOCATION_TYPES.items():
            amount = require_non_negative_number(allocations.get(key) or 0, leave_type)
            if amount > 0:
                amounts[leave_type] = amount
        if not amounts:
            raise ValidationError("Allocate at least one leave type")

        ids = []
        for leave_type, amount in amounts.items():
            existing = self._balances.find(company_name, emp_email, leave_type)
            if existing:
                self._balances.set_balance(existing.id, amount)
                ids.append(existing.id)
            else:
                ids.append(self._balances.create(emp_email=emp_email, type=leave_type, balance=amount, company_name=company_name))
        return ids

    def _get_owned_balance(self, user: SessionUser, balance_id: str) -> LeaveBalance:
        require_employer(user)
        balance = self._balances.get(balance_id)
        if not balance or balance.company_name != user.company_name:
            raise NotFoundError("Leave balance not found")
        return balance

    def update_balance(self, *, user: SessionUser, balance_id: str, balance) -> None:
        self._get_owned_balance(user, balance_id)
        self._balances.set_balance(balance_id, require_non_negative_number(balance, "Balance"))

    def delete_balance(self, *, user: SessionUser, balance_id: str) -> None:
        self._get_owned_balance(user, balance_id)
        self._balances.delete(balance_id)

    def list_balances(self, user: SessionUser) -> Sequence[LeaveBalance]:
        company_name = require_company(user)
        if user.is_employer:
            items = list(self._balances.list_by_company(company_name))
        else:
            items = list(self._balances.list_by_email(company_name, user.email))
        items.sort(key=lambda b: (b.emp_email, b.type))
        return items
