from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..auth.identity import IdentityProvider
from ..auth.model import SessionUser
from ..auth.policies import require_company, require_employer
from ..auth.repository import UserRepository
from ..common.datetime_utils import now_utc
from ..common.validators import require_min_length, require_non_empty, require_non_negative_number
from ..companies.service import CompanyService
from ..core.constants import DEFAULT_DEPARTMENT, DEFAULT_EMPLOYEE_ROLE
from ..core.enums import Role, UserStatus
from ..core.exceptions import NotFoundError, QuotaExceededError, ValidationError
from ..core.logging import get_logger
from .model import Employee
from .repository import EmployeeRepository

logger = get_logger(__name__)


class EmployeeService:
    """Use cases: employee directory managed by the employer."""

    def __init__(
        self,
        employees: EmployeeRepository,
        users: UserRepository,
        identity: IdentityProvider,
        companies: CompanyService,
    ):
        self._employees = employees
        self._users = users
        self._identity = identity
        self._companies = companies

    def list_for(self, user: SessionUser) -> Sequence[Employee]:
        require_employer(user)
        return self._employees.list_by_company(require_company(user))

    def seats_remaining(self, user: SessionUser, *, now: Optional[datetime] = None) -> int:
        company_name = require_company(user)
        limit = self._companies.get_subscription(user).seat_limit(now or now_utc())
        return max(limit - self._employees.count_by_company(company_name), 0)

    def add_employee(
        self,
        *,
        user: SessionUser,
        name: str,
        email: str,
        password: str,
        role: Optional[str] = None,
        department: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        require_employer(user)
        company_name = require_company(user)
        now = now or now_utc()

        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email").lower()
        require_min_length(password, "Password", 6)

        if self.seats_remaining(user, now=now) <= 0:
            logger.info("employee_seat_limit_reached", company_name=company_name)
            raise QuotaExceededError("Employee limit reached")

        if self._employees.get_by_email(company_name, email):
            raise ValidationError("This employee is already on your team")

        uid = self._identity.create_user(email=email, password=password, display_name=name)
        self._users.create(
            uid=uid,
            email=email,
            role=Role.EMPLOYEE,
            status=UserStatus.PENDING,
            company_name=company_name,
            created_at=now,
        )
        self._employees.create(
            uid=uid,
            name=name,
            email=email,
            role=(role or "").strip() or DEFAULT_EMPLOYEE_ROLE,
            department=(department or "").strip() or DEFAULT_DEPARTMENT,
            company_name=company_name,
            joined_at=now,
        )
        logger.info("employee_invited", company_name=company_name, uid=uid)
        return uid

    def _get_owned(self, user: SessionUser, employee_id: str) -> Employee:
        require_employer(user)
        employee = self._employees.get(employee_id)
        if not employee or employee.company_name != user.company_name:
            raise NotFoundError("Employee not found")
        return employee

    def remove(self, *, user: SessionUser, employee_id: str) -> None:
        self._get_owned(user, employee_id)
        if not self._employees.delete(employee_id):
            raise NotFoundError("Employee not found")

    def update_leave_balance(self, *, user: SessionUser, employee_id: str, balance) -> None:
        self._get_owned(user, employee_id)
        self._employees.set_leave_balance(employee_id, require_non_negative_number(balance, "Leave balance"))

    def update_permissions(self, *, user: SessionUser, employee_id: str, permissions) -> None:
        self._get_owned(user, employee_id)
        if not isinstance(permissions, (list, tuple)):
            raise ValidationError("Permissions must be a list")
        cleaned = sorted({str(p).strip() for p in permissions if str(p).strip()})
        self._employees.set_permissions(employee_id, cleaned)

    def update_salary(self, *, user: SessionUser, employee_id: str, salary) -> None:
        self._get_owned(user, employee_id)
        self._employees.set_salary(employee_id, require_non_negative_number(salary, "Salary"))
