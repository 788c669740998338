from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.validators import parse_enum, require_non_empty
from ..companies.repository import CompanyRepository
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role, UserStatus
from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError, NotFoundError, ValidationError
from ..core.logging import get_logger
from ..database import collections
from ..employees.repository import EmployeeRepository
from .identity import IdentityProvider
from .model import SessionUser
from .repository import CompanyDataRepository, UserRepository

logger = get_logger(__name__)


class AuthService:
    """Use cases: session cookies, sign-up, invitation acceptance, account deletion."""

    def __init__(
        self,
        users: UserRepository,
        identity: IdentityProvider,
        *,
        employees: EmployeeRepository,
        companies: CompanyRepository,
        company_data: CompanyDataRepository,
        session_days: int = DEFAULT_SESSION_DAYS,
    ):
        self._users = users
        self._identity = identity
        self._employees = employees
        self._companies = companies
        self._company_data = company_data
        self._session_lifetime = timedelta(days=session_days)

    @property
    def session_lifetime(self) -> timedelta:
        return self._session_lifetime

    def create_session(self, id_token: Optional[str]) -> str:
        if not id_token:
            raise ValidationError("No token provided")
        return self._identity.create_session_cookie(id_token, expires_in=self._session_lifetime)

    def verify_session(self, cookie: Optional[str]) -> SessionUser:
        if not cookie:
            raise AuthenticationError("Unauthorized")

        token = self._identity.verify_session_cookie(cookie)
        user = self._users.get(token.uid)
        if not user:
            return SessionUser(uid=token.uid, email=token.email, role=Role.EMPLOYEE, status=UserStatus.ACTIVE)

        return SessionUser(
            uid=user.uid,
            email=token.email or user.email,
            role=user.role,
            status=user.status,
            company_name=user.company_name,
        )

    def sign_up(self, *, id_token: Optional[str], role: str, now: Optional[datetime] = None) -> SessionUser:
        """Create the profile document for a freshly registered identity."""
        id_token = require_non_empty(id_token, "ID token")
        parsed_role = parse_enum(Role, role, "Role")

        token = self._identity.verify_id_token(id_token)
        if self._users.get(token.uid):
            raise ValidationError("Profile already exists")

        self._users.create(uid=token.uid, email=token.email, role=parsed_role, created_at=now or now_utc())
        logger.info("user_signed_up", uid=token.uid, role=parsed_role.value)
        return SessionUser(uid=token.uid, email=token.email, role=parsed_role, status=UserStatus.ACTIVE)

    def accept_invitation(self, user: SessionUser, *, now: Optional[datetime] = None) -> None:
        if not self._users.mark_active(user.uid, accepted_at=now or now_utc()):
            raise NotFoundError("User not found")

        employee = self._employees.get_by_uid(user.uid)
        if employee:
            self._employees.mark_active(employee.id)
        logger.info("invitation_accepted", uid=user.uid, has_employee_record=bool(employee))

    def delete_organization(self, user: SessionUser) -> dict:
        """Remove every record tied to the employer's company, auth accounts included."""
        profile = self._users.get(user.uid)
        if not profile:
            raise NotFoundError("User not found")
        if profile.role != Role.EMPLOYER:
            raise AuthorizationError("Only employers can delete their organization")
        if not profile.company_name:
            raise ValidationError("No company associated with this account")

        company_name = profile.company_name
        logger.info("organization_deletion_started", company_name=company_name)

        for uid in self._company_data.list_user_ids(company_name):
            try:
                self._identity.delete_user(uid)
            except DomainError as e:
                logger.warning("auth_account_delete_failed", uid=uid, error=str(e))

        deleted = {}
        for collection in collections.COMPANY_SCOPED:
            deleted[collection] = self._company_data.delete_company_records(collection, company_name)
            logger.info("company_records_deleted", collection=collection, count=deleted[collection])

        deleted[collections.COMPANIES] = self._companies.delete_by_name(company_name)
        logger.info("organization_deleted", company_name=company_name, registry_entries=deleted[collections.COMPANIES])
        return deleted
