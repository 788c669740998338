from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..auth.model import SessionUser
from ..auth.repository import UserRepository
from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..core.logging import get_logger
from .model import Company, Subscription
from .repository import CompanyRepository

logger = get_logger(__name__)


class CompanyService:
    """Use cases: company onboarding and subscription lookup."""

    def __init__(self, companies: CompanyRepository, users: UserRepository):
        self._companies = companies
        self._users = users

    def onboard(
        self,
        *,
        user: SessionUser,
        name: str,
        industry: Optional[str] = None,
        size: Optional[str] = None,
        timezone: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Company:
        if user.role != Role.EMPLOYER:
            raise AuthorizationError("Only employers can register a company")

        name = require_non_empty(name, "Company name")
        owner = self._users.find_employer(name)
        if owner and owner.uid != user.uid:
            raise ValidationError("A company with this name is already registered")

        now = now or now_utc()
        existing = self._companies.get(user.uid)

        self._users.set_company_name(user.uid, name)
        self._companies.save_profile(
            user.uid,
            name=name,
            industry=(industry or "").strip() or None,
            size=(size or "").strip() or None,
            timezone=(timezone or "").strip() or None,
            owner_uid=user.uid,
            created_at=existing.created_at if existing and existing.created_at else now,
        )
        if existing is None:
            self._companies.set_subscription(user.uid, Subscription())

        logger.info("company_onboarded", company_id=user.uid, company_name=name)
        return self._companies.get(user.uid) or Company(id=user.uid, name=name, owner_uid=user.uid)

    def resolve_company_id(self, user: SessionUser) -> Optional[str]:
        """Employer uid doubles as the company id; employees go through their employer."""
        if user.role == Role.EMPLOYER:
            return user.uid
        if not user.company_name:
            return None
        employer = self._users.find_employer(user.company_name)
        return employer.uid if employer else None

    def get_subscription(self, user: SessionUser) -> Subscription:
        company_id = self.resolve_company_id(user)
        if not company_id:
            return Subscription()
        company = self._companies.get(company_id)
        return company.subscription if company else Subscription()
