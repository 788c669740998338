from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.constants import FREE_EMPLOYEE_LIMIT
from ..core.enums import SubscriptionPlan, SubscriptionStatus


@dataclass(frozen=True)
class Subscription:
    plan: str = SubscriptionPlan.FREE.value
    status: str = SubscriptionStatus.ACTIVE.value
    employee_limit: int = FREE_EMPLOYEE_LIMIT
    paid_seats: int = 0
    active_until: Optional[datetime] = None
    razorpay_subscription_id: Optional[str] = None

    @property
    def is_paid(self) -> bool:
        return self.plan == SubscriptionPlan.PAID.value

    def seat_limit(self, now: datetime) -> int:
        """Seats usable right now; lapsed or inactive paid plans fall back to the free tier."""
        if not self.is_paid:
            return self.employee_limit or FREE_EMPLOYEE_LIMIT
        if self.status != SubscriptionStatus.ACTIVE.value:
            return FREE_EMPLOYEE_LIMIT
        if self.active_until is not None and self.active_until <= now:
            return FREE_EMPLOYEE_LIMIT
        return self.employee_limit


@dataclass(frozen=True)
class Company:
    id: str
    name: str
    industry: Optional[str] = None
    size: Optional[str] = None
    timezone: Optional[str] = None
    owner_uid: Optional[str] = None
    subscription: Subscription = field(default_factory=Subscription)
    created_at: Optional[datetime] = None
