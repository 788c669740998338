from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..auth.model import SessionUser
from ..common.datetime_utils import now_utc
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from .model import Notification
from .repository import NotificationRepository


class NotificationService:
    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def notify_employer(self, *, company_name: Optional[str], title: str, message: str, now: Optional[datetime] = None) -> str:
        return self._notifications.create(
            title=title,
            message=message,
            timestamp=now or now_utc(),
            company_name=company_name,
            target_role=Role.EMPLOYER,
        )

    def notify_employee(
        self,
        *,
        company_name: Optional[str],
        email: str,
        title: str,
        message: str,
        now: Optional[datetime] = None,
    ) -> str:
        return self._notifications.create(
            title=title,
            message=message,
            timestamp=now or now_utc(),
            company_name=company_name,
            target_email=email,
            target_role=Role.EMPLOYEE,
        )

    def list_for(self, user: SessionUser) -> Sequence[Notification]:
        if not user.company_name:
            return []
        items = [n for n in self._notifications.list_by_company(user.company_name) if n.is_for(email=user.email, role=user.role)]
        items.sort(key=lambda n: n.timestamp, reverse=True)
        return items

    def mark_read(self, *, user: SessionUser, notification_id: str) -> None:
        item = self._notifications.get(notification_id)
        if not item or item.company_name != user.company_name or not item.is_for(email=user.email, role=user.role):
            raise NotFoundError("Notification not found")
        self._notifications.mark_read(notification_id)
