from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Notification


class NotificationRepository(Protocol):
    def create(
        self,
        *,
        title: str,
        message: str,
        timestamp: datetime,
        company_name: Optional[str],
        target_email: Optional[str] = None,
        target_role: Optional[Role] = None,
    ) -> str:
        raise NotImplementedError

    def get(self, notification_id: str) -> Optional[Notification]:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[Notification]:
        raise NotImplementedError

    def mark_read(self, notification_id: str) -> bool:
        raise NotImplementedError
