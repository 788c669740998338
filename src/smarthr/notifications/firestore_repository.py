from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import Notification
from .repository import NotificationRepository


def _to_notification(data: Dict[str, Any]) -> Notification:
    role = data.get("targetRole")
    return Notification(
        id=data["id"],
        title=data.get("title") or "",
        message=data.get("message") or "",
        timestamp=data.get("timestamp"),
        is_read=bool(data.get("isRead")),
        target_email=data.get("targetEmail"),
        target_role=Role(role) if role else None,
        company_name=data.get("companyName"),
    )


class FirestoreNotificationRepository(FirestoreRepository, NotificationRepository):
    collection = collections.NOTIFICATIONS

    def create(self, *, title, message, timestamp, company_name, target_email=None, target_role=None) -> str:
        doc: Dict[str, Any] = {
            "title": title,
            "message": message,
            "timestamp": timestamp,
            "isRead": False,
            "companyName": company_name,
        }
        if target_email:
            doc["targetEmail"] = target_email
        if target_role:
            doc["targetRole"] = target_role.value
        return self._add(doc)

    def get(self, notification_id: str) -> Optional[Notification]:
        data = self._fetch(notification_id)
        return _to_notification(data) if data else None

    def list_by_company(self, company_name: str) -> Sequence[Notification]:
        return [_to_notification(r) for r in self._where(companyName=company_name)]

    def mark_read(self, notification_id: str) -> bool:
        return self._update(notification_id, {"isRead": True})
