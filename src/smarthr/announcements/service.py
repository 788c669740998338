from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..auth.model import SessionUser
from ..auth.policies import require_company, require_employer
from ..common.datetime_utils import now_utc, parse_iso_datetime
from ..common.validators import parse_enum, require_non_empty
from ..core.enums import AnnouncementType
from ..core.exceptions import NotFoundError, ValidationError
from .model import Announcement
from .repository import AnnouncementRepository


class AnnouncementService:
    def __init__(self, announcements: AnnouncementRepository):
        self._announcements = announcements

    @staticmethod
    def _parse_window(value: Optional[str], field_name: str) -> Optional[datetime]:
        try:
            return parse_iso_datetime(value)
        except ValueError:
            raise ValidationError(f"{field_name} is not a valid date/time")

    def post(
        self,
        *,
        user: SessionUser,
        title: str,
        message: str,
        type: Optional[str] = None,
        author_name: Optional[str] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        require_employer(user)
        company_name = require_company(user)

        start = self._parse_window(start_time, "Start time")
        end = self._parse_window(end_time, "End time")
        if start and end and end < start:
            raise ValidationError("End time must be after start time")

        return self._announcements.create(
            title=require_non_empty(title, "Title"),
            message=require_non_empty(message, "Message"),
            type=parse_enum(AnnouncementType, type, "Type", default=AnnouncementType.NEWS),
            author_name=(author_name or "").strip() or user.display_name,
            start_time=start,
            end_time=end,
            created_at=now or now_utc(),
            company_name=company_name,
        )

    def delete(self, *, user: SessionUser, announcement_id: Optional[str]) -> None:
        if not announcement_id:
            raise ValidationError("ID required")
        require_employer(user)

        item = self._announcements.get(announcement_id)
        if not item or item.company_name != require_company(user):
            raise NotFoundError("Announcement not found")
        self._announcements.delete(announcement_id)

    def list_for(self, user: SessionUser, *, active_only: bool = False, now: Optional[datetime] = None) -> Sequence[Announcement]:
        items = list(self._announcements.list_by_company(require_company(user)))
        if active_only:
            now = now or now_utc()
            items = [a for a in items if a.is_active(now)]
        items.sort(key=lambda a: a.created_at.timestamp() if a.created_at else 0.0, reverse=True)
        return items
