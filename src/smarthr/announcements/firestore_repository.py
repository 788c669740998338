from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import parse_iso_datetime
from ..core.enums import AnnouncementType
from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import Announcement
from .repository import AnnouncementRepository


def _as_datetime(value):
    # Older documents stored ISO strings instead of timestamps.
    return parse_iso_datetime(value) if isinstance(value, str) else value


def _to_announcement(data: Dict[str, Any]) -> Announcement:
    return Announcement(
        id=data["id"],
        title=data.get("title") or "",
        message=data.get("message") or "",
        type=AnnouncementType(data.get("type") or AnnouncementType.NEWS.value),
        author_name=data.get("authorName") or "",
        created_at=_as_datetime(data.get("createdAt")),
        company_name=data.get("companyName") or "",
        start_time=_as_datetime(data.get("startTime")),
        end_time=_as_datetime(data.get("endTime")),
    )


class FirestoreAnnouncementRepository(FirestoreRepository, AnnouncementRepository):
    collection = collections.ANNOUNCEMENTS

    def create(self, *, title, message, type, author_name, start_time, end_time, created_at, company_name) -> str:
        return self._add(
            {
                "title": title,
                "message": message,
                "type": type.value,
                "authorName": author_name,
                "startTime": start_time,
                "endTime": end_time,
                "createdAt": created_at,
                "companyName": company_name,
            }
        )

    def get(self, announcement_id: str) -> Optional[Announcement]:
        data = self._fetch(announcement_id)
        return _to_announcement(data) if data else None

    def list_by_company(self, company_name: str) -> Sequence[Announcement]:
        return [_to_announcement(r) for r in self._where(companyName=company_name)]

    def delete(self, announcement_id: str) -> bool:
        return self._delete(announcement_id)
