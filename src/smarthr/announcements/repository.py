from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AnnouncementType
from .model import Announcement


class AnnouncementRepository(Protocol):
    def create(
        self,
        *,
        title: str,
        message: str,
        type: AnnouncementType,
        author_name: str,
        start_time: Optional[datetime],
        end_time: Optional[datetime],
        created_at: datetime,
        company_name: str,
    ) -> str:
        raise NotImplementedError

    def get(self, announcement_id: str) -> Optional[Announcement]:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[Announcement]:
        raise NotImplementedError

    def delete(self, announcement_id: str) -> bool:
        raise NotImplementedError
