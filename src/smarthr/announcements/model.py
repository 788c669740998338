from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AnnouncementType


@dataclass(frozen=True)
class Announcement:
    id: str
    title: str
    message: str
    type: AnnouncementType
    author_name: str
    created_at: Optional[datetime]
    company_name: str
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def is_active(self, now: datetime) -> bool:
        if self.start_time is not None and now < self.start_time:
            return False
        if self.end_time is not None and now > self.end_time:
            return False
        return True
