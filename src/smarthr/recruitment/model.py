from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import JobStatus, JobType


@dataclass(frozen=True)
class JobPosting:
    id: str
    title: str
    department: str
    type: JobType
    description: str
    status: JobStatus
    company_name: str
    applicants: int = 0
    posted_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.status == JobStatus.OPEN
