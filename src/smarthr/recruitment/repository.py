from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import JobStatus, JobType
from .model import JobPosting


class JobRepository(Protocol):
    def create(
        self,
        *,
        title: str,
        department: str,
        type: JobType,
        description: str,
        company_name: str,
        posted_at: datetime,
    ) -> str:
        raise NotImplementedError

    def get(self, job_id: str) -> Optional[JobPosting]:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[JobPosting]:
        raise NotImplementedError

    def set_status(self, job_id: str, status: JobStatus) -> bool:
        raise NotImplementedError

    def delete(self, job_id: str) -> bool:
        raise NotImplementedError
