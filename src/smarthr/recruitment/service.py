from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..auth.model import SessionUser
from ..auth.policies import require_company, require_employer
from ..common.datetime_utils import now_utc
from ..common.validators import parse_enum, require_non_empty
from ..core.constants import DEFAULT_DEPARTMENT
from ..core.enums import JobStatus, JobType
from ..core.exceptions import NotFoundError, ValidationError
from .model import JobPosting
from .repository import JobRepository


class RecruitmentService:
    def __init__(self, jobs: JobRepository):
        self._jobs = jobs

    def post_job(
        self,
        *,
        user: SessionUser,
        title: str,
        department: Optional[str] = None,
        type: Optional[str] = None,
        description: str = "",
        now: Optional[datetime] = None,
    ) -> str:
        require_employer(user)
        return self._jobs.create(
            title=require_non_empty(title, "Job title"),
            department=(department or "").strip() or DEFAULT_DEPARTMENT,
            type=parse_enum(JobType, type, "Job type", default=JobType.FULL_TIME),
            description=(description or "").strip(),
            company_name=require_company(user),
            posted_at=now or now_utc(),
        )

    def _get_owned(self, user: SessionUser, job_id: str) -> JobPosting:
        require_employer(user)
        job = self._jobs.get(job_id)
        if not job or job.company_name != user.company_name:
            raise NotFoundError("Job posting not found")
        return job

    def close(self, *, user: SessionUser, job_id: str) -> None:
        job = self._get_owned(user, job_id)
        if not job.is_open:
            raise ValidationError("Job posting is already closed")
        self._jobs.set_status(job_id, JobStatus.CLOSED)

    def delete(self, *, user: SessionUser, job_id: str) -> None:
        self._get_owned(user, job_id)
        self._jobs.delete(job_id)

    def list_for(self, user: SessionUser) -> Sequence[JobPosting]:
        items = list(self._jobs.list_by_company(require_company(user)))
        if not user.is_employer:
            items = [j for j in items if j.is_open]
        items.sort(key=lambda j: j.posted_at.timestamp() if j.posted_at else 0.0, reverse=True)
        return items
