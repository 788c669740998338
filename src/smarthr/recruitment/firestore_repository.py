from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import JobStatus, JobType
from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import JobPosting
from .repository import JobRepository


def _to_job(data: Dict[str, Any]) -> JobPosting:
    return JobPosting(
        id=data["id"],
        title=data.get("title") or "",
        department=data.get("department") or "",
        type=JobType(data.get("type") or JobType.FULL_TIME.value),
        description=data.get("description") or "",
        status=JobStatus(data.get("status") or JobStatus.OPEN.value),
        company_name=data.get("companyName") or "",
        applicants=int(data.get("applicants") or 0),
        posted_at=data.get("postedAt"),
    )


class FirestoreJobRepository(FirestoreRepository, JobRepository):
    collection = collections.JOBS

    def create(self, *, title, department, type, description, company_name, posted_at) -> str:
        return self._add(
            {
                "title": title,
                "department": department,
                "type": type.value,
                "description": description,
                "applicants": 0,
                "status": JobStatus.OPEN.value,
                "companyName": company_name,
                "postedAt": posted_at,
            }
        )

    def get(self, job_id: str) -> Optional[JobPosting]:
        data = self._fetch(job_id)
        return _to_job(data) if data else None

    def list_by_company(self, company_name: str) -> Sequence[JobPosting]:
        return [_to_job(r) for r in self._where(companyName=company_name)]

    def set_status(self, job_id: str, status: JobStatus) -> bool:
        return self._update(job_id, {"status": status.value})

    def delete(self, job_id: str) -> bool:
        return self._delete(job_id)
