from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.enums import TaskPriority, TaskStatus
from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import Task
from .repository import TaskRepository


def _to_task(data: Dict[str, Any]) -> Task:
    due = data.get("dueDate")
    return Task(
        id=data["id"],
        title=data.get("title") or "",
        description=data.get("description") or "",
        assignee_email=data.get("assigneeEmail") or "",
        status=TaskStatus(data.get("status") or TaskStatus.PENDING.value),
        priority=TaskPriority(data.get("priority") or TaskPriority.MEDIUM.value),
        company_name=data.get("companyName") or "",
        due_date=parse_iso_date(due) if due else None,
        created_at=data.get("createdAt"),
    )


class FirestoreTaskRepository(FirestoreRepository, TaskRepository):
    collection = collections.TASKS

    def create(self, *, title, description, assignee_email, priority, due_date, company_name, created_at) -> str:
        return self._add(
            {
                "title": title,
                "description": description,
                "assigneeEmail": assignee_email,
                "status": TaskStatus.PENDING.value,
                "priority": priority.value,
                "dueDate": due_date.isoformat() if due_date else None,
                "companyName": company_name,
                "createdAt": created_at,
            }
        )

    def get(self, task_id: str) -> Optional[Task]:
        data = self._fetch(task_id)
        return _to_task(data) if data else None

    def list_by_company(self, company_name: str) -> Sequence[Task]:
        return [_to_task(r) for r in self._where(companyName=company_name)]

    def list_by_assignee(self, company_name: str, assignee_email: str) -> Sequence[Task]:
        return [_to_task(r) for r in self._where(companyName=company_name, assigneeEmail=assignee_email)]

    def set_status(self, task_id: str, status: TaskStatus) -> bool:
        return self._update(task_id, {"status": status.value})
