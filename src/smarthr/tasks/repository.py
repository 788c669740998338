from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import TaskPriority, TaskStatus
from .model import Task


class TaskRepository(Protocol):
    def create(
        self,
        *,
        title: str,
        description: str,
        assignee_email: str,
        priority: TaskPriority,
        due_date: Optional[date],
        company_name: str,
        created_at: datetime,
    ) -> str:
        raise NotImplementedError

    def get(self, task_id: str) -> Optional[Task]:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[Task]:
        raise NotImplementedError

    def list_by_assignee(self, company_name: str, assignee_email: str) -> Sequence[Task]:
        raise NotImplementedError

    def set_status(self, task_id: str, status: TaskStatus) -> bool:
        raise NotImplementedError
