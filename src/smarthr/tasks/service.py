from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..auth.model import SessionUser
from ..auth.policies import require_company, require_employer
from ..common.datetime_utils import now_utc, parse_iso_date
from ..common.validators import parse_enum, require_non_empty
from ..core.enums import TaskPriority, TaskStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..notifications.service import NotificationService
from .model import Task
from .repository import TaskRepository


class TaskService:
    def __init__(self, tasks: TaskRepository, employees: EmployeeRepository, notifications: NotificationService):
        self._tasks = tasks
        self._employees = employees
        self._notifications = notifications

    def assign(
        self,
        *,
        user: SessionUser,
        title: str,
        assignee_email: str,
        description: str = "",
        priority: Optional[str] = None,
        due_date: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        require_employer(user)
        company_name = require_company(user)
        assignee = require_non_empty(assignee_email, "Assignee").lower()
        if not self._employees.get_by_email(company_name, assignee):
            raise NotFoundError("Employee not found")

        due: Optional[date] = None
        if due_date:
            try:
                due = parse_iso_date(due_date)
            except ValueError:
                raise ValidationError("Due date must be a date (YYYY-MM-DD)")

        title = require_non_empty(title, "Title")
        task_id = self._tasks.create(
            title=title,
            description=(description or "").strip(),
            assignee_email=assignee,
            priority=parse_enum(TaskPriority, priority, "Priority", default=TaskPriority.MEDIUM),
            due_date=due,
            company_name=company_name,
            created_at=now or now_utc(),
        )
        self._notifications.notify_employee(
            company_name=company_name,
            email=assignee,
            title="New Task Assigned",
            message=f"You have been assigned: {title}",
            now=now,
        )
        return task_id

    def update_status(self, *, user: SessionUser, task_id: str, status: str) -> None:
        task = self._tasks.get(task_id)
        if not task or task.company_name != user.company_name:
            raise NotFoundError("Task not found")
        if not user.is_employer and task.assignee_email != user.email:
            raise AuthorizationError("You can only update your own tasks")
        self._tasks.set_status(task_id, parse_enum(TaskStatus, status, "Status"))

    def list_for(self, user: SessionUser) -> Sequence[Task]:
        company_name = require_company(user)
        if user.is_employer:
            items = list(self._tasks.list_by_company(company_name))
        else:
            items = list(self._tasks.list_by_assignee(company_name, user.email))
        # Undated tasks last.
        items.sort(key=lambda t: (t.due_date is None, t.due_date or date.max))
        return items
