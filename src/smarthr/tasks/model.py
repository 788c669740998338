from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TaskPriority, TaskStatus


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    description: str
    assignee_email: str
    status: TaskStatus
    priority: TaskPriority
    company_name: str
    due_date: Optional[date] = None
    created_at: Optional[datetime] = None
