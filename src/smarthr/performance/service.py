from __future__ import annotations

from collections import defaultdict
from typing import Iterable, List

from ..attendance.model import Punch
from ..attendance.repository import AttendanceRepository
from ..attendance.service import worked_minutes
from ..auth.model import SessionUser
from ..auth.policies import require_company, require_employer
from ..core.enums import TaskStatus
from ..core.exceptions import NotFoundError
from ..employees.repository import EmployeeRepository
from ..tasks.model import Task
from ..tasks.repository import TaskRepository
from .model import ActivityItem, PerformanceReport

HISTORY_SIZE = 5

# (minimum completion rate, rating, sentiment, summary, suggestions), best first
TIERS = (
    (
        80,
        4.8,
        "positive",
        "Exceptional performance with high task completion efficiency. "
        "Consistently meets deadlines and contributes significantly to project milestones.",
        ["Consider for Senior Role", "Assign to Lead next Sprint", "Provide mentorship opportunities"],
    ),
    (
        50,
        3.5,
        "neutral",
        "Steady performance but shows potential for greater efficiency. "
        "Task turnover could be optimized with better prioritization.",
        ["Task prioritization training", "Weekly sync to remove blockers", "Skill-up on technical bottlenecks"],
    ),
    (
        0,
        2.4,
        "negative",
        "Performance metrics are currently below expectations. "
        "High volume of pending tasks suggest potential blockers or lack of focus.",
        ["Formal performance review", "Redistribute workload", "Check for constraints"],
    ),
)


def average_work_time(punches: Iterable[Punch]) -> str:
    """Mean worked time per day with punches, as ``"Xh Ym"``; ``"N/A"`` when nothing was worked."""
    by_day = defaultdict(list)
    for punch in punches:
        by_day[punch.timestamp.date()].append(punch)
    total = sum(worked_minutes(day) for day in by_day.values())
    if not by_day or total == 0:
        return "N/A"
    average = total // len(by_day)
    return f"{average // 60}h {average % 60}m"


def _recent_history(tasks: Iterable[Task], punches: Iterable[Punch]) -> List[ActivityItem]:
    items = [ActivityItem(type="Task", description=t.title, date=t.created_at, display=t.status.value) for t in tasks]
    items += [
        ActivityItem(type="Attendance", description=f"Punched: {p.type.value}", date=p.timestamp, display=p.type.value)
        for p in punches
    ]
    items.sort(key=lambda i: i.date.timestamp() if i.date else 0.0, reverse=True)
    return items[:HISTORY_SIZE]


class PerformanceService:
    """Rates an employee from task completion and summarises their attendance."""

    def __init__(self, employees: EmployeeRepository, tasks: TaskRepository, attendance: AttendanceRepository):
        self._employees = employees
        self._tasks = tasks
        self._attendance = attendance

    def review(self, *, user: SessionUser, employee_id: str) -> PerformanceReport:
        require_employer(user)
        company_name = require_company(user)
        employee = self._employees.get(employee_id)
        if not employee or employee.company_name != company_name:
            raise NotFoundError("Employee not found")

        tasks = list(self._tasks.list_by_assignee(company_name, employee.email))
        punches = list(self._attendance.list_by_email(company_name, employee.email))
        completed = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
        rate = completed / len(tasks) * 100 if tasks else 0.0

        _, rating, sentiment, summary, suggestions = next(tier for tier in TIERS if rate >= tier[0])
        return PerformanceReport(
            employee_id=employee.id,
            name=employee.name,
            email=employee.email,
            total_tasks=len(tasks),
            completed_tasks=completed,
            completion_rate=round(rate, 1),
            rating=rating,
            sentiment=sentiment,
            summary=summary,
            suggestions=list(suggestions),
            avg_work_time=average_work_time(punches),
            recent_history=_recent_history(tasks, punches),
        )
