from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class ActivityItem:
    type: str
    description: str
    date: Optional[datetime]
    display: str


@dataclass(frozen=True)
class PerformanceReport:
    employee_id: str
    name: str
    email: str
    total_tasks: int
    completed_tasks: int
    completion_rate: float
    rating: float
    sentiment: str
    summary: str
    suggestions: List[str] = field(default_factory=list)
    avg_work_time: str = "N/A"
    recent_history: List[ActivityItem] = field(default_factory=list)
