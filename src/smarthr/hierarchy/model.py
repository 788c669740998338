from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..core.enums import HierarchyLevel


@dataclass(frozen=True)
class LevelAssignment:
    id: str
    emp_id: str
    level: HierarchyLevel
    company_name: str
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class ChartMember:
    id: str
    name: str
    email: str
    role: str
    department: str


@dataclass(frozen=True)
class HierarchyTier:
    level: HierarchyLevel
    members: List[ChartMember] = field(default_factory=list)
