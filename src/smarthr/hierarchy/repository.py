from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from ..core.enums import HierarchyLevel
from .model import LevelAssignment


class HierarchyRepository(Protocol):
    """One level per employee; setting a level replaces the previous one."""

    def set_level(self, *, emp_id: str, level: HierarchyLevel, company_name: str, updated_at: datetime) -> None:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[LevelAssignment]:
        raise NotImplementedError
