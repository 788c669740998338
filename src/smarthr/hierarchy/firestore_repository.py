from __future__ import annotations

from typing import Any, Dict, Sequence

from ..core.enums import HierarchyLevel
from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import LevelAssignment
from .repository import HierarchyRepository


def level_doc_id(emp_id: str) -> str:
    return f"{emp_id}_lvl"


def _to_assignment(data: Dict[str, Any]) -> LevelAssignment:
    try:
        level = HierarchyLevel(data.get("level"))
    except ValueError:
        level = HierarchyLevel.STAFF
    return LevelAssignment(
        id=data["id"],
        emp_id=data.get("empId") or "",
        level=level,
        company_name=data.get("companyName") or "",
        updated_at=data.get("updatedAt"),
    )


class FirestoreHierarchyRepository(FirestoreRepository, HierarchyRepository):
    collection = collections.HIERARCHY

    def set_level(self, *, emp_id, level, company_name, updated_at) -> None:
        self._set(
            level_doc_id(emp_id),
            {"empId": emp_id, "level": level.value, "companyName": company_name, "updatedAt": updated_at},
            merge=True,
        )

    def list_by_company(self, company_name: str) -> Sequence[LevelAssignment]:
        return [_to_assignment(r) for r in self._where(companyName=company_name)]
