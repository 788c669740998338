from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping, Optional

from ..auth.model import SessionUser
from ..auth.policies import require_company, require_employer
from ..common.datetime_utils import now_utc
from ..common.validators import parse_enum
from ..core.enums import HierarchyLevel
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging import get_logger
from ..employees.repository import EmployeeRepository
from .model import ChartMember, HierarchyTier
from .repository import HierarchyRepository

logger = get_logger(__name__)


class HierarchyService:
    """Org chart: every employee sits on one level, ``Staff`` until placed elsewhere."""

    def __init__(self, levels: HierarchyRepository, employees: EmployeeRepository):
        self._levels = levels
        self._employees = employees

    def chart(self, user: SessionUser) -> List[HierarchyTier]:
        require_employer(user)
        company_name = require_company(user)
        assigned = {a.emp_id: a.level for a in self._levels.list_by_company(company_name)}

        tiers = {level: [] for level in HierarchyLevel}
        for employee in sorted(self._employees.list_by_company(company_name), key=lambda e: e.name.lower()):
            tiers[assigned.get(employee.id, HierarchyLevel.STAFF)].append(
                ChartMember(
                    id=employee.id,
                    name=employee.name,
                    email=employee.email,
                    role=employee.role,
                    department=employee.department,
                )
            )
        return [HierarchyTier(level=level, members=members) for level, members in tiers.items()]

    def set_levels(self, *, user: SessionUser, levels: Optional[Mapping[str, Any]], now: Optional[datetime] = None) -> int:
        """Place employees on levels, given as ``{employee id: level}``; nothing is written if any entry is invalid."""
        require_employer(user)
        company_name = require_company(user)
        if not isinstance(levels, Mapping) or not levels:
            raise ValidationError("Levels must map employee ids to a level")

        parsed = {}
        for emp_id, value in levels.items():
            employee = self._employees.get(emp_id)
            if not employee or employee.company_name != company_name:
                raise NotFoundError("Employee not found")
            parsed[emp_id] = parse_enum(HierarchyLevel, value, "Level")

        now = now or now_utc()
        for emp_id, level in parsed.items():
            self._levels.set_level(emp_id=emp_id, level=level, company_name=company_name, updated_at=now)
        logger.info("hierarchy_updated", company_name=company_name, count=len(parsed))
        return len(parsed)
