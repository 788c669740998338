from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

from ..core.enums import TeamHierarchy, TeamType
from .model import Team


class TeamRepository(Protocol):
    def create(
        self,
        *,
        name: str,
        leader_email: str,
        member_emails: Sequence[str],
        team_type: TeamType,
        hierarchy: TeamHierarchy,
        company_name: str,
        created_at: datetime,
    ) -> str:
        raise NotImplementedError

    def get(self, team_id: str) -> Optional[Team]:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[Team]:
        raise NotImplementedError

    def update(self, team_id: str, **fields: Any) -> bool:
        raise NotImplementedError

    def delete(self, team_id: str) -> bool:
        raise NotImplementedError
