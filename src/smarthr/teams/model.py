from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..core.enums import TeamHierarchy, TeamType


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    leader_email: str
    company_name: str
    member_emails: List[str] = field(default_factory=list)
    team_type: TeamType = TeamType.PERMANENT
    hierarchy: TeamHierarchy = TeamHierarchy.FLAT
    created_at: Optional[datetime] = None

    def includes(self, email: str) -> bool:
        return email == self.leader_email or email in self.member_emails
