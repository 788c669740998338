from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Sequence

from ..common.serializers import camelize
from ..core.enums import TeamHierarchy, TeamType
from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import Team
from .repository import TeamRepository


def _to_team(data: Dict[str, Any]) -> Team:
    return Team(
        id=data["id"],
        name=data.get("name") or "",
        leader_email=data.get("leaderEmail") or "",
        company_name=data.get("companyName") or "",
        member_emails=list(data.get("memberEmails") or []),
        team_type=TeamType(data.get("teamType") or TeamType.PERMANENT.value),
        hierarchy=TeamHierarchy(data.get("hierarchy") or TeamHierarchy.FLAT.value),
        created_at=data.get("createdAt"),
    )


class FirestoreTeamRepository(FirestoreRepository, TeamRepository):
    collection = collections.TEAMS

    def create(self, *, name, leader_email, member_emails, team_type, hierarchy, company_name, created_at) -> str:
        return self._add(
            {
                "name": name,
                "leaderEmail": leader_email,
                "memberEmails": list(member_emails),
                "teamType": team_type.value,
                "hierarchy": hierarchy.value,
                "companyName": company_name,
                "createdAt": created_at,
            }
        )

    def get(self, team_id: str) -> Optional[Team]:
        data = self._fetch(team_id)
        return _to_team(data) if data else None

    def list_by_company(self, company_name: str) -> Sequence[Team]:
        return [_to_team(r) for r in self._where(companyName=company_name)]

    def update(self, team_id: str, **fields: Any) -> bool:
        patch = {camelize(k): (v.value if isinstance(v, Enum) else v) for k, v in fields.items()}
        return self._update(team_id, patch)

    def delete(self, team_id: str) -> bool:
        return self._delete(team_id)
