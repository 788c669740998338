from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from ..auth.model import SessionUser
from ..auth.policies import require_company, require_employer
from ..common.datetime_utils import now_utc
from ..common.validators import parse_enum, require_email_list, require_non_empty
from ..core.enums import TeamHierarchy, TeamType
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Team
from .repository import TeamRepository


class TeamService:
    def __init__(self, teams: TeamRepository):
        self._teams = teams

    def create(
        self,
        *,
        user: SessionUser,
        name: str,
        leader_email: str,
        member_emails: Any = None,
        team_type: Optional[str] = None,
        hierarchy: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        require_employer(user)
        leader = require_non_empty(leader_email, "Team leader").lower()
        members = [m for m in require_email_list(member_emails, "Members") if m != leader]

        return self._teams.create(
            name=require_non_empty(name, "Team name"),
            leader_email=leader,
            member_emails=sorted(set(members)),
            team_type=parse_enum(TeamType, team_type, "Team type", default=TeamType.PERMANENT),
            hierarchy=parse_enum(TeamHierarchy, hierarchy, "Hierarchy", default=TeamHierarchy.FLAT),
            company_name=require_company(user),
            created_at=now or now_utc(),
        )

    def _get_owned(self, user: SessionUser, team_id: str) -> Team:
        team = self._teams.get(team_id)
        if not team or team.company_name != user.company_name:
            raise NotFoundError("Team not found")
        return team

    def update(
        self,
        *,
        user: SessionUser,
        team_id: str,
        name: Optional[str] = None,
        leader_email: Optional[str] = None,
        member_emails: Any = None,
        team_type: Optional[str] = None,
        hierarchy: Optional[str] = None,
    ) -> None:
        """Employers edit any team; a team leader may edit their own."""
        team = self._get_owned(user, team_id)
        if not user.is_employer and team.leader_email != user.email:
            raise AuthorizationError("Only the employer or the team leader can edit this team")

        fields = {}
        if name is not None:
            fields["name"] = require_non_empty(name, "Team name")
        if leader_email is not None:
            fields["leader_email"] = require_non_empty(leader_email, "Team leader").lower()
        if member_emails is not None:
            leader = fields.get("leader_email", team.leader_email)
            fields["member_emails"] = sorted({m for m in require_email_list(member_emails, "Members") if m != leader})
        if team_type:
            fields["team_type"] = parse_enum(TeamType, team_type, "Team type")
        if hierarchy:
            fields["hierarchy"] = parse_enum(TeamHierarchy, hierarchy, "Hierarchy")
        if fields:
            self._teams.update(team_id, **fields)

    def delete(self, *, user: SessionUser, team_id: str) -> None:
        require_employer(user)
        self._get_owned(user, team_id)
        self._teams.delete(team_id)

    def list_for(self, user: SessionUser) -> Sequence[Team]:
        items = list(self._teams.list_by_company(require_company(user)))
        if not user.is_employer:
            items = [t for t in items if t.includes(user.email)]
        items.sort(key=lambda t: t.name.lower())
        return items
