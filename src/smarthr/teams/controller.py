from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import current_user, employer_required, session_required
from ..common.http import json_body, ok
from ..common.serializers import to_json


def register(app: Flask, container) -> None:
    @app.route("/api/teams", methods=["GET"], endpoint="list_teams")
    @session_required
    def list_teams():
        return jsonify({"teams": to_json(container.team_service.list_for(current_user()))})

    @app.route("/api/teams", methods=["POST"], endpoint="create_team")
    @employer_required
    def create_team():
        data = json_body()
        team_id = container.team_service.create(
            user=current_user(),
            name=data.get("name"),
            leader_email=data.get("leaderEmail"),
            member_emails=data.get("memberEmails"),
            team_type=data.get("teamType"),
            hierarchy=data.get("hierarchy"),
        )
        return ok(id=team_id), 201

    @app.route("/api/teams/<team_id>", methods=["PUT"], endpoint="update_team")
    @session_required
    def update_team(team_id: str):
        data = json_body()
        container.team_service.update(
            user=current_user(),
            team_id=team_id,
            name=data.get("name"),
            leader_email=data.get("leaderEmail"),
            member_emails=data.get("memberEmails"),
            team_type=data.get("teamType"),
            hierarchy=data.get("hierarchy"),
        )
        return ok()

    @app.route("/api/teams/<team_id>", methods=["DELETE"], endpoint="delete_team")
    @employer_required
    def delete_team(team_id: str):
        container.team_service.delete(user=current_user(), team_id=team_id)
        return ok()
