from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import current_user, employer_required, session_required
from ..common.http import json_body, ok
from ..common.serializers import to_json


def register(app: Flask, container) -> None:
    @app.route("/api/profile-updates", methods=["GET"], endpoint="list_profile_updates")
    @session_required
    def list_profile_updates():
        user = current_user()
        result = container.profile_update_service.list_for(user)
        if user.is_employer:
            return jsonify(to_json(result))
        return jsonify({"requests": to_json(result)})

    @app.route("/api/profile-updates", methods=["POST"], endpoint="submit_profile_update")
    @session_required
    def submit_profile_update():
        request_id = container.profile_update_service.submit(user=current_user(), changes=json_body().get("changes"))
        return ok(id=request_id), 201

    @app.route("/api/profile-updates/<request_id>/approve", methods=["POST"], endpoint="approve_profile_update")
    @employer_required
    def approve_profile_update(request_id: str):
        container.profile_update_service.approve(user=current_user(), request_id=request_id)
        return ok()

    @app.route("/api/profile-updates/<request_id>/reject", methods=["POST"], endpoint="reject_profile_update")
    @employer_required
    def reject_profile_update(request_id: str):
        container.profile_update_service.reject(user=current_user(), request_id=request_id)
        return ok()
