from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_user, session_required
from ..common.http import json_body, ok
from ..common.serializers import to_json


def register(app: Flask, container) -> None:
    @app.route("/api/announcements", methods=["GET"], endpoint="list_announcements")
    @session_required
    def list_announcements():
        active_only = request.args.get("active") in {"1", "true"}
        items = container.announcement_service.list_for(current_user(), active_only=active_only)
        return jsonify({"announcements": to_json(items)})

    @app.route("/api/announcements/post", methods=["POST"], endpoint="post_announcement")
    @session_required
    def post_announcement():
        data = json_body()
        announcement_id = container.announcement_service.post(
            user=current_user(),
            title=data.get("title"),
            message=data.get("message"),
            type=data.get("type"),
            author_name=data.get("authorName"),
            start_time=data.get("startTime"),
            end_time=data.get("endTime"),
        )
        return ok(id=announcement_id)

    @app.route("/api/announcements/delete", methods=["DELETE"], endpoint="delete_announcement")
    @session_required
    def delete_announcement():
        container.announcement_service.delete(user=current_user(), announcement_id=request.args.get("id"))
        return ok()
