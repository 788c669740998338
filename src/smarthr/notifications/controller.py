from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import current_user, session_required
from ..common.http import ok
from ..common.serializers import to_json


def register(app: Flask, container) -> None:
    @app.route("/api/notifications", methods=["GET"], endpoint="list_notifications")
    @session_required
    def list_notifications():
        return jsonify({"notifications": to_json(container.notification_service.list_for(current_user()))})

    @app.route("/api/notifications/<notification_id>/read", methods=["POST"], endpoint="read_notification")
    @session_required
    def read_notification(notification_id: str):
        container.notification_service.mark_read(user=current_user(), notification_id=notification_id)
        return ok()
