from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import current_user, session_required
from ..common.http import ok
from ..common.serializers import to_json


def register(app: Flask, container) -> None:
    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="clock_in")
    @session_required
    def clock_in():
        return ok(id=container.attendance_service.clock_in(current_user())), 201

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="clock_out")
    @session_required
    def clock_out():
        return ok(id=container.attendance_service.clock_out(current_user())), 201

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    @session_required
    def list_attendance():
        return jsonify(to_json(container.attendance_service.list_for(current_user())))
