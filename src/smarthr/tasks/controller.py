from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import current_user, employer_required, session_required
from ..common.http import json_body, ok
from ..common.serializers import to_json


def register(app: Flask, container) -> None:
    @app.route("/api/tasks", methods=["GET"], endpoint="list_tasks")
    @session_required
    def list_tasks():
        return jsonify({"tasks": to_json(container.task_service.list_for(current_user()))})

    @app.route("/api/tasks", methods=["POST"], endpoint="assign_task")
    @employer_required
    def assign_task():
        data = json_body()
        task_id = container.task_service.assign(
            user=current_user(),
            title=data.get("title"),
            assignee_email=data.get("assigneeEmail"),
            description=data.get("description"),
            priority=data.get("priority"),
            due_date=data.get("dueDate"),
        )
        return ok(id=task_id), 201

    @app.route("/api/tasks/<task_id>/status", methods=["PATCH"], endpoint="update_task_status")
    @session_required
    def update_task_status(task_id: str):
        container.task_service.update_status(user=current_user(), task_id=task_id, status=json_body().get("status"))
        return ok()
