from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import current_user, employer_required, session_required
from ..common.http import json_body, ok
from ..common.serializers import to_json


def register(app: Flask, container) -> None:
    @app.route("/api/jobs", methods=["GET"], endpoint="list_jobs")
    @session_required
    def list_jobs():
        return jsonify({"jobs": to_json(container.recruitment_service.list_for(current_user()))})

    @app.route("/api/jobs", methods=["POST"], endpoint="post_job")
    @employer_required
    def post_job():
        data = json_body()
        job_id = container.recruitment_service.post_job(
            user=current_user(),
            title=data.get("title"),
            department=data.get("department"),
            type=data.get("type"),
            description=data.get("description"),
        )
        return ok(id=job_id), 201

    @app.route("/api/jobs/<job_id>/close", methods=["POST"], endpoint="close_job")
    @employer_required
    def close_job(job_id: str):
        container.recruitment_service.close(user=current_user(), job_id=job_id)
        return ok()

    @app.route("/api/jobs/<job_id>", methods=["DELETE"], endpoint="delete_job")
    @employer_required
    def delete_job(job_id: str):
        container.recruitment_service.delete(user=current_user(), job_id=job_id)
        return ok()
