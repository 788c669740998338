from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import current_user, employer_required
from ..common.serializers import to_json


def register(app: Flask, container) -> None:
    @app.route("/api/performance/<employee_id>", methods=["GET"], endpoint="performance_review")
    @employer_required
    def performance_review(employee_id: str):
        report = container.performance_service.review(user=current_user(), employee_id=employee_id)
        return jsonify({"report": to_json(report)})
