from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import current_user, employer_required
from ..common.http import json_body, ok
from ..common.serializers import to_json


def register(app: Flask, container) -> None:
    @app.route("/api/hierarchy", methods=["GET"], endpoint="org_chart")
    @employer_required
    def org_chart():
        return jsonify({"levels": to_json(container.hierarchy_service.chart(current_user()))})

    @app.route("/api/hierarchy", methods=["PUT"], endpoint="set_hierarchy_levels")
    @employer_required
    def set_hierarchy_levels():
        updated = container.hierarchy_service.set_levels(user=current_user(), levels=json_body().get("levels"))
        return ok(updated=updated)
