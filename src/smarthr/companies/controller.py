from __future__ import annotations

from flask import Flask

from ..auth.guards import current_user, session_required
from ..common.http import json_body, ok


def register(app: Flask, container) -> None:
    @app.route("/api/onboarding", methods=["POST"], endpoint="onboard_company")
    @session_required
    def onboard_company():
        data = json_body()
        company = container.company_service.onboard(
            user=current_user(),
            name=data.get("name"),
            industry=data.get("industry"),
            size=data.get("size"),
            timezone=data.get("timezone"),
        )
        return ok(company=company)
