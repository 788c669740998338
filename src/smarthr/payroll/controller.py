from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import current_user, employer_required, session_required
from ..common.http import json_body, ok
from ..common.serializers import to_json


def register(app: Flask, container) -> None:
    @app.route("/api/payroll/run", methods=["POST"], endpoint="run_payroll")
    @employer_required
    def run_payroll():
        ids = container.payroll_service.run(user=current_user())
        return ok(created=len(ids))

    @app.route("/api/payroll", methods=["GET"], endpoint="list_payroll")
    @session_required
    def list_payroll():
        user = current_user()
        summary = container.payroll_service.list_for(user)
        if not user.is_employer:
            return jsonify({"payslips": to_json(summary.entries)})
        return jsonify(
            {
                "payroll": to_json(summary.entries),
                "totals": {"total": summary.total, "withholding": summary.withholding},
            }
        )

    @app.route("/api/payslips/request", methods=["POST"], endpoint="request_payslip")
    @session_required
    def request_payslip():
        request_id = container.payroll_service.request_payslip(user=current_user(), period=json_body().get("period"))
        return ok(id=request_id), 201

    @app.route("/api/payslips/requests", methods=["GET"], endpoint="list_payslip_requests")
    @session_required
    def list_payslip_requests():
        return jsonify({"requests": to_json(container.payroll_service.list_payslip_requests(current_user()))})

    @app.route("/api/payslips/requests/<request_id>/fulfil", methods=["POST"], endpoint="fulfil_payslip_request")
    @employer_required
    def fulfil_payslip_request(request_id: str):
        container.payroll_service.fulfil_payslip_request(user=current_user(), request_id=request_id)
        return ok()
