from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import current_user, employer_required
from ..common.http import json_body, ok
from ..common.serializers import to_json


def register(app: Flask, container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @employer_required
    def list_employees():
        user = current_user()
        return jsonify(
            {
                "employees": to_json(container.employee_service.list_for(user)),
                "seatsRemaining": container.employee_service.seats_remaining(user),
            }
        )

    @app.route("/api/employees/add", methods=["POST"], endpoint="add_employee")
    @employer_required
    def add_employee():
        data = json_body()
        uid = container.employee_service.add_employee(
            user=current_user(),
            name=data.get("name"),
            email=data.get("email"),
            password=data.get("password"),
            role=data.get("role"),
            department=data.get("department"),
        )
        return ok(uid=uid)

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="remove_employee")
    @employer_required
    def remove_employee(employee_id: str):
        container.employee_service.remove(user=current_user(), employee_id=employee_id)
        return ok()

    @app.route("/api/employees/<employee_id>/leave-balance", methods=["PATCH"], endpoint="set_employee_leave_balance")
    @employer_required
    def set_leave_balance(employee_id: str):
        container.employee_service.update_leave_balance(
            user=current_user(), employee_id=employee_id, balance=json_body().get("balance")
        )
        return ok()

    @app.route("/api/employees/<employee_id>/permissions", methods=["PATCH"], endpoint="set_employee_permissions")
    @employer_required
    def set_permissions(employee_id: str):
        container.employee_service.update_permissions(
            user=current_user(), employee_id=employee_id, permissions=json_body().get("permissions")
        )
        return ok()

    @app.route("/api/employees/<employee_id>/salary", methods=["PATCH"], endpoint="set_employee_salary")
    @employer_required
    def set_salary(employee_id: str):
        container.employee_service.update_salary(
            user=current_user(), employee_id=employee_id, salary=json_body().get("salary")
        )
        return ok()
