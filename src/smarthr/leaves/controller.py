from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_user, employer_required, session_required
from ..common.http import json_body, ok
from ..common.serializers import to_json


def register(app: Flask, container) -> None:
    @app.route("/api/leaves", methods=["GET"], endpoint="list_leaves")
    @session_required
    def list_leaves():
        items = container.leave_service.list_for(current_user(), type=request.args.get("type") or None)
        return jsonify({"leaves": to_json(items)})

    @app.route("/api/leaves", methods=["POST"], endpoint="request_leave")
    @session_required
    def request_leave():
        data = json_body()
        leave_id = container.leave_service.request_leave(
            user=current_user(),
            type=data.get("type"),
            from_date=data.get("from"),
            to_date=data.get("to"),
            is_half_day=bool(data.get("isHalfDay")),
            description=data.get("description"),
        )
        return ok(id=leave_id), 201

    @app.route("/api/leaves/<leave_id>/approve", methods=["POST"], endpoint="approve_leave")
    @employer_required
    def approve_leave(leave_id: str):
        container.leave_service.approve(user=current_user(), leave_id=leave_id)
        return ok()

    @app.route("/api/leaves/<leave_id>/deny", methods=["POST"], endpoint="deny_leave")
    @employer_required
    def deny_leave(leave_id: str):
        container.leave_service.deny(user=current_user(), leave_id=leave_id)
        return ok()

    @app.route("/api/leave-balances", methods=["GET"], endpoint="list_leave_balances")
    @session_required
    def list_leave_balances():
        return jsonify({"balances": to_json(container.leave_service.list_balances(current_user()))})

    @app.route("/api/leave-balances", methods=["POST"], endpoint="allocate_leave_balances")
    @employer_required
    def allocate_leave_balances():
        data = json_body()
        ids = container.leave_service.allocate_balances(
            user=current_user(),
            emp_email=data.get("empEmail"),
            sick=data.get("sick"),
            annual=data.get("annual"),
            casual=data.get("casual"),
            other=data.get("other"),
        )
        return ok(ids=ids), 201

    @app.route("/api/leave-balances/<balance_id>", methods=["PATCH"], endpoint="update_leave_balance")
    @employer_required
    def update_leave_balance(balance_id: str):
        container.leave_service.update_balance(user=current_user(), balance_id=balance_id, balance=json_body().get("balance"))
        return ok()

    @app.route("/api/leave-balances/<balance_id>", methods=["DELETE"], endpoint="delete_leave_balance")
    @employer_required
    def delete_leave_balance(balance_id: str):
        container.leave_service.delete_balance(user=current_user(), balance_id=balance_id)
        return ok()
