from __future__ import annotations

from flask import Flask, jsonify

from ..auth.guards import current_user, employer_required, session_required
from ..common.http import json_body, ok
from ..common.serializers import to_json


def register(app: Flask, container) -> None:
    @app.route("/api/documents", methods=["GET"], endpoint="list_documents")
    @session_required
    def list_documents():
        return jsonify({"documents": to_json(container.document_service.list_for(current_user()))})

    @app.route("/api/documents/request", methods=["POST"], endpoint="request_document")
    @employer_required
    def request_document():
        data = json_body()
        document_id = container.document_service.request(
            user=current_user(), emp_email=data.get("empEmail"), title=data.get("title")
        )
        return ok(id=document_id), 201

    @app.route("/api/documents/<document_id>/upload", methods=["POST"], endpoint="upload_document")
    @session_required
    def upload_document(document_id: str):
        container.document_service.upload(user=current_user(), document_id=document_id, url=json_body().get("url"))
        return ok()

    @app.route("/api/documents/<document_id>/approve", methods=["POST"], endpoint="approve_document")
    @employer_required
    def approve_document(document_id: str):
        container.document_service.approve(user=current_user(), document_id=document_id)
        return ok()

    @app.route("/api/documents/<document_id>/reject", methods=["POST"], endpoint="reject_document")
    @employer_required
    def reject_document(document_id: str):
        container.document_service.reject(user=current_user(), document_id=document_id)
        return ok()

    @app.route("/api/documents/request-bulk", methods=["POST"], endpoint="request_documents")
    @employer_required
    def request_documents():
        data = json_body()
        ids = container.document_service.request_many(
            user=current_user(), emp_email=data.get("empEmail"), titles=data.get("titles")
        )
        return ok(ids=ids), 201

    @app.route("/api/documents/templates", methods=["GET"], endpoint="list_document_templates")
    @employer_required
    def list_document_templates():
        return jsonify({"templates": to_json(container.document_service.list_templates(current_user()))})

    @app.route("/api/documents/templates", methods=["POST"], endpoint="add_document_template")
    @employer_required
    def add_document_template():
        data = json_body()
        template_id = container.document_service.add_template(
            user=current_user(), title=data.get("title"), required=data.get("required", True)
        )
        return ok(id=template_id), 201

    @app.route("/api/documents/templates/<template_id>", methods=["DELETE"], endpoint="delete_document_template")
    @employer_required
    def delete_document_template(template_id: str):
        container.document_service.delete_template(user=current_user(), template_id=template_id)
        return ok()
