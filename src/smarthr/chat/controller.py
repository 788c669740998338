from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_user, session_required
from ..common.http import json_body, ok
from ..common.serializers import to_json


def register(app: Flask, container) -> None:
    @app.route("/api/chat/messages", methods=["POST"], endpoint="send_message")
    @session_required
    def send_message():
        data = json_body()
        message_id = container.chat_service.send(user=current_user(), receiver=data.get("receiver"), text=data.get("text"))
        return ok(id=message_id), 201

    @app.route("/api/chat/messages", methods=["GET"], endpoint="conversation")
    @session_required
    def conversation():
        items = container.chat_service.conversation(current_user(), request.args.get("with"))
        return jsonify({"messages": to_json(items)})

    @app.route("/api/chat/contacts", methods=["GET"], endpoint="chat_contacts")
    @session_required
    def chat_contacts():
        return jsonify({"contacts": to_json(container.chat_service.contacts(current_user()))})
