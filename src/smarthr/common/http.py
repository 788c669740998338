from __future__ import annotations

from typing import Any, Dict

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError
from ..core.logging import get_logger
from .serializers import to_json

logger = get_logger(__name__)


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def ok(**payload: Any):
    return jsonify({"success": True, **{k: to_json(v) for k, v in payload.items()}})


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        body = {"error": str(e)}
        if e.code:
            body["code"] = e.code
        if e.status_code >= 500:
            logger.error("domain_error", path=request.path, error=str(e), status=e.status_code)
        return jsonify(body), e.status_code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("unhandled_error", path=request.path, method=request.method)
        return jsonify({"error": "Internal server error"}), 500
