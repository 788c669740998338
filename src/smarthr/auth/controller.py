from __future__ import annotations

from flask import Flask, jsonify, redirect, request, url_for

from ..common.http import json_body
from ..core.constants import SESSION_COOKIE_NAME
from ..core.exceptions import AuthenticationError
from ..core.logging import get_logger
from .guards import current_user, load_session_user, session_required

logger = get_logger(__name__)


def register(app: Flask, container) -> None:
    def _clear_cookie(resp):
        resp.delete_cookie(SESSION_COOKIE_NAME, path="/")
        return resp

    @app.before_request
    def guard_pages():
        path = request.path
        has_cookie = bool(request.cookies.get(SESSION_COOKIE_NAME))

        if path.startswith("/dashboard") or path == "/onboarding":
            if not has_cookie:
                return redirect(url_for("login_page"))
            try:
                load_session_user()
            except AuthenticationError:
                logger.info("session_rejected", path=path)
                return _clear_cookie(redirect(url_for("login_page")))
            return None

        if path == "/login" and has_cookie:
            try:
                load_session_user()
            except AuthenticationError:
                return None
            return redirect(url_for("dashboard_home"))
        return None

    @app.route("/api/auth/session", methods=["POST"], endpoint="create_session")
    def create_session():
        cookie = container.auth_service.create_session(json_body().get("idToken"))
        resp = jsonify({"success": True})
        resp.set_cookie(
            SESSION_COOKIE_NAME,
            cookie,
            max_age=int(container.auth_service.session_lifetime.total_seconds()),
            httponly=True,
            secure=bool(app.config.get("SESSION_COOKIE_SECURE")),
            path="/",
            samesite="Lax",
        )
        return resp

    @app.route("/api/auth/session", methods=["DELETE"], endpoint="delete_session")
    def delete_session():
        return _clear_cookie(jsonify({"success": True}))

    @app.route("/api/auth/verify", methods=["GET"], endpoint="verify_session")
    @session_required
    def verify_session():
        user = current_user()
        return jsonify({"uid": user.uid, "email": user.email, "role": user.role.value})

    @app.route("/api/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = json_body()
        user = container.auth_service.sign_up(id_token=data.get("idToken"), role=data.get("role"))
        return jsonify({"success": True, "uid": user.uid, "role": user.role.value}), 201

    @app.route("/api/auth/accept-invitation", methods=["POST"], endpoint="accept_invitation")
    @session_required
    def accept_invitation():
        container.auth_service.accept_invitation(current_user())
        return jsonify({"success": True})

    @app.route("/api/auth/delete-account", methods=["DELETE"], endpoint="delete_account")
    @session_required
    def delete_account():
        container.auth_service.delete_organization(current_user())
        resp = jsonify({"success": True, "message": "Organization deleted successfully"})
        return _clear_cookie(resp)
