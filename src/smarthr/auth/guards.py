"""Route decorators that resolve the session cookie into ``g.user``."""
from __future__ import annotations

from functools import wraps

from flask import current_app, g, request

from ..core.constants import SESSION_COOKIE_NAME
from .model import SessionUser
from .policies import require_employer

EXTENSION_KEY = "smarthr"


def get_container():
    return current_app.extensions[EXTENSION_KEY]


def current_user() -> SessionUser:
    return g.user


def load_session_user() -> SessionUser:
    """Verify the cookie once per request; raises AuthenticationError."""
    if getattr(g, "user", None) is None:
        cookie = request.cookies.get(SESSION_COOKIE_NAME)
        g.user = get_container().auth_service.verify_session(cookie)
    return g.user


def session_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        load_session_user()
        return view(*args, **kwargs)

    return wrapper


def employer_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        require_employer(load_session_user())
        return view(*args, **kwargs)

    return wrapper
