from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .auth.guards import EXTENSION_KEY
from .common.http import register_error_handlers
from .config import get_settings_module
from .container import Container, build_container
from .core.logging import configure_logging, get_logger

from .announcements.controller import register as register_announcements
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .billing.controller import register as register_billing
from .chat.controller import register as register_chat
from .companies.controller import register as register_companies
from .documents.controller import register as register_documents
from .employees.controller import register as register_employees
from .hierarchy.controller import register as register_hierarchy
from .leaves.controller import register as register_leaves
from .notifications.controller import register as register_notifications
from .payroll.controller import register as register_payroll
from .performance.controller import register as register_performance
from .profile_updates.controller import register as register_profile_updates
from .recruitment.controller import register as register_recruitment
from .tasks.controller import register as register_tasks
from .teams.controller import register as register_teams
from .views.controller import register as register_views

logger = get_logger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="templates", static_folder="static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_COOKIE_SECURE"] = bool(getattr(settings, "SESSION_COOKIE_SECURE", False))
    # Flask's own cookie must not collide with the identity session cookie.
    app.config["SESSION_COOKIE_NAME"] = "smarthr_ui"

    firebase_config = getattr(settings, "FIREBASE_CONFIG")
    razorpay_config = getattr(settings, "RAZORPAY_CONFIG")
    app.config["FIREBASE_WEB_CONFIG"] = getattr(settings, "FIREBASE_WEB_CONFIG", {})
    app.config["RAZORPAY_KEY_ID"] = razorpay_config.get("key_id", "")

    configure_logging(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")),
        json_logs=bool(getattr(settings, "LOG_JSON", False)),
    )
    logger.info("app_starting", settings=settings_module, firebase_project=firebase_config.get("project_id"))

    if container is None:
        container = build_container(firebase_config=firebase_config, razorpay_config=razorpay_config)
    app.extensions[EXTENSION_KEY] = container

    register_error_handlers(app)
    register_auth(app, container)
    register_views(app, container)
    register_companies(app, container)
    register_employees(app, container)
    register_announcements(app, container)
    register_leaves(app, container)
    register_payroll(app, container)
    register_billing(app, container)
    register_teams(app, container)
    register_chat(app, container)
    register_recruitment(app, container)
    register_profile_updates(app, container)
    register_notifications(app, container)
    register_attendance(app, container)
    register_tasks(app, container)
    register_documents(app, container)
    register_hierarchy(app, container)
    register_performance(app, container)

    return app
