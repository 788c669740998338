from __future__ import annotations

from flask import Flask, abort, redirect, render_template, url_for

from ..auth.guards import current_user
from ..core.enums import Role

# section -> (title, roles allowed to open it)
SECTIONS = {
    "announcements": ("Announcements", {Role.EMPLOYER, Role.EMPLOYEE}),
    "leaves": ("Leave Management", {Role.EMPLOYER, Role.EMPLOYEE}),
    "payroll": ("Payroll", {Role.EMPLOYER}),
    "payslips": ("Payslips", {Role.EMPLOYER, Role.EMPLOYEE}),
    "billing": ("Billing", {Role.EMPLOYER}),
    "employees": ("Employees", {Role.EMPLOYER}),
    "teams": ("Teams", {Role.EMPLOYER, Role.EMPLOYEE}),
    "chat": ("Chat", {Role.EMPLOYER, Role.EMPLOYEE}),
    "recruitment": ("Recruitment", {Role.EMPLOYER, Role.EMPLOYEE}),
    "profile": ("My Profile", {Role.EMPLOYEE}),
    "profile-requests": ("Profile Requests", {Role.EMPLOYER}),
    "tasks": ("Tasks", {Role.EMPLOYER, Role.EMPLOYEE}),
    "documents": ("Documents", {Role.EMPLOYER, Role.EMPLOYEE}),
    "templates": ("Document Templates", {Role.EMPLOYER}),
    "hierarchy": ("Org Hierarchy", {Role.EMPLOYER}),
    "performance": ("Performance", {Role.EMPLOYER}),
}


def register(app: Flask, container) -> None:
    def _nav(user):
        return [(key, title) for key, (title, roles) in SECTIONS.items() if user.role in roles]

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return redirect(url_for("dashboard_home"))

    @app.route("/login", methods=["GET"], endpoint="login_page")
    def login_page():
        return render_template("login.html", firebase_config=app.config.get("FIREBASE_WEB_CONFIG", {}))

    @app.route("/onboarding", methods=["GET"], endpoint="onboarding_page")
    def onboarding_page():
        user = current_user()
        if user.role != Role.EMPLOYER:
            return redirect(url_for("dashboard_home"))
        return render_template("onboarding.html", current_user=user)

    @app.route("/dashboard", methods=["GET"], endpoint="dashboard_home")
    def dashboard_home():
        user = current_user()
        if user.role == Role.EMPLOYER and not user.company_name:
            return redirect(url_for("onboarding_page"))
        return render_template("dashboard/home.html", current_user=user, nav=_nav(user), active_page="home")

    @app.route("/dashboard/<section>", methods=["GET"], endpoint="dashboard_section")
    def dashboard_section(section: str):
        if section not in SECTIONS:
            abort(404)
        user = current_user()
        title, roles = SECTIONS[section]
        if user.role not in roles:
            return render_template("403.html", current_user=user, nav=_nav(user), title=title), 403
        return render_template(
            f"dashboard/{section.replace('-', '_')}.html",
            current_user=user,
            nav=_nav(user),
            active_page=section,
            title=title,
            razorpay_key_id=app.config.get("RAZORPAY_KEY_ID", ""),
        )
