"""Seed a demo organization into Firestore.

Creates an employer account, registers its company and invites a few
employees through the service layer, so seat limits and defaults apply.
"""

from __future__ import annotations

import importlib
import os

from dotenv import load_dotenv

from smarthr.auth.model import SessionUser
from smarthr.common.datetime_utils import now_utc
from smarthr.config import get_settings_module
from smarthr.container import build_container
from smarthr.core.enums import Role, UserStatus
from smarthr.core.exceptions import DomainError
from smarthr.core.logging import configure_logging, get_logger

logger = get_logger(__name__)

DEMO_EMPLOYEES = [
    ("Asha Rao", "asha@example.com", "Engineer", "Engineering"),
    ("Vikram Shah", "vikram@example.com", "Designer", "Design"),
    ("Meera Iyer", "meera@example.com", "Accountant", "Finance"),
]


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(level="INFO")
    container = build_container(firebase_config=settings.FIREBASE_CONFIG, razorpay_config=settings.RAZORPAY_CONFIG)

    email = os.getenv("DEMO_EMPLOYER_EMAIL", "owner@example.com")
    password = os.getenv("DEMO_PASSWORD", "changeme123")
    company_name = os.getenv("DEMO_COMPANY", "Acme Demo")

    uid = container.identity.create_user(email=email, password=password, display_name="Demo Owner")
    container.users_repo.create(uid=uid, email=email, role=Role.EMPLOYER, created_at=now_utc())

    owner = SessionUser(uid=uid, email=email, role=Role.EMPLOYER, status=UserStatus.ACTIVE)
    container.company_service.onboard(user=owner, name=company_name, industry="Software", size="11-50", timezone="Asia/Kolkata")
    owner = SessionUser(uid=uid, email=email, role=Role.EMPLOYER, status=UserStatus.ACTIVE, company_name=company_name)

    for name, emp_email, role, department in DEMO_EMPLOYEES:
        try:
            container.employee_service.add_employee(
                user=owner,
                name=name,
                email=emp_email,
                password=password,
                role=role,
                department=department,
            )
        except DomainError as e:
            logger.warning("demo_employee_skipped", email=emp_email, error=str(e))

    logger.info("demo_seeded", company_name=company_name, employer=email)


if __name__ == "__main__":
    main()
