from __future__ import annotations

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import SessionUser


def require_employer(user: SessionUser, message: str = "Permission denied") -> None:
    if user.role != Role.EMPLOYER:
        raise AuthorizationError(message)


def require_employee(user: SessionUser, message: str = "Only employees can do this") -> None:
    if user.role != Role.EMPLOYEE:
        raise AuthorizationError(message)


def require_company(user: SessionUser) -> str:
    if not user.company_name:
        raise ValidationError("No company associated with this account")
    return user.company_name
