from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role, UserStatus


@dataclass(frozen=True)
class User:
    """Profile document stored under ``users/<uid>``."""

    uid: str
    email: str
    role: Role
    status: UserStatus
    company_name: Optional[str] = None
    created_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None


@dataclass(frozen=True)
class SessionUser:
    """Caller identity resolved from a verified session cookie."""

    uid: str
    email: str
    role: Role
    status: UserStatus
    company_name: Optional[str] = None

    @property
    def is_employer(self) -> bool:
        return self.role == Role.EMPLOYER

    @property
    def display_name(self) -> str:
        return (self.email or "").split("@")[0] or "Employee"
