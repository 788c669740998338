from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Notification:
    id: str
    title: str
    message: str
    timestamp: datetime
    is_read: bool = False
    target_email: Optional[str] = None
    target_role: Optional[Role] = None
    company_name: Optional[str] = None

    def is_for(self, *, email: str, role: Role) -> bool:
        if self.target_email:
            return self.target_email == email
        return self.target_role == role
