from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class ChatMessage:
    id: str
    sender: str
    receiver: str
    text: str
    timestamp: datetime
    company_name: str

    def other_party(self, email: str) -> str:
        return self.receiver if self.sender == email else self.sender


@dataclass(frozen=True)
class Contact:
    email: str
    role: Role
    last_message: Optional[ChatMessage] = None
