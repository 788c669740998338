from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import ChatMessage


class ChatRepository(Protocol):
    def create(self, *, sender: str, receiver: str, text: str, timestamp: datetime, company_name: str) -> str:
        raise NotImplementedError

    def list_involving(self, company_name: str, email: str) -> Sequence[ChatMessage]:
        """Messages sent or received by ``email``."""

        raise NotImplementedError
