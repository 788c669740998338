from __future__ import annotations

from typing import Any, Dict, Sequence

from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import ChatMessage
from .repository import ChatRepository


def _to_message(data: Dict[str, Any]) -> ChatMessage:
    return ChatMessage(
        id=data["id"],
        sender=data.get("sender") or "",
        receiver=data.get("receiver") or "",
        text=data.get("text") or "",
        timestamp=data.get("timestamp"),
        company_name=data.get("companyName") or "",
    )


class FirestoreChatRepository(FirestoreRepository, ChatRepository):
    collection = collections.CHAT_MESSAGES

    def create(self, *, sender, receiver, text, timestamp, company_name) -> str:
        return self._add(
            {
                "sender": sender,
                "receiver": receiver,
                "text": text,
                "timestamp": timestamp,
                "companyName": company_name,
            }
        )

    def list_involving(self, company_name: str, email: str) -> Sequence[ChatMessage]:
        sent = self._where(companyName=company_name, sender=email)
        received = self._where(companyName=company_name, receiver=email)
        # A message to oneself shows up in both queries.
        rows = {r["id"]: r for r in sent + received}
        return [_to_message(r) for r in rows.values()]
