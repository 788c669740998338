from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..auth.model import SessionUser
from ..auth.policies import require_company
from ..auth.repository import UserRepository
from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import ChatMessage, Contact
from .repository import ChatRepository


class ChatService:
    def __init__(self, messages: ChatRepository, users: UserRepository):
        self._messages = messages
        self._users = users

    def send(self, *, user: SessionUser, receiver: str, text: str, now: Optional[datetime] = None) -> str:
        company_name = require_company(user)
        receiver = require_non_empty(receiver, "Receiver").lower()
        text = (text or "").strip()
        if not text:
            raise ValidationError("Message cannot be empty")
        if receiver == user.email:
            raise ValidationError("You cannot message yourself")
        if receiver not in {u.email for u in self._users.list_by_company(company_name)}:
            raise NotFoundError("Recipient not found in your company")

        return self._messages.create(
            sender=user.email,
            receiver=receiver,
            text=text,
            timestamp=now or now_utc(),
            company_name=company_name,
        )

    def conversation(self, user: SessionUser, with_email: Optional[str]) -> Sequence[ChatMessage]:
        company_name = require_company(user)
        other = require_non_empty(with_email, "Conversation partner").lower()
        items = [m for m in self._messages.list_involving(company_name, user.email) if m.other_party(user.email) == other]
        items.sort(key=lambda m: m.timestamp)
        return items

    def contacts(self, user: SessionUser) -> Sequence[Contact]:
        """Everyone else in the company, most recent conversation first."""
        company_name = require_company(user)

        latest = {}
        for message in sorted(self._messages.list_involving(company_name, user.email), key=lambda m: m.timestamp):
            latest[message.other_party(user.email)] = message

        contacts = [
            Contact(email=u.email, role=u.role, last_message=latest.get(u.email))
            for u in self._users.list_by_company(company_name)
            if u.email != user.email
        ]
        contacts.sort(key=lambda c: (c.last_message is None, -(c.last_message.timestamp.timestamp() if c.last_message else 0), c.email))
        return contacts
