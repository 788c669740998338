from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import PaymentLog


class PaymentLogRepository(Protocol):
    def create(
        self,
        *,
        company_id: str,
        status: str,
        created_at: datetime,
        transaction_id: Optional[str] = None,
        order_id: Optional[str] = None,
        subscription_id: Optional[str] = None,
        amount: Optional[int] = None,
        currency: Optional[str] = None,
    ) -> str:
        raise NotImplementedError

    def list_by_company(self, company_id: str) -> Sequence[PaymentLog]:
        raise NotImplementedError


class WebhookEventRepository(Protocol):
    def mark_processed(self, event_id: str, *, event: str, processed_at: datetime) -> bool:
        """Record an event id; False when it was already recorded."""

        raise NotImplementedError

    def release(self, event_id: str) -> None:
        raise NotImplementedError


class SeatOrderClaimRepository(Protocol):
    """One claim per gateway order, so each paid order grants its seats once."""

    def claim(self, order_id: str, *, payment_id: str, company_id: str, seats: int, claimed_at: datetime) -> bool:
        """False when the order was already claimed."""

        raise NotImplementedError

    def release(self, order_id: str) -> None:
        raise NotImplementedError
