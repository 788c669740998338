from __future__ import annotations

from typing import Any, Dict, Sequence

from google.api_core.exceptions import AlreadyExists

from ..core.constants import DEFAULT_CURRENCY
from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import PaymentLog
from .repository import PaymentLogRepository, SeatOrderClaimRepository, WebhookEventRepository


def _to_log(data: Dict[str, Any]) -> PaymentLog:
    return PaymentLog(
        id=data["id"],
        company_id=data.get("companyId") or "",
        transaction_id=data.get("transactionId"),
        order_id=data.get("orderId"),
        subscription_id=data.get("subscriptionId"),
        amount=data.get("amount") or 0,
        currency=data.get("currency") or DEFAULT_CURRENCY,
        status=data.get("status") or "unknown",
        created_at=data.get("createdAt"),
    )


class FirestorePaymentLogRepository(FirestoreRepository, PaymentLogRepository):
    collection = collections.PAYMENT_LOGS

    def create(self, *, company_id, status, created_at, transaction_id=None, order_id=None, subscription_id=None, amount=None, currency=None) -> str:
        doc = {"companyId": company_id, "status": status, "createdAt": created_at}
        optional = {
            "transactionId": transaction_id,
            "orderId": order_id,
            "subscriptionId": subscription_id,
            "amount": amount,
            "currency": currency,
        }
        doc.update({k: v for k, v in optional.items() if v is not None})
        return self._add(doc)

    def list_by_company(self, company_id: str) -> Sequence[PaymentLog]:
        return [_to_log(r) for r in self._where(companyId=company_id)]


class FirestoreWebhookEventRepository(FirestoreRepository, WebhookEventRepository):
    collection = collections.WEBHOOK_EVENTS

    def mark_processed(self, event_id: str, *, event: str, processed_at) -> bool:
        try:
            self._col().document(event_id).create({"event": event, "processedAt": processed_at})
        except AlreadyExists:
            return False
        return True

    def release(self, event_id: str) -> None:
        self._delete(event_id)


class FirestoreSeatOrderClaimRepository(FirestoreRepository, SeatOrderClaimRepository):
    collection = collections.SEAT_ORDER_CLAIMS

    def claim(self, order_id: str, *, payment_id, company_id, seats, claimed_at) -> bool:
        try:
            self._col().document(order_id).create(
                {"paymentId": payment_id, "companyId": company_id, "seats": seats, "claimedAt": claimed_at}
            )
        except AlreadyExists:
            return False
        return True

    def release(self, order_id: str) -> None:
        self._delete(order_id)
