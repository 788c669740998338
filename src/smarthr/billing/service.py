from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Sequence, Union

from ..auth.model import SessionUser
from ..auth.policies import require_employer
from ..common.datetime_utils import add_months, now_utc
from ..common.validators import require_non_empty, require_positive_int
from ..companies.model import Subscription
from ..companies.repository import CompanyRepository
from ..companies.service import CompanyService
from ..core.constants import BILLING_HISTORY_LIMIT, DEFAULT_CURRENCY, FREE_EMPLOYEE_LIMIT, SUBSCRIPTION_TOTAL_COUNT
from ..core.enums import SubscriptionPlan, SubscriptionStatus
from ..core.exceptions import AuthorizationError, PaymentVerificationError, ValidationError
from ..core.logging import get_logger
from .gateway import PaymentGateway
from .model import PaymentLog
from .pricing import quote_seats
from .repository import PaymentLogRepository, SeatOrderClaimRepository, WebhookEventRepository

logger = get_logger(__name__)

CAPTURED = "captured"


class BillingService:
    """Use cases: seat purchases, recurring subscriptions and gateway webhooks."""

    def __init__(
        self,
        companies: CompanyRepository,
        company_service: CompanyService,
        payment_logs: PaymentLogRepository,
        webhook_events: WebhookEventRepository,
        seat_claims: SeatOrderClaimRepository,
        gateway: PaymentGateway,
        *,
        plan_id: str = "",
    ):
        self._companies = companies
        self._company_service = company_service
        self._payment_logs = payment_logs
        self._webhook_events = webhook_events
        self._seat_claims = seat_claims
        self._gateway = gateway
        self._plan_id = plan_id
        self._webhook_handlers: Dict[str, Callable[[Dict[str, Any], datetime], None]] = {
            "subscription.charged": self._on_subscription_charged,
            "subscription.halted": self._on_subscription_halted,
            "subscription.cancelled": self._on_subscription_cancelled,
        }

    def status(self, user: SessionUser) -> Subscription:
        return self._company_service.get_subscription(user)

    def history(self, user: SessionUser) -> Sequence[PaymentLog]:
        require_employer(user, "Unauthorized")
        logs = list(self._payment_logs.list_by_company(user.uid))
        logs.sort(key=lambda p: p.created_at.timestamp() if p.created_at else 0.0, reverse=True)
        return logs[:BILLING_HISTORY_LIMIT]

    @staticmethod
    def _require_purchasing_employer(user: SessionUser, seats: Any) -> int:
        if not seats or not user.is_employer:
            raise ValidationError("Missing required fields or unauthorized")
        return require_positive_int(seats, "Seats")

    def create_order(self, *, user: SessionUser, employees_to_add: Any) -> Dict[str, Any]:
        seats = self._require_purchasing_employer(user, employees_to_add)
        quote = quote_seats(seats)
        receipt = f"rcpt_{uuid.uuid4().hex[:8]}"

        order = self._gateway.create_order(
            amount=quote.amount_paise,
            currency=DEFAULT_CURRENCY,
            receipt=receipt,
            notes={"companyId": user.uid, "seats": str(seats)},
        )
        logger.info("seat_order_created", company_id=user.uid, seats=seats, total=quote.total)
        return order

    def _ordered_seats(self, order_id: str, company_id: str) -> int:
        """Seat count recorded on the order at checkout; the order must belong to the company."""
        notes = self._gateway.fetch_order(order_id).get("notes") or {}
        if notes.get("companyId") != company_id:
            raise PaymentVerificationError("order does not belong to this company")
        try:
            return require_positive_int(notes.get("seats"), "Seats")
        except ValidationError:
            raise PaymentVerificationError("order has no seat count")

    def verify_payment(
        self,
        *,
        user: SessionUser,
        order_id: Optional[str],
        payment_id: Optional[str],
        signature: Optional[str],
        now: Optional[datetime] = None,
    ) -> Subscription:
        """Check the checkout signature, then grant the order's seats for one month.

        Each order is granted once; verifying it again returns the current
        subscription unchanged.
        """
        if not user.is_employer:
            raise AuthorizationError("Only employers can purchase seats")
        if not (order_id and payment_id and signature):
            raise PaymentVerificationError("invalid signature")
        if not self._gateway.verify_payment_signature(order_id=order_id, payment_id=payment_id, signature=signature):
            logger.warning("payment_signature_invalid", company_id=user.uid, order_id=order_id)
            raise PaymentVerificationError("invalid signature")

        company_id = user.uid
        seats = self._ordered_seats(order_id, company_id)
        now = now or now_utc()

        if not self._seat_claims.claim(order_id, payment_id=payment_id, company_id=company_id, seats=seats, claimed_at=now):
            logger.info("payment_already_verified", company_id=company_id, order_id=order_id, payment_id=payment_id)
            return self._company_service.get_subscription(user)

        # Seats are additive, so the subscription write goes last.
        try:
            self._payment_logs.create(
                company_id=company_id,
                status=CAPTURED,
                created_at=now,
                transaction_id=payment_id,
                order_id=order_id,
            )
            company = self._companies.get(company_id)
            current = company.subscription if company else Subscription()
            updated = Subscription(
                plan=SubscriptionPlan.PAID.value,
                status=SubscriptionStatus.ACTIVE.value,
                employee_limit=(current.employee_limit or FREE_EMPLOYEE_LIMIT) + seats,
                paid_seats=(current.paid_seats or 0) + seats,
                active_until=add_months(now, 1),
                razorpay_subscription_id=current.razorpay_subscription_id,
            )
            self._companies.set_subscription(company_id, updated)
        except Exception:
            self._seat_claims.release(order_id)
            raise

        logger.info("payment_verified", company_id=company_id, seats=seats, employee_limit=updated.employee_limit)
        return updated

    def create_subscription(self, *, user: SessionUser, paid_seats: Any) -> str:
        seats = self._require_purchasing_employer(user, paid_seats)
        plan_id = require_non_empty(self._plan_id, "Subscription plan")

        subscription = self._gateway.create_subscription(
            plan_id=plan_id,
            quantity=seats,
            total_count=SUBSCRIPTION_TOTAL_COUNT,
            notes={"companyId": user.uid},
        )
        return subscription["id"]

    # Webhooks

    def handle_webhook(
        self,
        *,
        body: Union[bytes, str],
        signature: Optional[str],
        event_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> bool:
        """Apply a signed gateway event. Returns False when it was skipped."""
        if not signature:
            raise ValidationError("No signature provided")
        if not self._gateway.verify_webhook_signature(body, signature):
            logger.warning("webhook_signature_invalid", event_id=event_id)
            raise ValidationError("Invalid signature")

        try:
            event = json.loads(body)
        except ValueError:
            raise ValidationError("Malformed webhook payload")

        name = event.get("event") or ""
        now = now or now_utc()

        handler = self._webhook_handlers.get(name)
        if handler is None:
            logger.info("webhook_event_ignored", webhook_event=name, event_id=event_id)
            return False

        if event_id and not self._webhook_events.mark_processed(event_id, event=name, processed_at=now):
            logger.info("webhook_event_duplicate", webhook_event=name, event_id=event_id)
            return False

        try:
            handler(event.get("payload") or {}, now)
        except Exception:
            # Let the gateway's retry run the handler again.
            if event_id:
                self._webhook_events.release(event_id)
            logger.warning("webhook_event_failed", webhook_event=name, event_id=event_id)
            raise
        logger.info("webhook_event_processed", webhook_event=name, event_id=event_id)
        return True

    @staticmethod
    def _subscription_entity(payload: Dict[str, Any]) -> Dict[str, Any]:
        return (payload.get("subscription") or {}).get("entity") or {}

    @staticmethod
    def _company_id(entity: Dict[str, Any]) -> Optional[str]:
        return (entity.get("notes") or {}).get("companyId")

    def _on_subscription_charged(self, payload: Dict[str, Any], now: datetime) -> None:
        entity = self._subscription_entity(payload)
        company_id = self._company_id(entity)
        if not company_id:
            return

        quantity = int(entity.get("quantity") or 0)
        fields: Dict[str, Any] = {
            "plan": SubscriptionPlan.PAID.value,
            "status": SubscriptionStatus.ACTIVE.value,
            "razorpay_subscription_id": entity.get("id"),
            "paid_seats": quantity,
            "employee_limit": FREE_EMPLOYEE_LIMIT + quantity,
        }
        if entity.get("current_end"):
            fields["active_until"] = datetime.fromtimestamp(int(entity["current_end"]), tz=timezone.utc)
        # The patch sets absolute values, so a retried event can safely apply it again.
        self._companies.update_subscription(company_id, **fields)

        payment = (payload.get("payment") or {}).get("entity") or {}
        self._payment_logs.create(
            company_id=company_id,
            status=CAPTURED,
            created_at=now,
            subscription_id=entity.get("id"),
            amount=payment.get("amount"),
            currency=payment.get("currency"),
        )

    def _on_subscription_halted(self, payload: Dict[str, Any], now: datetime) -> None:
        company_id = self._company_id(self._subscription_entity(payload))
        if company_id:
            self._companies.update_subscription(company_id, status=SubscriptionStatus.HALTED.value)

    def _on_subscription_cancelled(self, payload: Dict[str, Any], now: datetime) -> None:
        company_id = self._company_id(self._subscription_entity(payload))
        if company_id:
            self._companies.update_subscription(company_id, status=SubscriptionStatus.CANCELLED.value, paid_seats=0)
