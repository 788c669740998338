"""Payment gateway client.

Wraps the Razorpay SDK so services only see plain dicts and ``GatewayError``.
Transient gateway failures are retried with exponential backoff.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, Union

import razorpay
from razorpay.errors import BadRequestError, ServerError, SignatureVerificationError
from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import Timeout
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..core.exceptions import GatewayError
from ..core.logging import get_logger

logger = get_logger(__name__)

TRANSIENT_ERRORS = (ServerError, RequestsConnectionError, Timeout)


class PaymentGateway(Protocol):
    def create_order(self, *, amount: int, currency: str, receipt: str, notes: Dict[str, str]) -> Dict[str, Any]:
        raise NotImplementedError

    def create_subscription(
        self,
        *,
        plan_id: str,
        quantity: int,
        total_count: int,
        notes: Dict[str, str],
    ) -> Dict[str, Any]:
        raise NotImplementedError

    def fetch_order(self, order_id: str) -> Dict[str, Any]:
        raise NotImplementedError

    def verify_payment_signature(self, *, order_id: str, payment_id: str, signature: str) -> bool:
        raise NotImplementedError

    def verify_webhook_signature(self, body: Union[bytes, str], signature: str) -> bool:
        raise NotImplementedError


class RazorpayGateway(PaymentGateway):
    def __init__(self, key_id: str, key_secret: str, webhook_secret: str = "", client: Optional[razorpay.Client] = None):
        self._webhook_secret = webhook_secret
        self._client = client or razorpay.Client(auth=(key_id, key_secret))

    @retry(
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        reraise=True,
    )
    def _call(self, resource: str, action: str, *args: Any, **kwargs: Any) -> Dict[str, Any]:
        return getattr(getattr(self._client, resource), action)(*args, **kwargs)

    def _request(self, resource: str, action: str, *args: Any, **kwargs: Any) -> Dict[str, Any]:
        try:
            return self._call(resource, action, *args, **kwargs)
        except BadRequestError as e:
            logger.warning("razorpay_bad_request", resource=resource, error=str(e))
            raise GatewayError(str(e))
        except TRANSIENT_ERRORS as e:
            logger.error("razorpay_unavailable", resource=resource, error=str(e))
            raise GatewayError("Payment gateway unavailable")

    def create_order(self, *, amount, currency, receipt, notes) -> Dict[str, Any]:
        order = self._request(
            "order", "create", data={"amount": amount, "currency": currency, "receipt": receipt, "notes": notes}
        )
        logger.info("razorpay_order_created", order_id=order.get("id"), amount=amount, receipt=receipt)
        return order

    def fetch_order(self, order_id: str) -> Dict[str, Any]:
        return self._request("order", "fetch", order_id)

    def create_subscription(self, *, plan_id, quantity, total_count, notes) -> Dict[str, Any]:
        subscription = self._request(
            "subscription",
            "create",
            data={
                "plan_id": plan_id,
                "customer_notify": 1,
                "total_count": total_count,
                "quantity": quantity,
                "notes": notes,
            },
        )
        logger.info("razorpay_subscription_created", subscription_id=subscription.get("id"), quantity=quantity)
        return subscription

    def verify_payment_signature(self, *, order_id, payment_id, signature) -> bool:
        try:
            self._client.utility.verify_payment_signature(
                {
                    "razorpay_order_id": order_id,
                    "razorpay_payment_id": payment_id,
                    "razorpay_signature": signature,
                }
            )
        except SignatureVerificationError:
            return False
        return True

    def verify_webhook_signature(self, body, signature) -> bool:
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        try:
            self._client.utility.verify_webhook_signature(body, signature, self._webhook_secret)
        except SignatureVerificationError:
            return False
        return True
