from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from smarthr.auth.model import SessionUser
from smarthr.billing.service import BillingService
from smarthr.companies.service import CompanyService
from smarthr.core.enums import Role, UserStatus
from smarthr.core.exceptions import AuthorizationError, PaymentVerificationError, ValidationError

EMPLOYER_UID = "employer-1"


def _checkout(container, user, seats=3) -> str:
    return container.billing_service.create_order(user=user, employees_to_add=seats)["id"]


def _verify(container, fakes, user, *, order_id="order_1", payment_id="pay_1", now=None, signature=None):
    return container.billing_service.verify_payment(
        user=user,
        order_id=order_id,
        payment_id=payment_id,
        signature=signature or fakes.gateway.sign_payment(order_id, payment_id),
        now=now,
    )


class FailOnce:
    """Wraps a repository method so its first call raises."""

    def __init__(self, method):
        self._method = method
        self.calls = 0

    def __call__(self, *args, **kwargs):
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("firestore unavailable")
        return self._method(*args, **kwargs)


def _webhook(fakes, event: str, **entity):
    entity.setdefault("notes", {"companyId": EMPLOYER_UID})
    body = json.dumps(
        {
            "event": event,
            "payload": {
                "subscription": {"entity": entity},
                "payment": {"entity": {"amount": 46500, "currency": "INR"}},
            },
        }
    ).encode("utf-8")
    return body, fakes.gateway.sign_webhook(body)


def test_create_order_charges_quote_in_paise(container, fakes, employer):
    order = container.billing_service.create_order(user=employer, employees_to_add=3)

    assert order["id"] == "order_1"
    sent = fakes.gateway.orders[0]
    assert sent["amount"] == 31900
    assert sent["currency"] == "INR"
    assert sent["notes"] == {"companyId": EMPLOYER_UID, "seats": "3"}
    assert sent["receipt"].startswith("rcpt_")
    assert len(sent["receipt"]) == len("rcpt_") + 8


@pytest.mark.parametrize("seats", [None, 0, ""])
def test_create_order_requires_seats(container, employer, seats):
    with pytest.raises(ValidationError, match="Missing required fields or unauthorized"):
        container.billing_service.create_order(user=employer, employees_to_add=seats)


def test_create_order_rejected_for_employees(container, fakes, employee):
    with pytest.raises(ValidationError, match="Missing required fields or unauthorized"):
        container.billing_service.create_order(user=employee, employees_to_add=2)
    assert fakes.gateway.orders == []


def test_verify_payment_grants_seats_for_a_month(container, fakes, employer, acme, fixed_now):
    order_id = _checkout(container, employer, seats=3)

    updated = _verify(container, fakes, employer, order_id=order_id, now=fixed_now)

    assert updated.plan == "paid"
    assert updated.status == "active"
    assert updated.employee_limit == 8
    assert updated.paid_seats == 3
    assert updated.active_until == datetime(2026, 4, 2, 9, 0, tzinfo=timezone.utc)
    assert fakes.companies.get(EMPLOYER_UID).subscription == updated

    (log,) = fakes.payment_logs.rows.values()
    assert log.status == "captured"
    assert log.transaction_id == "pay_1"
    assert log.order_id == "order_1"


def test_second_purchase_stacks_on_existing_seats(container, fakes, employer, acme, fixed_now):
    _verify(container, fakes, employer, order_id=_checkout(container, employer, seats=3), now=fixed_now)
    updated = _verify(
        container, fakes, employer, order_id=_checkout(container, employer, seats=2), payment_id="pay_2", now=fixed_now
    )

    assert updated.employee_limit == 10
    assert updated.paid_seats == 5


def test_verifying_the_same_order_twice_grants_seats_once(container, fakes, employer, acme, fixed_now):
    order_id = _checkout(container, employer, seats=3)

    first = _verify(container, fakes, employer, order_id=order_id, now=fixed_now)
    again = _verify(container, fakes, employer, order_id=order_id, now=fixed_now + timedelta(minutes=5))

    assert again == first
    sub = fakes.companies.get(EMPLOYER_UID).subscription
    assert sub.paid_seats == 3
    assert sub.employee_limit == 8
    assert len(fakes.payment_logs.rows) == 1
    assert fakes.seat_claims.claims[order_id]["payment_id"] == "pay_1"


def test_seat_count_comes_from_the_order(container, fakes, employer, acme, fixed_now):
    order_id = _checkout(container, employer, seats=2)

    updated = _verify(container, fakes, employer, order_id=order_id, now=fixed_now)

    assert updated.paid_seats == 2
    assert fakes.seat_claims.claims[order_id]["seats"] == 2


def test_order_of_another_company_is_rejected(container, fakes, employer, acme, fixed_now):
    order_id = _checkout(container, employer, seats=3)
    other = SessionUser(uid="boss-2", email="boss@globex.test", role=Role.EMPLOYER, status=UserStatus.ACTIVE, company_name="Globex")

    with pytest.raises(PaymentVerificationError, match="does not belong"):
        _verify(container, fakes, other, order_id=order_id, now=fixed_now)

    assert fakes.seat_claims.claims == {}
    assert fakes.companies.get("boss-2") is None


def test_failed_grant_can_be_verified_again(container, fakes, employer, acme, fixed_now, monkeypatch):
    order_id = _checkout(container, employer, seats=3)
    monkeypatch.setattr(fakes.companies, "set_subscription", FailOnce(fakes.companies.set_subscription))

    with pytest.raises(RuntimeError):
        _verify(container, fakes, employer, order_id=order_id, now=fixed_now)
    assert fakes.seat_claims.claims == {}

    updated = _verify(container, fakes, employer, order_id=order_id, now=fixed_now)
    assert updated.paid_seats == 3
    assert fakes.companies.get(EMPLOYER_UID).subscription.employee_limit == 8


def test_verify_payment_rejects_bad_signature(container, fakes, employer, acme):
    before = fakes.companies.get(EMPLOYER_UID).subscription
    _checkout(container, employer)

    with pytest.raises(PaymentVerificationError, match="invalid signature"):
        _verify(container, fakes, employer, signature="deadbeef")

    assert fakes.payment_logs.rows == {}
    assert fakes.companies.get(EMPLOYER_UID).subscription == before


def test_verify_payment_requires_all_gateway_fields(container, fakes, employer):
    with pytest.raises(PaymentVerificationError):
        container.billing_service.verify_payment(user=employer, order_id="order_1", payment_id=None, signature="x")


def test_verify_payment_is_employer_only(container, fakes, employee):
    with pytest.raises(AuthorizationError):
        _verify(container, fakes, employee)


def test_create_subscription_returns_gateway_id(container, fakes, employer):
    assert container.billing_service.create_subscription(user=employer, paid_seats=2) == "sub_1"

    sent = fakes.gateway.subscriptions[0]
    assert sent["plan_id"] == "plan_test"
    assert sent["quantity"] == 2
    assert sent["total_count"] == 999
    assert sent["notes"] == {"companyId": EMPLOYER_UID}


def test_create_subscription_needs_configured_plan(fakes, employer):
    svc = BillingService(
        fakes.companies,
        CompanyService(fakes.companies, fakes.users),
        fakes.payment_logs,
        fakes.webhook_events,
        fakes.seat_claims,
        fakes.gateway,
    )

    with pytest.raises(ValidationError):
        svc.create_subscription(user=employer, paid_seats=2)


def test_charged_webhook_activates_subscription_once(container, fakes, acme, fixed_now):
    body, signature = _webhook(fakes, "subscription.charged", id="sub_9", quantity=4, current_end=1775000000)

    assert container.billing_service.handle_webhook(body=body, signature=signature, event_id="evt_1", now=fixed_now)
    assert not container.billing_service.handle_webhook(body=body, signature=signature, event_id="evt_1", now=fixed_now)

    sub = fakes.companies.get(EMPLOYER_UID).subscription
    assert sub.status == "active"
    assert sub.razorpay_subscription_id == "sub_9"
    assert sub.paid_seats == 4
    assert sub.active_until == datetime.fromtimestamp(1775000000, tz=timezone.utc)

    (log,) = fakes.payment_logs.rows.values()
    assert log.reference == "sub_9"
    assert log.amount == 46500


def test_recurring_charge_raises_seat_limit(container, fakes, acme, fixed_now):
    body, signature = _webhook(fakes, "subscription.charged", id="sub_9", quantity=4, current_end=1775000000)

    container.billing_service.handle_webhook(body=body, signature=signature, event_id="evt_1", now=fixed_now)

    sub = fakes.companies.get(EMPLOYER_UID).subscription
    assert sub.plan == "paid"
    assert sub.employee_limit == 9
    assert sub.seat_limit(fixed_now) == 9


def test_failed_webhook_is_applied_on_retry(container, fakes, acme, fixed_now, monkeypatch):
    body, signature = _webhook(fakes, "subscription.charged", id="sub_9", quantity=4, current_end=1775000000)
    monkeypatch.setattr(fakes.companies, "update_subscription", FailOnce(fakes.companies.update_subscription))

    with pytest.raises(RuntimeError):
        container.billing_service.handle_webhook(body=body, signature=signature, event_id="evt_1", now=fixed_now)
    assert fakes.webhook_events.processed == {}
    assert fakes.payment_logs.rows == {}

    assert container.billing_service.handle_webhook(body=body, signature=signature, event_id="evt_1", now=fixed_now)

    sub = fakes.companies.get(EMPLOYER_UID).subscription
    assert sub.paid_seats == 4
    assert sub.razorpay_subscription_id == "sub_9"
    assert fakes.webhook_events.processed == {"evt_1": "subscription.charged"}
    assert len(fakes.payment_logs.rows) == 1


def test_halted_and_cancelled_webhooks_update_status(container, fakes, acme, fixed_now):
    body, signature = _webhook(fakes, "subscription.halted", id="sub_9")
    container.billing_service.handle_webhook(body=body, signature=signature, now=fixed_now)
    assert fakes.companies.get(EMPLOYER_UID).subscription.status == "halted"

    body, signature = _webhook(fakes, "subscription.cancelled", id="sub_9")
    container.billing_service.handle_webhook(body=body, signature=signature, now=fixed_now)
    sub = fakes.companies.get(EMPLOYER_UID).subscription
    assert sub.status == "cancelled"
    assert sub.paid_seats == 0


def test_unknown_webhook_event_is_ignored_and_not_recorded(container, fakes, fixed_now):
    body, signature = _webhook(fakes, "payment.captured", id="sub_9")

    assert not container.billing_service.handle_webhook(body=body, signature=signature, event_id="evt_2", now=fixed_now)
    assert fakes.webhook_events.processed == {}


def test_webhook_for_unknown_company_is_a_no_op(container, fakes, fixed_now):
    body, signature = _webhook(fakes, "subscription.halted", id="sub_9", notes={"companyId": "ghost"})

    assert container.billing_service.handle_webhook(body=body, signature=signature, now=fixed_now)
    assert fakes.companies.rows == {}


def test_webhook_signature_checks(container, fakes):
    body, _ = _webhook(fakes, "subscription.halted", id="sub_9")

    with pytest.raises(ValidationError, match="No signature provided"):
        container.billing_service.handle_webhook(body=body, signature=None)
    with pytest.raises(ValidationError, match="Invalid signature"):
        container.billing_service.handle_webhook(body=body, signature="0" * 64)


def test_status_for_employee_reads_employer_company(container, fakes, employer, employee, acme, fixed_now):
    _verify(container, fakes, employer, order_id=_checkout(container, employer, seats=3), now=fixed_now)

    assert container.billing_service.status(employee).employee_limit == 8


def test_history_is_newest_first_and_employer_only(container, fakes, employer, employee, fixed_now):
    for hours in range(3):
        fakes.payment_logs.create(
            company_id=EMPLOYER_UID,
            status="captured",
            created_at=fixed_now + timedelta(hours=hours),
            transaction_id=f"pay_{hours}",
        )

    history = container.billing_service.history(employer)
    assert [p.transaction_id for p in history] == ["pay_2", "pay_1", "pay_0"]

    with pytest.raises(AuthorizationError, match="Unauthorized"):
        container.billing_service.history(employee)
