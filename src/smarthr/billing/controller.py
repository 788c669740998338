from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_user, session_required
from ..common.datetime_utils import to_iso
from ..common.http import json_body
from ..core.exceptions import PaymentVerificationError


def register(app: Flask, container) -> None:
    @app.route("/api/billing/status", methods=["GET"], endpoint="billing_status")
    @session_required
    def billing_status():
        sub = container.billing_service.status(current_user())
        return jsonify(
            {
                "subscription": {
                    "plan": sub.plan,
                    "status": sub.status,
                    "employeeLimit": sub.employee_limit,
                    "paidSeats": sub.paid_seats,
                    "activeUntil": to_iso(sub.active_until),
                    "razorpaySubscriptionId": sub.razorpay_subscription_id,
                }
            }
        )

    @app.route("/api/billing/history", methods=["GET"], endpoint="billing_history")
    @session_required
    def billing_history():
        payments = [
            {
                "id": p.id,
                "transactionId": p.reference,
                "orderId": p.order_id,
                "amount": p.amount,
                "currency": p.currency,
                "status": p.status,
                "createdAt": to_iso(p.created_at),
            }
            for p in container.billing_service.history(current_user())
        ]
        return jsonify({"payments": payments})

    @app.route("/api/razorpay/create-order", methods=["POST"], endpoint="razorpay_create_order")
    @session_required
    def create_order():
        order = container.billing_service.create_order(
            user=current_user(), employees_to_add=json_body().get("employeesToAdd")
        )
        return jsonify({"order": order})

    @app.route("/api/razorpay/verify", methods=["POST"], endpoint="razorpay_verify")
    @session_required
    def verify_payment():
        data = json_body()
        try:
            container.billing_service.verify_payment(
                user=current_user(),
                order_id=data.get("razorpay_order_id"),
                payment_id=data.get("razorpay_payment_id"),
                signature=data.get("razorpay_signature"),
            )
        except PaymentVerificationError as e:
            return jsonify({"message": str(e)}), 400
        return jsonify({"message": "payment verified successfully"})

    @app.route("/api/create-subscription", methods=["POST"], endpoint="create_subscription")
    @session_required
    def create_subscription():
        subscription_id = container.billing_service.create_subscription(
            user=current_user(), paid_seats=json_body().get("paidSeats")
        )
        return jsonify({"subscriptionId": subscription_id})

    @app.route("/api/razorpay/webhook", methods=["POST"], endpoint="razorpay_webhook")
    def razorpay_webhook():
        container.billing_service.handle_webhook(
            body=request.get_data(),
            signature=request.headers.get("x-razorpay-signature"),
            event_id=request.headers.get("x-razorpay-event-id"),
        )
        return jsonify({"status": "ok"})
