from __future__ import annotations

from typing import Any, Dict, Optional

from ..common.serializers import camelize
from ..core.constants import FREE_EMPLOYEE_LIMIT
from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import Company, Subscription
from .repository import CompanyRepository


def _to_subscription(data: Optional[Dict[str, Any]]) -> Subscription:
    data = data or {}
    return Subscription(
        plan=data.get("plan") or "free",
        status=data.get("status") or "active",
        employee_limit=int(data.get("employeeLimit") or FREE_EMPLOYEE_LIMIT),
        paid_seats=int(data.get("paidSeats") or 0),
        active_until=data.get("activeUntil"),
        razorpay_subscription_id=data.get("razorpaySubscriptionId"),
    )


def _subscription_doc(sub: Subscription) -> Dict[str, Any]:
    doc: Dict[str, Any] = {
        "plan": sub.plan,
        "status": sub.status,
        "employeeLimit": sub.employee_limit,
        "paidSeats": sub.paid_seats,
        "activeUntil": sub.active_until,
    }
    if sub.razorpay_subscription_id:
        doc["razorpaySubscriptionId"] = sub.razorpay_subscription_id
    return doc


class FirestoreCompanyRepository(FirestoreRepository, CompanyRepository):
    collection = collections.COMPANIES

    def get(self, company_id: str) -> Optional[Company]:
        data = self._fetch(company_id)
        if not data:
            return None
        return Company(
            id=data["id"],
            name=data.get("name") or "",
            industry=data.get("industry"),
            size=data.get("size"),
            timezone=data.get("timezone"),
            owner_uid=data.get("ownerUid"),
            subscription=_to_subscription(data.get("subscription")),
            created_at=data.get("createdAt"),
        )

    def save_profile(self, company_id, *, name, industry, size, timezone, owner_uid, created_at) -> None:
        self._set(
            company_id,
            {
                "name": name,
                "industry": industry,
                "size": size,
                "timezone": timezone,
                "ownerUid": owner_uid,
                "createdAt": created_at,
            },
            merge=True,
        )

    def set_subscription(self, company_id: str, subscription: Subscription) -> None:
        self._set(company_id, {"subscription": _subscription_doc(subscription)}, merge=True)

    def update_subscription(self, company_id: str, **fields: Any) -> bool:
        patch = {f"subscription.{camelize(k)}": v for k, v in fields.items()}
        return self._update(company_id, patch)

    def delete_by_name(self, name: str) -> int:
        return len(self._delete_where(name=name))
