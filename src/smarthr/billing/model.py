from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_CURRENCY


@dataclass(frozen=True)
class PaymentLog:
    id: str
    company_id: str
    transaction_id: Optional[str] = None
    order_id: Optional[str] = None
    subscription_id: Optional[str] = None
    amount: int = 0
    currency: str = DEFAULT_CURRENCY
    status: str = "unknown"
    created_at: Optional[datetime] = None

    @property
    def reference(self) -> Optional[str]:
        return self.transaction_id or self.subscription_id
