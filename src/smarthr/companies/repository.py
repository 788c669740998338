from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol

from .model import Company, Subscription


class CompanyRepository(Protocol):
    def get(self, company_id: str) -> Optional[Company]:
        raise NotImplementedError

    def save_profile(
        self,
        company_id: str,
        *,
        name: str,
        industry: Optional[str],
        size: Optional[str],
        timezone: Optional[str],
        owner_uid: str,
        created_at: datetime,
    ) -> None:
        raise NotImplementedError

    def set_subscription(self, company_id: str, subscription: Subscription) -> None:
        """Create or merge the subscription map (the company doc may not exist yet)."""

        raise NotImplementedError

    def update_subscription(self, company_id: str, **fields: Any) -> bool:
        """Patch individual subscription fields; False when the company doc is missing."""

        raise NotImplementedError

    def delete_by_name(self, name: str) -> int:
        raise NotImplementedError
