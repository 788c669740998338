from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class ProfileUpdateRequest:
    id: str
    emp_email: str
    emp_name: str
    status: RequestStatus
    company_name: str
    created_at: datetime
    changes: Dict[str, str] = field(default_factory=dict)
    decided_at: Optional[datetime] = None


@dataclass(frozen=True)
class ProfileUpdateBoard:
    """Employer view: requests awaiting a decision and the ones already decided."""

    pending: List[ProfileUpdateRequest] = field(default_factory=list)
    past: List[ProfileUpdateRequest] = field(default_factory=list)
