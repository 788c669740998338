from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import DocumentStatus


@dataclass(frozen=True)
class EmployeeDocument:
    id: str
    emp_email: str
    title: str
    status: DocumentStatus
    company_name: str
    url: Optional[str] = None
    requested_at: Optional[datetime] = None
    uploaded_at: Optional[datetime] = None


@dataclass(frozen=True)
class DocumentTemplate:
    """A checklist item employers can request from new hires."""

    id: str
    title: str
    required: bool
    company_name: str
    created_at: Optional[datetime] = None
