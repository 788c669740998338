from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import DocumentStatus
from .model import DocumentTemplate, EmployeeDocument


class DocumentRepository(Protocol):
    def create(self, *, emp_email: str, title: str, company_name: str, requested_at: datetime) -> str:
        raise NotImplementedError

    def get(self, document_id: str) -> Optional[EmployeeDocument]:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[EmployeeDocument]:
        raise NotImplementedError

    def list_by_email(self, company_name: str, emp_email: str) -> Sequence[EmployeeDocument]:
        raise NotImplementedError

    def mark_uploaded(self, document_id: str, *, url: str, uploaded_at: datetime) -> bool:
        raise NotImplementedError

    def set_status(self, document_id: str, status: DocumentStatus) -> bool:
        raise NotImplementedError


class DocumentTemplateRepository(Protocol):
    def create(self, *, title: str, required: bool, company_name: str, created_at: datetime) -> str:
        raise NotImplementedError

    def get(self, template_id: str) -> Optional[DocumentTemplate]:
        raise NotImplementedError

    def list_by_company(self, company_name: str) -> Sequence[DocumentTemplate]:
        raise NotImplementedError

    def delete(self, template_id: str) -> bool:
        raise NotImplementedError
