from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import DocumentStatus
from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import DocumentTemplate, EmployeeDocument
from .repository import DocumentRepository, DocumentTemplateRepository


def _to_document(data: Dict[str, Any]) -> EmployeeDocument:
    return EmployeeDocument(
        id=data["id"],
        emp_email=data.get("empEmail") or "",
        title=data.get("title") or "",
        status=DocumentStatus(data.get("status") or DocumentStatus.PENDING.value),
        company_name=data.get("companyName") or "",
        url=data.get("url"),
        requested_at=data.get("requestedAt"),
        uploaded_at=data.get("uploadedAt"),
    )


class FirestoreDocumentRepository(FirestoreRepository, DocumentRepository):
    collection = collections.DOCUMENTS

    def create(self, *, emp_email, title, company_name, requested_at) -> str:
        return self._add(
            {
                "empEmail": emp_email,
                "title": title,
                "status": DocumentStatus.PENDING.value,
                "companyName": company_name,
                "requestedAt": requested_at,
            }
        )

    def get(self, document_id: str) -> Optional[EmployeeDocument]:
        data = self._fetch(document_id)
        return _to_document(data) if data else None

    def list_by_company(self, company_name: str) -> Sequence[EmployeeDocument]:
        return [_to_document(r) for r in self._where(companyName=company_name)]

    def list_by_email(self, company_name: str, emp_email: str) -> Sequence[EmployeeDocument]:
        return [_to_document(r) for r in self._where(companyName=company_name, empEmail=emp_email)]

    def mark_uploaded(self, document_id: str, *, url: str, uploaded_at) -> bool:
        return self._update(document_id, {"url": url, "status": DocumentStatus.UPLOADED.value, "uploadedAt": uploaded_at})

    def set_status(self, document_id: str, status: DocumentStatus) -> bool:
        return self._update(document_id, {"status": status.value})


def _to_template(data: Dict[str, Any]) -> DocumentTemplate:
    return DocumentTemplate(
        id=data["id"],
        title=data.get("title") or "",
        required=bool(data.get("required")),
        company_name=data.get("companyName") or "",
        created_at=data.get("createdAt"),
    )


class FirestoreDocumentTemplateRepository(FirestoreRepository, DocumentTemplateRepository):
    collection = collections.DOC_TEMPLATES

    def create(self, *, title, required, company_name, created_at) -> str:
        return self._add({"title": title, "required": required, "companyName": company_name, "createdAt": created_at})

    def get(self, template_id: str) -> Optional[DocumentTemplate]:
        data = self._fetch(template_id)
        return _to_template(data) if data else None

    def list_by_company(self, company_name: str) -> Sequence[DocumentTemplate]:
        return [_to_template(r) for r in self._where(companyName=company_name)]

    def delete(self, template_id: str) -> bool:
        return self._delete(template_id)
