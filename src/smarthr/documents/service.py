from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from ..auth.model import SessionUser
from ..auth.policies import require_company, require_employer
from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.enums import DocumentStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.logging import get_logger
from ..employees.repository import EmployeeRepository
from ..notifications.service import NotificationService
from .model import DocumentTemplate, EmployeeDocument
from .repository import DocumentRepository, DocumentTemplateRepository

logger = get_logger(__name__)


class DocumentService:
    """Use cases: employer requests a document, employee uploads it, employer verifies it.

    Employers also keep a checklist of document templates and can request
    several documents from one employee at once.
    """

    def __init__(
        self,
        documents: DocumentRepository,
        employees: EmployeeRepository,
        notifications: NotificationService,
        templates: DocumentTemplateRepository,
    ):
        self._documents = documents
        self._employees = employees
        self._notifications = notifications
        self._templates = templates

    def _require_employee(self, company_name: str, emp_email: str) -> str:
        emp_email = require_non_empty(emp_email, "Employee email").lower()
        if not self._employees.get_by_email(company_name, emp_email):
            raise NotFoundError("Employee not found")
        return emp_email

    def request(self, *, user: SessionUser, emp_email: str, title: str, now: Optional[datetime] = None) -> str:
        require_employer(user)
        company_name = require_company(user)
        emp_email = self._require_employee(company_name, emp_email)
        title = require_non_empty(title, "Document title")

        document_id = self._documents.create(
            emp_email=emp_email,
            title=title,
            company_name=company_name,
            requested_at=now or now_utc(),
        )
        self._notifications.notify_employee(
            company_name=company_name,
            email=emp_email,
            title="Document Requested",
            message=f"Please upload: {title}",
            now=now,
        )
        return document_id

    def request_many(
        self,
        *,
        user: SessionUser,
        emp_email: str,
        titles: Optional[Iterable[str]],
        now: Optional[datetime] = None,
    ) -> List[str]:
        """Request several documents with a single notification; duplicate titles are requested once."""
        require_employer(user)
        company_name = require_company(user)
        emp_email = self._require_employee(company_name, emp_email)
        if titles is None or isinstance(titles, str):
            raise ValidationError("Titles must be a list")

        unique: List[str] = []
        for title in titles:
            title = (title or "").strip()
            if title and title not in unique:
                unique.append(title)
        if not unique:
            raise ValidationError("Select at least one document to request")

        now = now or now_utc()
        ids = [
            self._documents.create(emp_email=emp_email, title=title, company_name=company_name, requested_at=now)
            for title in unique
        ]
        self._notifications.notify_employee(
            company_name=company_name,
            email=emp_email,
            title="Documents Requested",
            message=f"Please upload: {', '.join(unique)}",
            now=now,
        )
        logger.info("documents_requested", company_name=company_name, emp_email=emp_email, count=len(ids))
        return ids

    # Templates

    def add_template(self, *, user: SessionUser, title: str, required: bool = True, now: Optional[datetime] = None) -> str:
        require_employer(user)
        company_name = require_company(user)
        title = require_non_empty(title, "Template name")
        if any(t.title.lower() == title.lower() for t in self._templates.list_by_company(company_name)):
            raise ValidationError("A template with this name already exists")
        return self._templates.create(title=title, required=bool(required), company_name=company_name, created_at=now or now_utc())

    def delete_template(self, *, user: SessionUser, template_id: str) -> None:
        require_employer(user)
        template = self._templates.get(template_id)
        if not template or template.company_name != require_company(user):
            raise NotFoundError("Template not found")
        self._templates.delete(template_id)

    def list_templates(self, user: SessionUser) -> Sequence[DocumentTemplate]:
        """Required items first, then alphabetical."""
        require_employer(user)
        items = list(self._templates.list_by_company(require_company(user)))
        items.sort(key=lambda t: (not t.required, t.title.lower()))
        return items

    def _get(self, user: SessionUser, document_id: str) -> EmployeeDocument:
        doc = self._documents.get(document_id)
        if not doc or doc.company_name != user.company_name:
            raise NotFoundError("Document not found")
        return doc

    def upload(self, *, user: SessionUser, document_id: str, url: str, now: Optional[datetime] = None) -> None:
        doc = self._get(user, document_id)
        if doc.emp_email != user.email:
            raise AuthorizationError("You can only upload your own documents")
        if doc.status == DocumentStatus.APPROVED:
            raise ValidationError("Document has already been approved")

        self._documents.mark_uploaded(document_id, url=require_non_empty(url, "Document URL"), uploaded_at=now or now_utc())
        self._notifications.notify_employer(
            company_name=doc.company_name,
            title="Document Uploaded",
            message=f"{doc.emp_email} uploaded {doc.title}.",
            now=now,
        )

    def _decide(self, user: SessionUser, document_id: str, status: DocumentStatus, now: Optional[datetime]) -> None:
        require_employer(user)
        doc = self._get(user, document_id)
        if doc.status != DocumentStatus.UPLOADED:
            raise ValidationError("Only uploaded documents can be reviewed")
        self._documents.set_status(document_id, status)
        self._notifications.notify_employee(
            company_name=doc.company_name,
            email=doc.emp_email,
            title=f"Document {status.value}",
            message=f"Your {doc.title} was {status.value.lower()}.",
            now=now,
        )

    def approve(self, *, user: SessionUser, document_id: str, now: Optional[datetime] = None) -> None:
        self._decide(user, document_id, DocumentStatus.APPROVED, now)

    def reject(self, *, user: SessionUser, document_id: str, now: Optional[datetime] = None) -> None:
        self._decide(user, document_id, DocumentStatus.REJECTED, now)

    def list_for(self, user: SessionUser) -> Sequence[EmployeeDocument]:
        company_name = require_company(user)
        if user.is_employer:
            items = list(self._documents.list_by_company(company_name))
        else:
            items = list(self._documents.list_by_email(company_name, user.email))
        items.sort(key=lambda d: (d.emp_email, d.title))
        return items
