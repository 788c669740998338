from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence, Union

from ..auth.model import SessionUser
from ..auth.policies import require_company, require_employee, require_employer
from ..common.datetime_utils import now_utc
from ..core.constants import PROFILE_UPDATE_FIELDS
from ..core.enums import RequestStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging import get_logger
from ..employees.repository import EmployeeRepository
from ..notifications.service import NotificationService
from .model import ProfileUpdateBoard, ProfileUpdateRequest
from .repository import ProfileUpdateRepository

logger = get_logger(__name__)


def _sort_key(item: ProfileUpdateRequest) -> float:
    return item.created_at.timestamp() if item.created_at else 0.0


class ProfileUpdateService:
    """Use cases: employees propose sensitive profile changes, employers approve them."""

    def __init__(
        self,
        requests: ProfileUpdateRepository,
        employees: EmployeeRepository,
        notifications: NotificationService,
    ):
        self._requests = requests
        self._employees = employees
        self._notifications = notifications

    @staticmethod
    def _clean_changes(changes: Any) -> dict:
        if not isinstance(changes, dict):
            raise ValidationError("Changes must be an object")
        unknown = sorted(set(changes) - set(PROFILE_UPDATE_FIELDS))
        if unknown:
            raise ValidationError(f"Fields cannot be changed: {', '.join(unknown)}")
        cleaned = {k: str(v).strip() for k, v in changes.items() if v is not None and str(v).strip()}
        if not cleaned:
            raise ValidationError("Please provide at least one change")
        return cleaned

    def submit(self, *, user: SessionUser, changes: Any, now: Optional[datetime] = None) -> str:
        require_employee(user, "Only employees can request profile changes")
        company_name = require_company(user)
        cleaned = self._clean_changes(changes)

        employee = self._employees.get_by_uid(user.uid)
        emp_name = employee.name if employee else user.display_name
        now = now or now_utc()

        request_id = self._requests.create(
            emp_email=user.email,
            emp_name=emp_name,
            changes=cleaned,
            company_name=company_name,
            created_at=now,
        )
        self._notifications.notify_employer(
            company_name=company_name,
            title="Profile Update Requested",
            message=f"{emp_name} requested changes to: {', '.join(sorted(cleaned))}.",
            now=now,
        )
        return request_id

    def _get_pending(self, user: SessionUser, request_id: str) -> ProfileUpdateRequest:
        require_employer(user)
        req = self._requests.get(request_id)
        if not req or req.company_name != user.company_name:
            raise NotFoundError("Request not found")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Request has already been processed")
        return req

    def approve(self, *, user: SessionUser, request_id: str, now: Optional[datetime] = None) -> None:
        req = self._get_pending(user, request_id)

        employee = self._employees.get_by_email(req.company_name, req.emp_email)
        if not employee:
            raise NotFoundError("Employee record not found")
        if not self._employees.apply_profile_changes(employee.id, req.changes):
            raise ValidationError("Applying profile changes failed")

        now = now or now_utc()
        if not self._requests.decide(request_id, status=RequestStatus.APPROVED, decided_at=now):
            raise ValidationError("Approving request failed")
        logger.info("profile_update_approved", request_id=request_id, fields=sorted(req.changes))

        self._notifications.notify_employee(
            company_name=req.company_name,
            email=req.emp_email,
            title="Profile Update Approved",
            message="Your requested profile changes have been applied.",
            now=now,
        )

    def reject(self, *, user: SessionUser, request_id: str, now: Optional[datetime] = None) -> None:
        req = self._get_pending(user, request_id)

        now = now or now_utc()
        if not self._requests.decide(request_id, status=RequestStatus.REJECTED, decided_at=now):
            raise ValidationError("Rejecting request failed")

        self._notifications.notify_employee(
            company_name=req.company_name,
            email=req.emp_email,
            title="Profile Update Rejected",
            message="Your requested profile changes were not approved.",
            now=now,
        )

    def list_for(self, user: SessionUser) -> Union[ProfileUpdateBoard, Sequence[ProfileUpdateRequest]]:
        company_name = require_company(user)
        if not user.is_employer:
            items = list(self._requests.list_by_email(company_name, user.email))
            items.sort(key=_sort_key, reverse=True)
            return items

        items = sorted(self._requests.list_by_company(company_name), key=_sort_key, reverse=True)
        return ProfileUpdateBoard(
            pending=[r for r in items if r.status == RequestStatus.PENDING],
            past=[r for r in items if r.status != RequestStatus.PENDING],
        )
