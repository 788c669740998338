from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def list_by_company(self, company_name: str) -> Sequence[Employee]:
        raise NotImplementedError

    def count_by_company(self, company_name: str) -> int:
        raise NotImplementedError

    def get(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_uid(self, uid: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, company_name: str, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        uid: str,
        name: str,
        email: str,
        role: str,
        department: str,
        company_name: str,
        joined_at: datetime,
    ) -> str:
        raise NotImplementedError

    def mark_active(self, employee_id: str) -> bool:
        raise NotImplementedError

    def set_leave_balance(self, employee_id: str, balance: float) -> bool:
        raise NotImplementedError

    def set_permissions(self, employee_id: str, permissions: Sequence[str]) -> bool:
        raise NotImplementedError

    def set_salary(self, employee_id: str, salary: float) -> bool:
        raise NotImplementedError

    def apply_profile_changes(self, employee_id: str, changes: dict) -> bool:
        """``changes`` uses stored (camelCase) field names."""

        raise NotImplementedError

    def delete(self, employee_id: str) -> bool:
        raise NotImplementedError
