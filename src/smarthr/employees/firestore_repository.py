from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.constants import DEFAULT_DEPARTMENT, DEFAULT_EMPLOYEE_ROLE
from ..core.enums import EmployeeStatus
from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import Employee
from .repository import EmployeeRepository


def _to_employee(data: Dict[str, Any]) -> Employee:
    salary = data.get("salary")
    return Employee(
        id=data["id"],
        uid=data.get("uid"),
        name=data.get("name") or "",
        email=data.get("email") or "",
        role=data.get("role") or DEFAULT_EMPLOYEE_ROLE,
        department=data.get("department") or DEFAULT_DEPARTMENT,
        status=EmployeeStatus(data.get("status") or EmployeeStatus.INVITED.value),
        company_name=data.get("companyName"),
        leave_balance=float(data.get("leaveBalance") or 0),
        permissions=list(data.get("permissions") or []),
        joined_at=data.get("joinedAt") or data.get("joinDate"),
        salary=float(salary) if salary is not None else None,
        bank_name=data.get("bankName"),
        account_number=data.get("accountNumber"),
        routing_number=data.get("routingNumber"),
        gov_id_number=data.get("govIdNumber"),
        address=data.get("address"),
    )


class FirestoreEmployeeRepository(FirestoreRepository, EmployeeRepository):
    collection = collections.EMPLOYEES

    def list_by_company(self, company_name: str) -> Sequence[Employee]:
        items = [_to_employee(r) for r in self._where(companyName=company_name)]
        items.sort(key=lambda e: e.name.lower())
        return items

    def count_by_company(self, company_name: str) -> int:
        return len(self._where(companyName=company_name))

    def get(self, employee_id: str) -> Optional[Employee]:
        data = self._fetch(employee_id)
        return _to_employee(data) if data else None

    def get_by_uid(self, uid: str) -> Optional[Employee]:
        rows = self._where(limit=1, uid=uid)
        return _to_employee(rows[0]) if rows else None

    def get_by_email(self, company_name: str, email: str) -> Optional[Employee]:
        rows = self._where(limit=1, companyName=company_name, email=email)
        return _to_employee(rows[0]) if rows else None

    def create(self, *, uid, name, email, role, department, company_name, joined_at) -> str:
        return self._add(
            {
                "uid": uid,
                "name": name,
                "email": email,
                "role": role,
                "department": department,
                "status": EmployeeStatus.INVITED.value,
                "companyName": company_name,
                "leaveBalance": 0,
                "permissions": [],
                "joinedAt": joined_at,
            }
        )

    def mark_active(self, employee_id: str) -> bool:
        return self._update(employee_id, {"status": EmployeeStatus.ACTIVE.value})

    def set_leave_balance(self, employee_id: str, balance: float) -> bool:
        return self._update(employee_id, {"leaveBalance": balance})

    def set_permissions(self, employee_id: str, permissions: Sequence[str]) -> bool:
        return self._update(employee_id, {"permissions": list(permissions)})

    def set_salary(self, employee_id: str, salary: float) -> bool:
        return self._update(employee_id, {"salary": salary})

    def apply_profile_changes(self, employee_id: str, changes: dict) -> bool:
        return self._update(employee_id, dict(changes))

    def delete(self, employee_id: str) -> bool:
        return self._delete(employee_id)
