from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.enums import LeaveStatus
from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveBalanceRepository, LeaveRepository


def _to_leave(data: Dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        id=data["id"],
        emp_name=data.get("empName") or "",
        emp_email=data.get("empEmail") or "",
        type=data.get("type") or "",
        is_half_day=bool(data.get("isHalfDay")),
        days=float(data.get("days") or 0),
        from_date=parse_iso_date(data["from"]),
        to_date=parse_iso_date(data.get("to") or data["from"]),
        status=LeaveStatus(data.get("status") or LeaveStatus.PENDING.value),
        description=data.get("description") or "",
        company_name=data.get("companyName") or "",
        created_at=data.get("createdAt"),
    )


def _to_balance(data: Dict[str, Any]) -> LeaveBalance:
    return LeaveBalance(
        id=data["id"],
        emp_email=data.get("empEmail") or "",
        type=data.get("type") or "",
        balance=float(data.get("balance") or 0),
        company_name=data.get("companyName") or "",
    )


class FirestoreLeaveRepository(FirestoreRepository, LeaveRepository):
    collection = collections.LEAVES

    def create(self, *, emp_name, emp_email, type, is_half_day, days, from_date, to_date, description, company_name, created_at) -> str:
        return self._add(
            {
                "empName": emp_name,
                "empEmail": emp_email,
                "type": type,
                "isHalfDay": is_half_day,
                "days": days,
                "from": from_date.isoformat(),
                "to": to_date.isoformat(),
                "status": LeaveStatus.PENDING.value,
                "description": description,
                "companyName": company_name,
                "createdAt": created_at,
            }
        )

    def get(self, leave_id: str) -> Optional[LeaveRequest]:
        data = self._fetch(leave_id)
        return _to_leave(data) if data else None

    def list_by_company(self, company_name: str) -> Sequence[LeaveRequest]:
        return [_to_leave(r) for r in self._where(companyName=company_name)]

    def list_by_email(self, company_name: str, emp_email: str) -> Sequence[LeaveRequest]:
        return [_to_leave(r) for r in self._where(companyName=company_name, empEmail=emp_email)]

    def set_status(self, leave_id: str, status: LeaveStatus) -> bool:
        return self._update(leave_id, {"status": status.value})


class FirestoreLeaveBalanceRepository(FirestoreRepository, LeaveBalanceRepository):
    collection = collections.LEAVE_BALANCES

    def create(self, *, emp_email, type, balance, company_name) -> str:
        return self._add({"empEmail": emp_email, "type": type, "balance": balance, "companyName": company_name})

    def get(self, balance_id: str) -> Optional[LeaveBalance]:
        data = self._fetch(balance_id)
        return _to_balance(data) if data else None

    def find(self, company_name: str, emp_email: str, type: str) -> Optional[LeaveBalance]:
        rows = self._where(limit=1, companyName=company_name, empEmail=emp_email, type=type)
        return _to_balance(rows[0]) if rows else None

    def list_by_company(self, company_name: str) -> Sequence[LeaveBalance]:
        return [_to_balance(r) for r in self._where(companyName=company_name)]

    def list_by_email(self, company_name: str, emp_email: str) -> Sequence[LeaveBalance]:
        return [_to_balance(r) for r in self._where(companyName=company_name, empEmail=emp_email)]

    def set_balance(self, balance_id: str, balance: float) -> bool:
        return self._update(balance_id, {"balance": balance})

    def delete(self, balance_id: str) -> bool:
        return self._delete(balance_id)
