from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import PayrollStatus, PayslipRequestStatus
from ..database import collections
from ..database.firestore_base import FirestoreRepository
from .model import PayrollEntry, PayslipRequest
from .repository import PayrollRepository, PayslipRequestRepository


def _amount(value: Any) -> float:
    # Early runs stored display strings such as "₹52,000".
    if isinstance(value, str):
        cleaned = "".join(ch for ch in value if ch.isdigit() or ch in ".-")
        return float(cleaned or 0)
    return float(value or 0)


def _to_entry(data: Dict[str, Any]) -> PayrollEntry:
    amount = _amount(data.get("amount"))
    withholding = _amount(data.get("withholding"))
    return PayrollEntry(
        id=data["id"],
        transaction_id=data.get("transactionId") or "",
        name=data.get("name") or "",
        emp_email=data.get("empEmail") or "",
        department=data.get("department") or "",
        amount=amount,
        withholding=withholding,
        net_pay=_amount(data["netPay"]) if "netPay" in data else amount - withholding,
        status=PayrollStatus(data.get("status") or PayrollStatus.PAID.value),
        date=data.get("date") or "",
        company_name=data.get("companyName") or "",
        created_at=data.get("createdAt"),
    )


def _to_request(data: Dict[str, Any]) -> PayslipRequest:
    return PayslipRequest(
        id=data["id"],
        emp_email=data.get("empEmail") or "",
        emp_name=data.get("empName") or "",
        period=data.get("period") or "",
        status=PayslipRequestStatus(data.get("status") or PayslipRequestStatus.PENDING.value),
        company_name=data.get("companyName") or "",
        created_at=data.get("createdAt"),
        fulfilled_at=data.get("fulfilledAt"),
    )


class FirestorePayrollRepository(FirestoreRepository, PayrollRepository):
    collection = collections.PAYROLL

    def create(self, *, transaction_id, name, emp_email, department, amount, withholding, net_pay, date, company_name, created_at) -> str:
        return self._add(
            {
                "transactionId": transaction_id,
                "name": name,
                "empEmail": emp_email,
                "department": department,
                "amount": amount,
                "withholding": withholding,
                "netPay": net_pay,
                "status": PayrollStatus.PAID.value,
                "date": date,
                "companyName": company_name,
                "createdAt": created_at,
            }
        )

    def list_by_company(self, company_name: str) -> Sequence[PayrollEntry]:
        return [_to_entry(r) for r in self._where(companyName=company_name)]

    def list_by_email(self, company_name: str, emp_email: str) -> Sequence[PayrollEntry]:
        return [_to_entry(r) for r in self._where(companyName=company_name, empEmail=emp_email)]


class FirestorePayslipRequestRepository(FirestoreRepository, PayslipRequestRepository):
    collection = collections.PAYSLIP_REQUESTS

    def create(self, *, emp_email, emp_name, period, company_name, created_at) -> str:
        return self._add(
            {
                "empEmail": emp_email,
                "empName": emp_name,
                "period": period,
                "status": PayslipRequestStatus.PENDING.value,
                "companyName": company_name,
                "createdAt": created_at,
            }
        )

    def get(self, request_id: str) -> Optional[PayslipRequest]:
        data = self._fetch(request_id)
        return _to_request(data) if data else None

    def list_by_company(self, company_name: str) -> Sequence[PayslipRequest]:
        return [_to_request(r) for r in self._where(companyName=company_name)]

    def list_by_email(self, company_name: str, emp_email: str) -> Sequence[PayslipRequest]:
        return [_to_request(r) for r in self._where(companyName=company_name, empEmail=emp_email)]

    def mark_fulfilled(self, request_id: str, fulfilled_at) -> bool:
        return self._update(request_id, {"status": PayslipRequestStatus.FULFILLED.value, "fulfilledAt": fulfilled_at})
