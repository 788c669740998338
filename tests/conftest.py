from __future__ import annotations

import hashlib
import hmac
import re
from dataclasses import replace
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Optional

import pytest

from smarthr.announcements.model import Announcement
from smarthr.attendance.model import Punch
from smarthr.auth.identity import VerifiedToken
from smarthr.auth.model import SessionUser, User
from smarthr.billing.model import PaymentLog
from smarthr.chat.model import ChatMessage
from smarthr.companies.model import Company, Subscription
from smarthr.container import wire_container
from smarthr.core.constants import DEFAULT_CURRENCY
from smarthr.core.enums import (
    DocumentStatus,
    EmployeeStatus,
    JobStatus,
    LeaveStatus,
    PayrollStatus,
    PayslipRequestStatus,
    RequestStatus,
    Role,
    TaskStatus,
    UserStatus,
)
from smarthr.core.exceptions import AuthenticationError, GatewayError, ValidationError
from smarthr.documents.model import DocumentTemplate, EmployeeDocument
from smarthr.employees.model import Employee
from smarthr.hierarchy.model import LevelAssignment
from smarthr.leaves.model import LeaveBalance, LeaveRequest
from smarthr.notifications.model import Notification
from smarthr.payroll.model import PayrollEntry, PayslipRequest
from smarthr.profile_updates.model import ProfileUpdateRequest
from smarthr.recruitment.model import JobPosting
from smarthr.tasks.model import Task
from smarthr.teams.model import Team

COMPANY = "Acme"
EMPLOYER_UID = "employer-1"
EMPLOYER_EMAIL = "boss@acme.test"
EMPLOYEE_UID = "employee-1"
EMPLOYEE_EMAIL = "ann@acme.test"

KEY_SECRET = "rzp_test_secret"
WEBHOOK_SECRET = "whsec_test"


class _Table:
    prefix = "doc"

    def __init__(self):
        self.rows: dict[str, Any] = {}
        self._seq = 0

    def _next_id(self) -> str:
        self._seq += 1
        return f"{self.prefix}-{self._seq}"

    def _insert(self, factory) -> str:
        new_id = self._next_id()
        self.rows[new_id] = factory(new_id)
        return new_id

    def _replace(self, row_id: str, **changes) -> bool:
        row = self.rows.get(row_id)
        if row is None:
            return False
        self.rows[row_id] = replace(row, **changes)
        return True

    def _delete(self, row_id: str) -> bool:
        return self.rows.pop(row_id, None) is not None

    def _company(self, company_name: str):
        return [r for r in self.rows.values() if r.company_name == company_name]

    def get(self, row_id: str):
        return self.rows.get(row_id)

    def list_by_company(self, company_name: str):
        return self._company(company_name)


class InMemoryUsers(_Table):
    def create(self, *, uid, email, role, status=None, company_name=None, created_at) -> None:
        self.rows[uid] = User(
            uid=uid,
            email=email,
            role=role,
            status=status or UserStatus.ACTIVE,
            company_name=company_name,
            created_at=created_at,
        )

    def mark_active(self, uid: str, *, accepted_at: datetime) -> bool:
        return self._replace(uid, status=UserStatus.ACTIVE, accepted_at=accepted_at)

    def set_company_name(self, uid: str, company_name: str) -> bool:
        return self._replace(uid, company_name=company_name)

    def find_employer(self, company_name: str) -> Optional[User]:
        for user in self._company(company_name):
            if user.role == Role.EMPLOYER:
                return user
        return None

    def list_by_company(self, company_name: str):
        return sorted(self._company(company_name), key=lambda u: u.email)


class InMemoryCompanyData:
    """Records per collection as ``{collection: [companyName, ...]}`` plus the real user table."""

    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.records: dict[str, list[str]] = {}

    def list_user_ids(self, company_name: str):
        return [u.uid for u in self._users.list_by_company(company_name)]

    def delete_company_records(self, collection: str, company_name: str) -> int:
        if collection == "users":
            doomed = self.list_user_ids(company_name)
            for uid in doomed:
                self._users.rows.pop(uid)
            return len(doomed)
        rows = self.records.get(collection, [])
        kept = [name for name in rows if name != company_name]
        self.records[collection] = kept
        return len(rows) - len(kept)


class InMemoryCompanies(_Table):
    def save_profile(self, company_id, *, name, industry, size, timezone, owner_uid, created_at) -> None:
        current = self.rows.get(company_id) or Company(id=company_id, name=name)
        self.rows[company_id] = replace(
            current,
            name=name,
            industry=industry,
            size=size,
            timezone=timezone,
            owner_uid=owner_uid,
            created_at=created_at,
        )

    def set_subscription(self, company_id: str, subscription: Subscription) -> None:
        current = self.rows.get(company_id) or Company(id=company_id, name="")
        self.rows[company_id] = replace(current, subscription=subscription)

    def update_subscription(self, company_id: str, **fields) -> bool:
        current = self.rows.get(company_id)
        if current is None:
            return False
        self.rows[company_id] = replace(current, subscription=replace(current.subscription, **fields))
        return True

    def delete_by_name(self, name: str) -> int:
        doomed = [cid for cid, c in self.rows.items() if c.name == name]
        for cid in doomed:
            del self.rows[cid]
        return len(doomed)


def _snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


class InMemoryEmployees(_Table):
    prefix = "emp"

    def create(self, *, uid, name, email, role, department, company_name, joined_at) -> str:
        return self._insert(
            lambda new_id: Employee(
                id=new_id,
                uid=uid,
                name=name,
                email=email,
                role=role,
                department=department,
                status=EmployeeStatus.INVITED,
                company_name=company_name,
                joined_at=joined_at,
            )
        )

    def count_by_company(self, company_name: str) -> int:
        return len(self._company(company_name))

    def get_by_uid(self, uid: str):
        return next((e for e in self.rows.values() if e.uid == uid), None)

    def get_by_email(self, company_name: str, email: str):
        return next((e for e in self._company(company_name) if e.email == email), None)

    def mark_active(self, employee_id: str) -> bool:
        return self._replace(employee_id, status=EmployeeStatus.ACTIVE)

    def set_leave_balance(self, employee_id: str, balance: float) -> bool:
        return self._replace(employee_id, leave_balance=balance)

    def set_permissions(self, employee_id: str, permissions) -> bool:
        return self._replace(employee_id, permissions=list(permissions))

    def set_salary(self, employee_id: str, salary: float) -> bool:
        return self._replace(employee_id, salary=salary)

    def apply_profile_changes(self, employee_id: str, changes: dict) -> bool:
        return self._replace(employee_id, **{_snake(k): v for k, v in changes.items()})

    def delete(self, employee_id: str) -> bool:
        return self._delete(employee_id)


class InMemoryNotifications(_Table):
    prefix = "note"

    def create(self, *, title, message, timestamp, company_name, target_email=None, target_role=None) -> str:
        return self._insert(
            lambda new_id: Notification(
                id=new_id,
                title=title,
                message=message,
                timestamp=timestamp,
                target_email=target_email,
                target_role=target_role,
                company_name=company_name,
            )
        )

    def mark_read(self, notification_id: str) -> bool:
        return self._replace(notification_id, is_read=True)

    def titles(self) -> list[str]:
        return [n.title for n in self.rows.values()]


class InMemoryAnnouncements(_Table):
    prefix = "ann"

    def create(self, *, title, message, type, author_name, start_time, end_time, created_at, company_name) -> str:
        return self._insert(
            lambda new_id: Announcement(
                id=new_id,
                title=title,
                message=message,
                type=type,
                author_name=author_name,
                created_at=created_at,
                company_name=company_name,
                start_time=start_time,
                end_time=end_time,
            )
        )

    def delete(self, announcement_id: str) -> bool:
        return self._delete(announcement_id)


class InMemoryLeaves(_Table):
    prefix = "leave"

    def create(self, *, emp_name, emp_email, type, is_half_day, days, from_date, to_date, description, company_name, created_at) -> str:
        return self._insert(
            lambda new_id: LeaveRequest(
                id=new_id,
                emp_name=emp_name,
                emp_email=emp_email,
                type=type,
                is_half_day=is_half_day,
                days=days,
                from_date=from_date,
                to_date=to_date,
                status=LeaveStatus.PENDING,
                description=description,
                company_name=company_name,
                created_at=created_at,
            )
        )

    def list_by_email(self, company_name: str, emp_email: str):
        return [l for l in self._company(company_name) if l.emp_email == emp_email]

    def set_status(self, leave_id: str, status: LeaveStatus) -> bool:
        return self._replace(leave_id, status=status)


class InMemoryLeaveBalances(_Table):
    prefix = "bal"

    def create(self, *, emp_email, type, balance, company_name) -> str:
        return self._insert(
            lambda new_id: LeaveBalance(id=new_id, emp_email=emp_email, type=type, balance=balance, company_name=company_name)
        )

    def find(self, company_name: str, emp_email: str, type: str):
        return next((b for b in self.list_by_email(company_name, emp_email) if b.type == type), None)

    def list_by_email(self, company_name: str, emp_email: str):
        return [b for b in self._company(company_name) if b.emp_email == emp_email]

    def set_balance(self, balance_id: str, balance: float) -> bool:
        return self._replace(balance_id, balance=balance)

    def delete(self, balance_id: str) -> bool:
        return self._delete(balance_id)


class InMemoryPayroll(_Table):
    prefix = "pay"

    def create(self, *, transaction_id, name, emp_email, department, amount, withholding, net_pay, date, company_name, created_at) -> str:
        return self._insert(
            lambda new_id: PayrollEntry(
                id=new_id,
                transaction_id=transaction_id,
                name=name,
                emp_email=emp_email,
                department=department,
                amount=amount,
                withholding=withholding,
                net_pay=net_pay,
                status=PayrollStatus.PAID,
                date=date,
                company_name=company_name,
                created_at=created_at,
            )
        )

    def list_by_email(self, company_name: str, emp_email: str):
        return [p for p in self._company(company_name) if p.emp_email == emp_email]


class InMemoryPayslips(_Table):
    prefix = "slip"

    def create(self, *, emp_email, emp_name, period, company_name, created_at) -> str:
        return self._insert(
            lambda new_id: PayslipRequest(
                id=new_id,
                emp_email=emp_email,
                emp_name=emp_name,
                period=period,
                status=PayslipRequestStatus.PENDING,
                company_name=company_name,
                created_at=created_at,
            )
        )

    def list_by_email(self, company_name: str, emp_email: str):
        return [p for p in self._company(company_name) if p.emp_email == emp_email]

    def mark_fulfilled(self, request_id: str, fulfilled_at: datetime) -> bool:
        return self._replace(request_id, status=PayslipRequestStatus.FULFILLED, fulfilled_at=fulfilled_at)


class InMemoryPaymentLogs(_Table):
    prefix = "log"

    def create(
        self,
        *,
        company_id,
        status,
        created_at,
        transaction_id=None,
        order_id=None,
        subscription_id=None,
        amount=None,
        currency=None,
    ) -> str:
        return self._insert(
            lambda new_id: PaymentLog(
                id=new_id,
                company_id=company_id,
                transaction_id=transaction_id,
                order_id=order_id,
                subscription_id=subscription_id,
                amount=amount or 0,
                currency=currency or DEFAULT_CURRENCY,
                status=status,
                created_at=created_at,
            )
        )

    def list_by_company(self, company_id: str):
        return [p for p in self.rows.values() if p.company_id == company_id]


class InMemoryWebhookEvents:
    def __init__(self):
        self.processed: dict[str, str] = {}

    def mark_processed(self, event_id: str, *, event: str, processed_at: datetime) -> bool:
        if event_id in self.processed:
            return False
        self.processed[event_id] = event
        return True

    def release(self, event_id: str) -> None:
        self.processed.pop(event_id, None)


class InMemorySeatOrderClaims:
    def __init__(self):
        self.claims: dict[str, dict] = {}

    def claim(self, order_id: str, *, payment_id, company_id, seats, claimed_at) -> bool:
        if order_id in self.claims:
            return False
        self.claims[order_id] = {"payment_id": payment_id, "company_id": company_id, "seats": seats}
        return True

    def release(self, order_id: str) -> None:
        self.claims.pop(order_id, None)


class InMemoryTeams(_Table):
    prefix = "team"

    def create(self, *, name, leader_email, member_emails, team_type, hierarchy, company_name, created_at) -> str:
        return self._insert(
            lambda new_id: Team(
                id=new_id,
                name=name,
                leader_email=leader_email,
                company_name=company_name,
                member_emails=list(member_emails),
                team_type=team_type,
                hierarchy=hierarchy,
                created_at=created_at,
            )
        )

    def update(self, team_id: str, **fields) -> bool:
        return self._replace(team_id, **fields)

    def delete(self, team_id: str) -> bool:
        return self._delete(team_id)


class InMemoryChat(_Table):
    prefix = "msg"

    def create(self, *, sender, receiver, text, timestamp, company_name) -> str:
        return self._insert(
            lambda new_id: ChatMessage(
                id=new_id,
                sender=sender,
                receiver=receiver,
                text=text,
                timestamp=timestamp,
                company_name=company_name,
            )
        )

    def list_involving(self, company_name: str, email: str):
        return [m for m in self._company(company_name) if email in (m.sender, m.receiver)]


class InMemoryJobs(_Table):
    prefix = "job"

    def create(self, *, title, department, type, description, company_name, posted_at) -> str:
        return self._insert(
            lambda new_id: JobPosting(
                id=new_id,
                title=title,
                department=department,
                type=type,
                description=description,
                status=JobStatus.OPEN,
                company_name=company_name,
                posted_at=posted_at,
            )
        )

    def set_status(self, job_id: str, status: JobStatus) -> bool:
        return self._replace(job_id, status=status)

    def delete(self, job_id: str) -> bool:
        return self._delete(job_id)


class InMemoryProfileUpdates(_Table):
    prefix = "pu"

    def create(self, *, emp_email, emp_name, changes, company_name, created_at) -> str:
        return self._insert(
            lambda new_id: ProfileUpdateRequest(
                id=new_id,
                emp_email=emp_email,
                emp_name=emp_name,
                status=RequestStatus.PENDING,
                company_name=company_name,
                created_at=created_at,
                changes=dict(changes),
            )
        )

    def list_by_email(self, company_name: str, emp_email: str):
        return [r for r in self._company(company_name) if r.emp_email == emp_email]

    def decide(self, request_id: str, *, status: RequestStatus, decided_at: datetime) -> bool:
        return self._replace(request_id, status=status, decided_at=decided_at)


class InMemoryAttendance(_Table):
    prefix = "punch"

    def create(self, *, emp_email, type, timestamp, company_name) -> str:
        return self._insert(
            lambda new_id: Punch(id=new_id, emp_email=emp_email, type=type, timestamp=timestamp, company_name=company_name)
        )

    def list_by_email(self, company_name: str, emp_email: str):
        return [p for p in self._company(company_name) if p.emp_email == emp_email]

    def last_for(self, company_name: str, emp_email: str):
        punches = self.list_by_email(company_name, emp_email)
        return max(punches, key=lambda p: p.timestamp) if punches else None


class InMemoryTasks(_Table):
    prefix = "task"

    def create(self, *, title, description, assignee_email, priority, due_date, company_name, created_at) -> str:
        return self._insert(
            lambda new_id: Task(
                id=new_id,
                title=title,
                description=description,
                assignee_email=assignee_email,
                status=TaskStatus.PENDING,
                priority=priority,
                company_name=company_name,
                due_date=due_date,
                created_at=created_at,
            )
        )

    def list_by_assignee(self, company_name: str, assignee_email: str):
        return [t for t in self._company(company_name) if t.assignee_email == assignee_email]

    def set_status(self, task_id: str, status: TaskStatus) -> bool:
        return self._replace(task_id, status=status)


class InMemoryDocuments(_Table):
    prefix = "docu"

    def create(self, *, emp_email, title, company_name, requested_at) -> str:
        return self._insert(
            lambda new_id: EmployeeDocument(
                id=new_id,
                emp_email=emp_email,
                title=title,
                status=DocumentStatus.PENDING,
                company_name=company_name,
                requested_at=requested_at,
            )
        )

    def list_by_email(self, company_name: str, emp_email: str):
        return [d for d in self._company(company_name) if d.emp_email == emp_email]

    def mark_uploaded(self, document_id: str, *, url: str, uploaded_at: datetime) -> bool:
        return self._replace(document_id, url=url, status=DocumentStatus.UPLOADED, uploaded_at=uploaded_at)

    def set_status(self, document_id: str, status: DocumentStatus) -> bool:
        return self._replace(document_id, status=status)


class InMemoryDocumentTemplates(_Table):
    prefix = "tpl"

    def create(self, *, title, required, company_name, created_at) -> str:
        return self._insert(
            lambda new_id: DocumentTemplate(
                id=new_id, title=title, required=required, company_name=company_name, created_at=created_at
            )
        )

    def delete(self, template_id: str) -> bool:
        return self._delete(template_id)


class InMemoryHierarchy(_Table):
    """Keyed by employee id, like the ``<empId>_lvl`` documents."""

    def set_level(self, *, emp_id, level, company_name, updated_at) -> None:
        self.rows[f"{emp_id}_lvl"] = LevelAssignment(
            id=f"{emp_id}_lvl", emp_id=emp_id, level=level, company_name=company_name, updated_at=updated_at
        )


class FakeIdentity:
    """Tokens are registered up front; cookies are ``cookie-<uid>``."""

    def __init__(self):
        self.id_tokens: dict[str, VerifiedToken] = {}
        self.sessions: dict[str, VerifiedToken] = {}
        self.accounts: dict[str, str] = {}
        self.deleted: list[str] = []
        self.fail_delete: set[str] = set()
        self.last_expires_in = None

    def register_token(self, uid: str, email: str) -> str:
        token = f"idtoken-{uid}"
        self.id_tokens[token] = VerifiedToken(uid=uid, email=email)
        return token

    def login(self, uid: str, email: str) -> str:
        cookie = f"cookie-{uid}"
        self.sessions[cookie] = VerifiedToken(uid=uid, email=email)
        return cookie

    def create_session_cookie(self, id_token: str, *, expires_in) -> str:
        token = self.id_tokens.get(id_token)
        if token is None:
            raise AuthenticationError("Invalid ID token")
        self.last_expires_in = expires_in
        return self.login(token.uid, token.email)

    def verify_session_cookie(self, cookie: str) -> VerifiedToken:
        token = self.sessions.get(cookie)
        if token is None:
            raise AuthenticationError("Unauthorized")
        return token

    def verify_id_token(self, id_token: str) -> VerifiedToken:
        token = self.id_tokens.get(id_token)
        if token is None:
            raise AuthenticationError("Invalid ID token")
        return token

    def create_user(self, *, email: str, password: str, display_name=None) -> str:
        if email in self.accounts.values():
            raise ValidationError("An account with this email already exists")
        uid = f"uid-{len(self.accounts) + 1}"
        self.accounts[uid] = email
        return uid

    def delete_user(self, uid: str) -> None:
        if uid in self.fail_delete:
            raise GatewayError("Could not delete user")
        self.deleted.append(uid)


class FakeGateway:
    """Signs and verifies the way Razorpay does: HMAC-SHA256 hex digests."""

    def __init__(self, key_secret: str = KEY_SECRET, webhook_secret: str = WEBHOOK_SECRET):
        self._key_secret = key_secret
        self._webhook_secret = webhook_secret
        self.orders: list[dict] = []
        self.subscriptions: list[dict] = []

    @staticmethod
    def _sign(secret: str, message: str) -> str:
        return hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()

    def sign_payment(self, order_id: str, payment_id: str) -> str:
        return self._sign(self._key_secret, f"{order_id}|{payment_id}")

    def sign_webhook(self, body) -> str:
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        return self._sign(self._webhook_secret, body)

    def create_order(self, *, amount, currency, receipt, notes):
        order = {"id": f"order_{len(self.orders) + 1}", "amount": amount, "currency": currency, "receipt": receipt, "notes": notes}
        self.orders.append(order)
        return order

    def fetch_order(self, order_id: str):
        for order in self.orders:
            if order["id"] == order_id:
                return order
        raise GatewayError(f"The id provided does not exist: {order_id}")

    def create_subscription(self, *, plan_id, quantity, total_count, notes):
        subscription = {
            "id": f"sub_{len(self.subscriptions) + 1}",
            "plan_id": plan_id,
            "quantity": quantity,
            "total_count": total_count,
            "notes": notes,
        }
        self.subscriptions.append(subscription)
        return subscription

    def verify_payment_signature(self, *, order_id, payment_id, signature) -> bool:
        return hmac.compare_digest(self.sign_payment(order_id, payment_id), signature)

    def verify_webhook_signature(self, body, signature) -> bool:
        return hmac.compare_digest(self.sign_webhook(body), signature)


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 2, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def employer():
    return SessionUser(uid=EMPLOYER_UID, email=EMPLOYER_EMAIL, role=Role.EMPLOYER, status=UserStatus.ACTIVE, company_name=COMPANY)


@pytest.fixture
def employee():
    return SessionUser(uid=EMPLOYEE_UID, email=EMPLOYEE_EMAIL, role=Role.EMPLOYEE, status=UserStatus.ACTIVE, company_name=COMPANY)


@pytest.fixture
def fakes():
    users = InMemoryUsers()
    return SimpleNamespace(
        users=users,
        companies=InMemoryCompanies(),
        company_data=InMemoryCompanyData(users),
        employees=InMemoryEmployees(),
        notifications=InMemoryNotifications(),
        announcements=InMemoryAnnouncements(),
        leaves=InMemoryLeaves(),
        leave_balances=InMemoryLeaveBalances(),
        payroll=InMemoryPayroll(),
        payslips=InMemoryPayslips(),
        payment_logs=InMemoryPaymentLogs(),
        webhook_events=InMemoryWebhookEvents(),
        seat_claims=InMemorySeatOrderClaims(),
        teams=InMemoryTeams(),
        chat=InMemoryChat(),
        jobs=InMemoryJobs(),
        profile_updates=InMemoryProfileUpdates(),
        attendance=InMemoryAttendance(),
        tasks=InMemoryTasks(),
        documents=InMemoryDocuments(),
        doc_templates=InMemoryDocumentTemplates(),
        hierarchy=InMemoryHierarchy(),
        identity=FakeIdentity(),
        gateway=FakeGateway(),
    )


@pytest.fixture
def container(fakes):
    return wire_container(**vars(fakes), plan_id="plan_test")


@pytest.fixture
def acme(fakes, fixed_now):
    """Employer plus one active employee, both registered as users of ``Acme``."""
    fakes.users.create(uid=EMPLOYER_UID, email=EMPLOYER_EMAIL, role=Role.EMPLOYER, company_name=COMPANY, created_at=fixed_now)
    fakes.users.create(uid=EMPLOYEE_UID, email=EMPLOYEE_EMAIL, role=Role.EMPLOYEE, company_name=COMPANY, created_at=fixed_now)
    fakes.companies.save_profile(
        EMPLOYER_UID,
        name=COMPANY,
        industry="Tech",
        size="1-10",
        timezone="UTC",
        owner_uid=EMPLOYER_UID,
        created_at=fixed_now,
    )
    employee_id = fakes.employees.create(
        uid=EMPLOYEE_UID,
        name="Ann",
        email=EMPLOYEE_EMAIL,
        role="Engineer",
        department="R&D",
        company_name=COMPANY,
        joined_at=fixed_now,
    )
    fakes.employees.mark_active(employee_id)
    return SimpleNamespace(employee_id=employee_id)


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    from smarthr.main import create_app

    flask_app = create_app(container=container)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client, fakes):
    """Set the identity cookie for a uid/email pair on the test client."""

    def _login(uid: str = EMPLOYER_UID, email: str = EMPLOYER_EMAIL):
        client.set_cookie("session", fakes.identity.login(uid, email))
        return client

    return _login
