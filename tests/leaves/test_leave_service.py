from __future__ import annotations

from datetime import date

import pytest

from smarthr.auth.model import SessionUser
from smarthr.core.enums import LeaveStatus, Role, UserStatus
from smarthr.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from smarthr.leaves.service import leave_days


def _request(container, employee, fixed_now, **overrides):
    data = dict(type="Sick Leave", from_date="2026-03-10", to_date="2026-03-12", description="Flu", now=fixed_now)
    data.update(overrides)
    return container.leave_service.request_leave(user=employee, **data)


def test_leave_days_counts_inclusive_calendar_days():
    assert leave_days(date(2026, 3, 10), date(2026, 3, 12)) == 3.0
    assert leave_days(date(2026, 3, 10), date(2026, 3, 10)) == 1.0
    assert leave_days(date(2026, 3, 10), date(2026, 3, 20), is_half_day=True) == 0.5


def test_request_leave_stores_pending_request_and_notifies_employer(container, fakes, employee, acme, fixed_now):
    leave_id = _request(container, employee, fixed_now)

    leave = fakes.leaves.get(leave_id)
    assert leave.status == LeaveStatus.PENDING
    assert leave.emp_name == "Ann"
    assert leave.days == 3.0
    assert leave.from_date == date(2026, 3, 10)

    (note,) = fakes.notifications.rows.values()
    assert note.title == "New Leave Request"
    assert note.target_role == Role.EMPLOYER


def test_half_day_is_single_day_half_day_type(container, fakes, employee, acme, fixed_now):
    leave_id = _request(container, employee, fixed_now, type="", to_date=None, is_half_day=True)

    leave = fakes.leaves.get(leave_id)
    assert leave.type == "Half Day Leave"
    assert leave.days == 0.5
    assert leave.to_date == leave.from_date


@pytest.mark.parametrize(
    "overrides",
    [
        {"to_date": "2026-03-01"},
        {"description": ""},
        {"from_date": "10/03/2026"},
        {"type": ""},
    ],
)
def test_request_leave_validation(container, employee, acme, fixed_now, overrides):
    with pytest.raises(ValidationError):
        _request(container, employee, fixed_now, **overrides)


def test_employer_cannot_request_leave(container, employer, fixed_now):
    with pytest.raises(AuthorizationError):
        _request(container, employer, fixed_now)


def test_approve_deducts_matching_balance(container, fakes, employer, employee, acme, fixed_now):
    container.leave_service.allocate_balances(user=employer, emp_email=employee.email, sick=10, casual=5)
    leave_id = _request(container, employee, fixed_now)

    container.leave_service.approve(user=employer, leave_id=leave_id, now=fixed_now)

    assert fakes.leaves.get(leave_id).status == LeaveStatus.APPROVED
    balances = {b.type: b.balance for b in container.leave_service.list_balances(employee)}
    assert balances == {"Sick Leave": 7.0, "Casual Leave": 5.0}
    assert "Leave Approved" in fakes.notifications.titles()


def test_half_day_approval_draws_from_casual_balance(container, fakes, employer, employee, acme, fixed_now):
    container.leave_service.allocate_balances(user=employer, emp_email=employee.email, casual=5)
    leave_id = _request(container, employee, fixed_now, is_half_day=True)

    container.leave_service.approve(user=employer, leave_id=leave_id, now=fixed_now)

    (balance,) = container.leave_service.list_balances(employee)
    assert balance.balance == 4.5


def test_balance_never_goes_negative(container, employer, employee, acme, fixed_now):
    container.leave_service.allocate_balances(user=employer, emp_email=employee.email, sick=2)
    leave_id = _request(container, employee, fixed_now)

    container.leave_service.approve(user=employer, leave_id=leave_id, now=fixed_now)

    (balance,) = container.leave_service.list_balances(employee)
    assert balance.balance == 0.0


def test_decided_leave_cannot_be_decided_again(container, fakes, employer, employee, acme, fixed_now):
    leave_id = _request(container, employee, fixed_now)
    container.leave_service.deny(user=employer, leave_id=leave_id, now=fixed_now)

    assert fakes.leaves.get(leave_id).status == LeaveStatus.DENIED
    assert "Leave Denied" in fakes.notifications.titles()
    with pytest.raises(ValidationError):
        container.leave_service.approve(user=employer, leave_id=leave_id, now=fixed_now)


def test_other_company_cannot_decide(container, employee, acme, fixed_now):
    leave_id = _request(container, employee, fixed_now)
    outsider = SessionUser(uid="x", email="x@other.test", role=Role.EMPLOYER, status=UserStatus.ACTIVE, company_name="Other")

    with pytest.raises(NotFoundError):
        container.leave_service.approve(user=outsider, leave_id=leave_id)


def test_list_for_filters_by_role_and_type(container, fakes, employer, employee, acme, fixed_now):
    _request(container, employee, fixed_now, from_date="2026-03-01", to_date="2026-03-01")
    _request(container, employee, fixed_now, type="Annual Leave", from_date="2026-04-01", to_date="2026-04-03")
    fakes.leaves.create(
        emp_name="Bob",
        emp_email="bob@acme.test",
        type="Sick Leave",
        is_half_day=False,
        days=1,
        from_date=date(2026, 3, 5),
        to_date=date(2026, 3, 5),
        description="x",
        company_name="Acme",
        created_at=fixed_now,
    )

    mine = container.leave_service.list_for(employee)
    assert [l.from_date for l in mine] == [date(2026, 4, 1), date(2026, 3, 1)]

    sick = container.leave_service.list_for(employer, type="Sick Leave")
    assert [l.emp_name for l in sick] == ["Bob", "Ann"]


def test_allocate_requires_known_employee_and_a_positive_amount(container, employer, acme):
    with pytest.raises(NotFoundError):
        container.leave_service.allocate_balances(user=employer, emp_email="nobody@acme.test", sick=3)
    with pytest.raises(ValidationError):
        container.leave_service.allocate_balances(user=employer, emp_email="ann@acme.test", sick=0)
    with pytest.raises(ValidationError):
        container.leave_service.allocate_balances(user=employer, emp_email="ann@acme.test", sick=-2)


def test_reallocating_overwrites_existing_balance(container, employer, employee, acme):
    first = container.leave_service.allocate_balances(user=employer, emp_email="ANN@acme.test", annual=12)
    second = container.leave_service.allocate_balances(user=employer, emp_email="ann@acme.test", annual=15)

    assert first == second
    (balance,) = container.leave_service.list_balances(employee)
    assert balance.type == "Annual Leave"
    assert balance.balance == 15.0


def test_update_and_delete_balance(container, fakes, employer, employee, acme):
    (balance_id,) = container.leave_service.allocate_balances(user=employer, emp_email=employee.email, other=2)

    container.leave_service.update_balance(user=employer, balance_id=balance_id, balance="3.5")
    assert fakes.leave_balances.get(balance_id).balance == 3.5

    with pytest.raises(AuthorizationError):
        container.leave_service.delete_balance(user=employee, balance_id=balance_id)

    container.leave_service.delete_balance(user=employer, balance_id=balance_id)
    assert container.leave_service.list_balances(employer) == []
