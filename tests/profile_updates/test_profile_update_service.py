from __future__ import annotations

from datetime import timedelta

import pytest

from smarthr.core.enums import RequestStatus
from smarthr.core.exceptions import AuthorizationError, ValidationError
from smarthr.profile_updates.model import ProfileUpdateBoard


def _submit(container, employee, now, **changes):
    changes = changes or {"bankName": "HDFC", "accountNumber": " 0012345 "}
    return container.profile_update_service.submit(user=employee, changes=changes, now=now)


def test_submit_keeps_only_allowed_non_empty_fields(container, fakes, employee, acme, fixed_now):
    request_id = container.profile_update_service.submit(
        user=employee,
        changes={"bankName": "HDFC", "address": "  ", "accountNumber": " 0012345 "},
        now=fixed_now,
    )

    req = fakes.profile_updates.get(request_id)
    assert req.status == RequestStatus.PENDING
    assert req.changes == {"bankName": "HDFC", "accountNumber": "0012345"}
    assert fakes.notifications.titles() == ["Profile Update Requested"]


@pytest.mark.parametrize("changes", [{"salary": "1"}, {"address": ""}, "bankName=HDFC"])
def test_submit_rejects_bad_changes(container, employee, acme, fixed_now, changes):
    with pytest.raises(ValidationError):
        container.profile_update_service.submit(user=employee, changes=changes, now=fixed_now)


def test_employer_cannot_submit(container, employer):
    with pytest.raises(AuthorizationError):
        container.profile_update_service.submit(user=employer, changes={"bankName": "HDFC"})


def test_approve_applies_changes_to_employee(container, fakes, employer, employee, acme, fixed_now):
    request_id = _submit(container, employee, fixed_now)

    container.profile_update_service.approve(user=employer, request_id=request_id, now=fixed_now)

    updated = fakes.employees.get(acme.employee_id)
    assert updated.bank_name == "HDFC"
    assert updated.account_number == "0012345"
    req = fakes.profile_updates.get(request_id)
    assert req.status == RequestStatus.APPROVED
    assert req.decided_at == fixed_now
    assert "Profile Update Approved" in fakes.notifications.titles()

    with pytest.raises(ValidationError):
        container.profile_update_service.approve(user=employer, request_id=request_id)


def test_reject_leaves_employee_untouched(container, fakes, employer, employee, acme, fixed_now):
    request_id = _submit(container, employee, fixed_now)

    container.profile_update_service.reject(user=employer, request_id=request_id, now=fixed_now)

    assert fakes.employees.get(acme.employee_id).bank_name is None
    assert fakes.profile_updates.get(request_id).status == RequestStatus.REJECTED


def test_employee_cannot_approve_own_request(container, employee, acme, fixed_now):
    request_id = _submit(container, employee, fixed_now)

    with pytest.raises(AuthorizationError):
        container.profile_update_service.approve(user=employee, request_id=request_id)


def test_employer_board_splits_pending_and_past(container, employer, employee, acme, fixed_now):
    first = _submit(container, employee, fixed_now)
    second = _submit(container, employee, fixed_now + timedelta(minutes=5), address="1 Main St")
    container.profile_update_service.reject(user=employer, request_id=first, now=fixed_now)

    board = container.profile_update_service.list_for(employer)
    assert isinstance(board, ProfileUpdateBoard)
    assert [r.id for r in board.pending] == [second]
    assert [r.id for r in board.past] == [first]

    mine = container.profile_update_service.list_for(employee)
    assert [r.id for r in mine] == [second, first]
