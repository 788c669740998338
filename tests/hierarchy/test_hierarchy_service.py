from __future__ import annotations

import pytest

from smarthr.core.enums import HierarchyLevel
from smarthr.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def _hire(fakes, fixed_now, name, company_name="Acme"):
    return fakes.employees.create(
        uid=None,
        name=name,
        email=f"{name.lower()}@{company_name.lower()}.test",
        role="Staff",
        department="Ops",
        company_name=company_name,
        joined_at=fixed_now,
    )


def test_unplaced_employees_default_to_staff(container, employer, acme):
    chart = container.hierarchy_service.chart(employer)

    assert [tier.level for tier in chart] == list(HierarchyLevel)
    assert [m.name for m in chart[-1].members] == ["Ann"]
    assert all(tier.members == [] for tier in chart[:-1])


def test_set_levels_moves_employees(container, fakes, employer, acme, fixed_now):
    bob = _hire(fakes, fixed_now, "Bob")

    updated = container.hierarchy_service.set_levels(
        user=employer, levels={acme.employee_id: "Executive", bob: "Team Lead"}, now=fixed_now
    )

    assert updated == 2
    chart = {tier.level: [m.name for m in tier.members] for tier in container.hierarchy_service.chart(employer)}
    assert chart[HierarchyLevel.EXECUTIVE] == ["Ann"]
    assert chart[HierarchyLevel.TEAM_LEAD] == ["Bob"]
    assert chart[HierarchyLevel.STAFF] == []
    assert fakes.hierarchy.rows[f"{bob}_lvl"].level == HierarchyLevel.TEAM_LEAD


def test_setting_a_level_again_replaces_it(container, fakes, employer, acme, fixed_now):
    container.hierarchy_service.set_levels(user=employer, levels={acme.employee_id: "Manager"}, now=fixed_now)
    container.hierarchy_service.set_levels(user=employer, levels={acme.employee_id: "Staff"}, now=fixed_now)

    assert len(fakes.hierarchy.rows) == 1
    assert [m.name for m in container.hierarchy_service.chart(employer)[-1].members] == ["Ann"]


def test_invalid_entries_write_nothing(container, fakes, employer, acme, fixed_now):
    outsider = _hire(fakes, fixed_now, "Zed", company_name="Globex")

    with pytest.raises(ValidationError, match="Level must be one of"):
        container.hierarchy_service.set_levels(user=employer, levels={acme.employee_id: "Intern"})
    with pytest.raises(NotFoundError):
        container.hierarchy_service.set_levels(user=employer, levels={acme.employee_id: "Manager", outsider: "Manager"})
    with pytest.raises(ValidationError):
        container.hierarchy_service.set_levels(user=employer, levels={})

    assert fakes.hierarchy.rows == {}


def test_hierarchy_is_employer_only(container, employee, acme):
    with pytest.raises(AuthorizationError):
        container.hierarchy_service.chart(employee)
    with pytest.raises(AuthorizationError):
        container.hierarchy_service.set_levels(user=employee, levels={acme.employee_id: "Executive"})
