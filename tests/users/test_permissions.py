from __future__ import annotations

import pytest

from src.committee_portal.committee_portal.core.enums import Role
from src.committee_portal.committee_portal.users.permissions import Page, can_edit, can_view, permissions_for


def test_every_role_has_an_entry_for_every_page():
    for role in Role:
        assert set(permissions_for(role)) == {p.value for p in Page}


@pytest.mark.parametrize("role", [Role.CHAIRPERSON, Role.PROTOCOL, Role.REGISTRATION_COORDINATOR, Role.COMMITTEE])
def test_only_admin_manages_users(role):
    assert can_edit(Role.ADMIN, Page.USER_MANAGEMENT)
    assert not can_view(role, Page.USER_MANAGEMENT)


def test_committee_views_but_does_not_edit():
    assert can_view(Role.COMMITTEE, Page.ATTENDANCE)
    assert not can_edit(Role.COMMITTEE, Page.ATTENDANCE)
    assert can_view(Role.COMMITTEE, Page.TEAMS)
    assert not can_edit(Role.COMMITTEE, Page.TEAMS)


def test_registration_coordinator_registers_teams_but_only_views_attendance():
    assert can_edit(Role.REGISTRATION_COORDINATOR, Page.TEAMS)
    assert not can_edit(Role.REGISTRATION_COORDINATOR, Page.ATTENDANCE)
