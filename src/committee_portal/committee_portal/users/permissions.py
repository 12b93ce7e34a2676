"""Role based page permissions.

Every role can use the dashboard and its own profile; only admins manage accounts.
Committee members and registration coordinators only view attendance.
"""
from __future__ import annotations

from enum import Enum

from ..core.enums import Role


class Permission(str, Enum):
    FULL = "full"
    VIEW = "view"
    NONE = "none"


class Page(str, Enum):
    DASHBOARD = "dashboard"
    ATTENDANCE = "attendance"
    TEAMS = "teams"
    PROFILE = "profile"
    USER_MANAGEMENT = "user_management"


_F, _V, _N = Permission.FULL, Permission.VIEW, Permission.NONE

ROLE_PERMISSIONS: dict[Role, dict[Page, Permission]] = {
    Role.ADMIN: {
        Page.DASHBOARD: _F, Page.ATTENDANCE: _F, Page.TEAMS: _F, Page.PROFILE: _F, Page.USER_MANAGEMENT: _F,
    },
    Role.CHAIRPERSON: {
        Page.DASHBOARD: _F, Page.ATTENDANCE: _F, Page.TEAMS: _F, Page.PROFILE: _F, Page.USER_MANAGEMENT: _N,
    },
    Role.PROTOCOL: {
        Page.DASHBOARD: _F, Page.ATTENDANCE: _F, Page.TEAMS: _F, Page.PROFILE: _F, Page.USER_MANAGEMENT: _N,
    },
    Role.REGISTRATION_COORDINATOR: {
        Page.DASHBOARD: _F, Page.ATTENDANCE: _V, Page.TEAMS: _F, Page.PROFILE: _F, Page.USER_MANAGEMENT: _N,
    },
    Role.COMMITTEE: {
        Page.DASHBOARD: _F, Page.ATTENDANCE: _V, Page.TEAMS: _V, Page.PROFILE: _F, Page.USER_MANAGEMENT: _N,
    },
}


def permission_for(role: Role, page: Page) -> Permission:
    return ROLE_PERMISSIONS.get(role, {}).get(page, Permission.NONE)


def can_edit(role: Role, page: Page) -> bool:
    return permission_for(role, page) == Permission.FULL


def can_view(role: Role, page: Page) -> bool:
    return permission_for(role, page) in {Permission.FULL, Permission.VIEW}


def permissions_for(role: Role) -> dict[str, str]:
    return {page.value: permission_for(role, page).value for page in Page}
