from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Department, Role, UserStatus


@dataclass(frozen=True)
class User:
    """Domain entity: a portal account.

    Note: plain data object, no DB access code here.
    """

    user_id: int
    username: str
    password_hash: str
    display_name: str
    department: Department
    role: Role
    status: UserStatus = UserStatus.ACTIVE
    session_token: Optional[str] = None
    session_issued_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def public(self) -> "PublicUser":
        return PublicUser(
            user_id=self.user_id,
            username=self.username,
            display_name=self.display_name,
            department=self.department,
            role=self.role,
        )


@dataclass(frozen=True)
class PublicUser:
    """User without credentials; safe to hand to the client."""

    user_id: int
    username: str
    display_name: str
    department: Department
    role: Role

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "name": self.display_name,
            "department": self.department.value,
            "role": self.role.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PublicUser":
        return cls(
            user_id=int(data["id"]),
            username=data["username"],
            display_name=data["name"],
            department=Department(data["department"]),
            role=Role(data["role"]),
        )


@dataclass(frozen=True)
class Session:
    """Result of a successful login."""

    user: PublicUser
    token: str
    issued_at: datetime
