from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import Department, Role, UserStatus
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this protocol, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        display_name: str,
        department: Department,
        role: Role,
    ) -> int:
        """Insert an active user; raises ConstraintViolation on a duplicate username."""

        raise NotImplementedError

    def set_session(self, user_id: int, *, token: Optional[str], issued_at: Optional[datetime]) -> bool:
        """Replace the current session token (None clears it)."""

        raise NotImplementedError

    def update_password_hash(self, user_id: int, password_hash: str) -> bool:
        raise NotImplementedError

    def set_status(self, user_id: int, status: UserStatus) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError
