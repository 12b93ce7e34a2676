from __future__ import annotations

import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_enum, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH, MIN_USERNAME_LENGTH
from ..core.enums import Department, Role, UserStatus
from ..core.exceptions import (
    AuthorizationError,
    ConstraintViolation,
    InvalidCredentials,
    NotFound,
    ValidationError,
)
from .model import Session, User
from .repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_LOGIN_MESSAGE = "Invalid username or password"


def new_session_token(now: datetime) -> str:
    """Issue timestamp plus two independent random parts."""

    return f"{int(now.timestamp() * 1000)}-{secrets.token_hex(8)}-{secrets.token_urlsafe(24)}"


class AuthService:
    """Use case: login, single-session enforcement, logout, password change."""

    def __init__(
        self,
        users: UserRepository,
        *,
        clock: Callable[[], datetime] = now_local,
        token_factory: Callable[[datetime], str] = new_session_token,
    ):
        self._users = users
        self._clock = clock
        self._token_factory = token_factory

    @staticmethod
    def _password_matches(user: User, password: str) -> bool:
        if not isinstance(password, str):
            return False
        try:
            return check_password_hash(user.password_hash, password)
        except (TypeError, ValueError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False

    def authenticate(self, username: str, password: str) -> Session:
        username = username.strip() if isinstance(username, str) else ""
        user = self._users.get_by_username(username)
        if not user or not user.is_active or not self._password_matches(user, password):
            logger.info("login rejected for username=%r", username)
            raise InvalidCredentials(INVALID_LOGIN_MESSAGE)

        issued_at = self._clock()
        token = self._token_factory(issued_at)
        # Overwriting the stored token invalidates every earlier session of this user.
        self._users.set_session(user.user_id, token=token, issued_at=issued_at)
        logger.info("user %s logged in", user.user_id)

        return Session(user=user.public(), token=token, issued_at=issued_at)

    def validate_session(self, user_id: int, token: Optional[str]) -> bool:
        if not token:
            return False
        user = self._users.get_by_id(int(user_id))
        if not user or not user.is_active or not user.session_token:
            return False
        return hmac.compare_digest(user.session_token, token)

    def logout(self, user_id: int) -> None:
        self._users.set_session(int(user_id), token=None, issued_at=None)
        logger.info("user %s logged out", user_id)

    def change_password(self, user_id: int, *, current_password: str, new_password: str, confirm_password: str) -> None:
        if not current_password or not new_password or not confirm_password:
            raise ValidationError("All password fields are required")
        if new_password != confirm_password:
            raise ValidationError("New passwords do not match")
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFound("User not found")
        if not self._password_matches(user, current_password):
            raise ValidationError("Current password is incorrect")

        self._users.update_password_hash(user.user_id, generate_password_hash(new_password))
        logger.info("user %s changed password", user.user_id)


@dataclass(frozen=True)
class UserStats:
    total: int
    admins: int
    chairpersons: int
    committees: int
    active: int


class UserService:
    """Use case: manage accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to manage users")

    def create_account(
        self,
        *,
        current_role: Role,
        display_name: str,
        username: str,
        password: str,
        department,
        role,
    ) -> int:
        self._require_admin(current_role)

        display_name = require_non_empty(display_name, "Name")
        username = require_non_empty(username, "Username")
        if len(username) < MIN_USERNAME_LENGTH:
            raise ValidationError(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        department = require_enum(department, Department, "department")
        role = require_enum(role, Role, "role")

        if self._users.get_by_username(username):
            raise ConstraintViolation("Username already exists")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            display_name=display_name,
            department=department,
            role=role,
        )
        logger.info("created user %s (%s, role=%s)", user_id, username, role.value)
        return user_id

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def stats(self) -> UserStats:
        users = list(self._users.list_all())
        return UserStats(
            total=len(users),
            admins=sum(1 for u in users if u.role == Role.ADMIN),
            chairpersons=sum(1 for u in users if u.role == Role.CHAIRPERSON),
            committees=sum(1 for u in users if u.role == Role.COMMITTEE),
            active=sum(1 for u in users if u.is_active),
        )

    def _get_other_user(self, *, current_user_id: int, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFound("User not found")
        if user.user_id == int(current_user_id):
            raise ValidationError("You cannot change your own account here")
        return user

    def set_status(self, *, current_role: Role, current_user_id: int, user_id: int, status) -> None:
        self._require_admin(current_role)
        status = require_enum(status, UserStatus, "status")
        user = self._get_other_user(current_user_id=current_user_id, user_id=user_id)

        self._users.set_status(user.user_id, status)
        if status == UserStatus.INACTIVE:
            # An inactive account must not keep a live session.
            self._users.set_session(user.user_id, token=None, issued_at=None)
        logger.info("user %s status -> %s", user.user_id, status.value)

    def toggle_status(self, *, current_role: Role, current_user_id: int, user_id: int) -> UserStatus:
        self._require_admin(current_role)
        user = self._get_other_user(current_user_id=current_user_id, user_id=user_id)
        new_status = UserStatus.INACTIVE if user.is_active else UserStatus.ACTIVE
        self.set_status(current_role=current_role, current_user_id=current_user_id, user_id=user_id, status=new_status)
        return new_status

    def delete_user(self, *, current_role: Role, current_user_id: int, user_id: int) -> None:
        self._require_admin(current_role)
        user = self._get_other_user(current_user_id=current_user_id, user_id=user_id)

        if not self._users.delete_by_id(user.user_id):
            raise NotFound("User not found")
        logger.info("deleted user %s", user.user_id)
