from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import Department, Role, UserStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = """
    id, username, password_hash, display_name, department, role, status,
    session_token, session_issued_at, created_at
"""


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        display_name=row["display_name"],
        department=Department(row["department"]),
        role=Role(row["role"]),
        status=UserStatus(row.get("status") or UserStatus.ACTIVE.value),
        session_token=row.get("session_token"),
        session_issued_at=row.get("session_issued_at"),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        display_name: str,
        department: Department,
        role: Role,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(username, password_hash, display_name, department, role, status)
                VALUES(%s,%s,%s,%s,%s,'active')
                """,
                (username, password_hash, display_name, department.value, role.value),
            )
            return int(cur.lastrowid)

    def set_session(self, user_id: int, *, token: Optional[str], issued_at: Optional[datetime]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET session_token=%s, session_issued_at=%s WHERE id=%s",
                (token, issued_at, int(user_id)),
            )
            return cur.rowcount > 0

    def update_password_hash(self, user_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE id=%s", (password_hash, int(user_id)))
            return cur.rowcount > 0

    def set_status(self, user_id: int, status: UserStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET status=%s WHERE id=%s", (status.value, int(user_id)))
            return cur.rowcount > 0

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (int(user_id),))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY created_at DESC, id DESC")
            return [_to_user(r) for r in fetchall(cur)]
