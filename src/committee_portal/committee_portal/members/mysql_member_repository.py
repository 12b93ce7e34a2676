from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Department
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import CommitteeMember
from .repository import MemberRepository


def _to_member(row: dict) -> CommitteeMember:
    return CommitteeMember(
        member_id=int(row["id"]),
        name=row["name"],
        department=Department(row["department"]),
        created_at=row.get("created_at"),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: int) -> Optional[CommitteeMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, department, created_at FROM committee_members WHERE id=%s", (int(member_id),))
            row = fetchone(cur)
            return _to_member(row) if row else None

    def list_all(self, *, department: Optional[Department] = None) -> Sequence[CommitteeMember]:
        sql = "SELECT id, name, department, created_at FROM committee_members"
        params: tuple = ()
        if department is not None:
            sql += " WHERE department=%s"
            params = (department.value,)
        sql += " ORDER BY name ASC, id ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_member(r) for r in fetchall(cur)]

    def create(self, *, name: str, department: Department) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO committee_members(name, department) VALUES(%s,%s)",
                (name, department.value),
            )
            return int(cur.lastrowid)

    def delete_by_id(self, member_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM committee_members WHERE id=%s", (int(member_id),))
            return cur.rowcount > 0
