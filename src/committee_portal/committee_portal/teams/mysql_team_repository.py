from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Group, Participant
from .repository import TeamRepository


def _to_group(r: dict) -> Group:
    return Group(group_id=int(r["id"]), name=r["name"], created_at=r.get("created_at"))


def _to_participant(r: dict) -> Participant:
    return Participant(
        participant_id=int(r["id"]),
        name=r["name"],
        group_id=int(r["group_id"]) if r.get("group_id") is not None else None,
        registered_at=r.get("registered_at"),
        registered_by=r.get("registered_by"),
    )


class MySQLTeamRepository(TeamRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_groups(self) -> Sequence[Group]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, created_at FROM `groups` ORDER BY id")
            return [_to_group(r) for r in fetchall(cur)]

    def get_group(self, group_id: int) -> Optional[Group]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, created_at FROM `groups` WHERE id=%s", (int(group_id),))
            row = fetchone(cur)
            return _to_group(row) if row else None

    def create_group(self, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO `groups`(name) VALUES(%s)", (name,))
            return int(cur.lastrowid)

    def delete_group_with_participants(self, group_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM participants WHERE group_id=%s", (int(group_id),))
            removed = cur.rowcount
            cur.execute("DELETE FROM `groups` WHERE id=%s", (int(group_id),))
            return int(removed)

    def participant_counts(self) -> Mapping[int, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT group_id, COUNT(*) AS cnt FROM participants WHERE group_id IS NOT NULL GROUP BY group_id"
            )
            return {int(r["group_id"]): int(r["cnt"]) for r in fetchall(cur)}

    def list_participants(self) -> Sequence[Participant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, group_id, registered_at, registered_by FROM participants ORDER BY registered_at, id"
            )
            return [_to_participant(r) for r in fetchall(cur)]

    def get_participant(self, participant_id: int) -> Optional[Participant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, group_id, registered_at, registered_by FROM participants WHERE id=%s",
                (int(participant_id),),
            )
            row = fetchone(cur)
            return _to_participant(row) if row else None

    def create_participant(self, *, name: str, group_id: int, registered_by: Optional[int]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO participants(name, group_id, registered_by) VALUES(%s,%s,%s)",
                (name, int(group_id), registered_by),
            )
            return int(cur.lastrowid)

    def set_participant_group(self, participant_id: int, group_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE participants SET group_id=%s WHERE id=%s", (int(group_id), int(participant_id)))

    def delete_participant(self, participant_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM participants WHERE id=%s", (int(participant_id),))
            return cur.rowcount > 0
