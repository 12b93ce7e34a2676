from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import AttendanceRecord, Location
from .repository import AttendanceRepository

_COLUMNS = """
    id, committee_member_id, attendance_date, status, photo_url,
    latitude, longitude, accuracy, address, check_in_time, marked_by
"""


def _to_record(r: dict) -> AttendanceRecord:
    location = None
    if r.get("latitude") is not None and r.get("longitude") is not None:
        location = Location(
            latitude=to_float(r["latitude"]),
            longitude=to_float(r["longitude"]),
            accuracy=to_float(r.get("accuracy")),
            address=r.get("address"),
        )
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        member_id=int(r["committee_member_id"]),
        attendance_date=r["attendance_date"],
        status=AttendanceStatus(r["status"]),
        photo_url=r.get("photo_url"),
        location=location,
        check_in_time=r.get("check_in_time"),
        marked_by=r.get("marked_by"),
    )


def _location_params(location: Optional[Location]) -> tuple:
    if location is None:
        return (None, None, None, None)
    return (location.latitude, location.longitude, location.accuracy, location.address)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_member_and_date(self, member_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE committee_member_id=%s AND attendance_date=%s",
                (int(member_id), attendance_date),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def list_for_date(self, attendance_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE attendance_date=%s", (attendance_date,))
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_member(self, member_id: int, *, limit: int = 30) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance
                WHERE committee_member_id=%s
                ORDER BY attendance_date DESC
                LIMIT %s
                """,
                (int(member_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        member_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        photo_url: Optional[str],
        location: Optional[Location],
        check_in_time: Optional[datetime],
        marked_by: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(
                    committee_member_id, attendance_date, status, photo_url,
                    latitude, longitude, accuracy, address, check_in_time, marked_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(member_id), attendance_date, status.value, photo_url)
                + _location_params(location)
                + (check_in_time, marked_by),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        attendance_id: int,
        status: AttendanceStatus,
        photo_url: Optional[str],
        location: Optional[Location],
        check_in_time: Optional[datetime],
        marked_by: Optional[int],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET status=%s, photo_url=%s, latitude=%s, longitude=%s, accuracy=%s, address=%s,
                    check_in_time=%s, marked_by=%s
                WHERE id=%s
                """,
                (status.value, photo_url)
                + _location_params(location)
                + (check_in_time, marked_by, int(attendance_id)),
            )
