from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, Location


class AttendanceRepository(Protocol):
    def get_for_member_and_date(self, member_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, attendance_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_member(self, member_id: int, *, limit: int = 30) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

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
        """Insert a record; raises ConstraintViolation if (member, date) already exists."""

        raise NotImplementedError

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
        raise NotImplementedError
