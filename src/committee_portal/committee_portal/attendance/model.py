from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from ..core.enums import AttendanceStatus
from ..members.model import CommitteeMember


@dataclass(frozen=True)
class Location:
    """Client-reported position at check-in."""

    latitude: float
    longitude: float
    accuracy: Optional[float] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one stored mark for a member on a date."""

    attendance_id: int
    member_id: int
    attendance_date: date
    status: AttendanceStatus
    photo_url: Optional[str] = None
    location: Optional[Location] = None
    check_in_time: Optional[datetime] = None
    marked_by: Optional[int] = None


@dataclass(frozen=True)
class LedgerEntry:
    """A roster member paired with their record for one date, if any.

    No record means the member shows as absent, but nothing is stored.
    """

    member: CommitteeMember
    attendance_date: date
    record: Optional[AttendanceRecord] = None

    @property
    def status(self) -> AttendanceStatus:
        return self.record.status if self.record else AttendanceStatus.ABSENT

    @property
    def is_recorded(self) -> bool:
        return self.record is not None

    def to_dict(self) -> dict:
        r = self.record
        loc = r.location if r else None
        return {
            "member_id": self.member.member_id,
            "name": self.member.name,
            "department": self.member.department.value,
            "department_name": self.member.department.display_name,
            "attendance_date": self.attendance_date.isoformat(),
            "status": self.status.value,
            "is_recorded": self.is_recorded,
            "attendance_id": r.attendance_id if r else None,
            "photo_url": r.photo_url if r else None,
            "check_in_time": r.check_in_time.isoformat() if r and r.check_in_time else None,
            "latitude": loc.latitude if loc else None,
            "longitude": loc.longitude if loc else None,
            "accuracy": loc.accuracy if loc else None,
            "address": loc.address if loc else None,
            "marked_by": r.marked_by if r else None,
        }


@dataclass(frozen=True)
class AttendanceStats:
    total: int
    attend: int
    absent: int
    rate: int

    @classmethod
    def from_entries(cls, entries: Iterable[LedgerEntry]) -> "AttendanceStats":
        entries = list(entries)
        total = len(entries)
        attend = sum(1 for e in entries if e.status == AttendanceStatus.ATTEND)
        rate = round(attend / total * 100) if total else 0
        return cls(total=total, attend=attend, absent=total - attend, rate=rate)
