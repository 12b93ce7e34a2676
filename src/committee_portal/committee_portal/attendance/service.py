from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_enum
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConstraintViolation, DomainError, NotFound, StorageUnavailable, ValidationError
from ..members.repository import MemberRepository
from .geocoding import ReverseGeocoder, coordinates_text
from .model import AttendanceRecord, AttendanceStats, LedgerEntry, Location
from .photos import PhotoStorage, decode_data_url, is_inline_image, is_own_photo, photo_key
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def stats_for(entries: Iterable[LedgerEntry]) -> AttendanceStats:
    return AttendanceStats.from_entries(entries)


class AttendanceLedgerService:
    """Use case: daily attendance of committee members.

    Rows are created lazily, the first time a member is marked for a date.
    At most one row exists per (member, date); marking again updates it.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        members: MemberRepository,
        *,
        photos: Optional[PhotoStorage] = None,
        geocoder: Optional[ReverseGeocoder] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._members = members
        self._photos = photos
        self._geocoder = geocoder
        self._clock = clock

    def _store_photo(
        self,
        photo,
        member_id: int,
        attendance_date: date,
        now: datetime,
        existing: Optional[AttendanceRecord],
    ) -> Optional[str]:
        if photo is None or photo == "":
            return None
        if not isinstance(photo, str):
            raise ValidationError("Photo must be a base64 encoded image")
        if not is_inline_image(photo):
            # Only the record's own stored URL may be re-submitted.
            if existing is not None and existing.photo_url and photo == existing.photo_url:
                return photo
            raise ValidationError("Photo must be a base64 encoded image")
        if self._photos is None:
            raise StorageUnavailable("Photo storage is not configured")
        return self._photos.upload(decode_data_url(photo), photo_key(attendance_date, member_id, now))

    def _discard_photo(self, url: Optional[str]) -> None:
        if not url or self._photos is None:
            return
        try:
            self._photos.delete(url)
        except DomainError as e:
            logger.warning("could not delete photo %s: %s", url, e)

    def _resolve_location(self, location) -> Optional[Location]:
        if location is None:
            return None
        if isinstance(location, dict):
            try:
                location = Location(
                    latitude=float(location["latitude"]),
                    longitude=float(location["longitude"]),
                    accuracy=float(location["accuracy"]) if location.get("accuracy") is not None else None,
                    address=location.get("address") or None,
                )
            except (KeyError, TypeError, ValueError):
                raise ValidationError("Location needs numeric latitude and longitude")

        if not -90 <= location.latitude <= 90 or not -180 <= location.longitude <= 180:
            raise ValidationError("Location is out of range")
        if location.address:
            return location

        if self._geocoder is not None:
            address = self._geocoder.address_for(location.latitude, location.longitude)
        else:
            address = coordinates_text(location.latitude, location.longitude)
        return Location(location.latitude, location.longitude, location.accuracy, address)

    def mark_attendance(
        self,
        member_id: int,
        attendance_date: date,
        status,
        *,
        photo: Optional[str] = None,
        location=None,
        marked_by: Optional[int] = None,
    ) -> AttendanceRecord:
        status = require_enum(status, AttendanceStatus, "status")
        member_id = int(member_id)
        if not self._members.get_by_id(member_id):
            raise NotFound("Committee member not found")

        now = self._clock()
        existing = self._attendance.get_for_member_and_date(member_id, attendance_date)

        if status == AttendanceStatus.ATTEND:
            resolved_location = self._resolve_location(location)
            photo_url = self._store_photo(photo, member_id, attendance_date, now, existing)
            if existing is not None:
                photo_url = photo_url or existing.photo_url
                resolved_location = resolved_location or existing.location
            check_in_time: Optional[datetime] = now
        else:
            photo_url, resolved_location, check_in_time = None, None, None

        fields = dict(
            status=status,
            photo_url=photo_url,
            location=resolved_location,
            check_in_time=check_in_time,
            marked_by=marked_by,
        )
        uploaded = photo_url if is_inline_image(photo) else None
        try:
            existing = self._write(member_id, attendance_date, existing, fields)
        except DomainError:
            self._discard_photo(uploaded)
            raise

        replaced = existing.photo_url if existing is not None else None
        if replaced and replaced != photo_url and is_own_photo(replaced, attendance_date, member_id):
            self._discard_photo(replaced)

        logger.info("attendance %s for member %s on %s (by %s)", status.value, member_id, attendance_date, marked_by)
        record = self._attendance.get_for_member_and_date(member_id, attendance_date)
        if record is None:
            raise StorageUnavailable("Attendance record was not persisted")
        return record

    def _write(
        self, member_id: int, attendance_date: date, existing: Optional[AttendanceRecord], fields: dict
    ) -> Optional[AttendanceRecord]:
        """Insert or update; returns the record that was replaced, if any."""

        if existing is not None:
            self._attendance.update(attendance_id=existing.attendance_id, **fields)
            return existing

        try:
            self._attendance.create(member_id=member_id, attendance_date=attendance_date, **fields)
            return None
        except ConstraintViolation:
            # Someone else created the row between our read and insert.
            existing = self._attendance.get_for_member_and_date(member_id, attendance_date)
            if existing is None:
                raise
            logger.info("attendance row for member %s on %s appeared concurrently; updating", member_id, attendance_date)
            self._attendance.update(attendance_id=existing.attendance_id, **fields)
            return existing

    def get_attendance_for_date(self, attendance_date: date) -> list[LedgerEntry]:
        members = self._members.list_all()
        records = {r.member_id: r for r in self._attendance.list_for_date(attendance_date)}
        return [LedgerEntry(member=m, attendance_date=attendance_date, record=records.get(m.member_id)) for m in members]

    def get_stats(self, attendance_date: date) -> AttendanceStats:
        return stats_for(self.get_attendance_for_date(attendance_date))

    def get_member_history(self, member_id: int, *, limit: int = 30) -> Sequence[AttendanceRecord]:
        if not self._members.get_by_id(int(member_id)):
            raise NotFound("Committee member not found")
        return self._attendance.list_for_member(int(member_id), limit=limit)
