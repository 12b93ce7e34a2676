from __future__ import annotations

from dataclasses import asdict

from flask import Flask, abort, g, request, send_from_directory

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.guards import login_required, page_permission
from ..common.responses import error_response, internal_error, ok
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from ..users.permissions import Page
from .service import stats_for


def _record_dict(record) -> dict:
    loc = record.location
    return {
        "id": record.attendance_id,
        "member_id": record.member_id,
        "attendance_date": record.attendance_date.isoformat(),
        "status": record.status.value,
        "photo_url": record.photo_url,
        "check_in_time": record.check_in_time.isoformat() if record.check_in_time else None,
        "latitude": loc.latitude if loc else None,
        "longitude": loc.longitude if loc else None,
        "accuracy": loc.accuracy if loc else None,
        "address": loc.address if loc else None,
        "marked_by": record.marked_by,
    }


def _requested_date(value):
    return parse_iso_date(value) if value else now_local().date()


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_for_date")
    @page_permission(Page.ATTENDANCE)
    def attendance_for_date():
        try:
            day = _requested_date(request.args.get("date"))
            entries = container.attendance_service.get_attendance_for_date(day)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("loading attendance")

        return ok(
            date=day.isoformat(),
            entries=[e.to_dict() for e in entries],
            stats=asdict(stats_for(entries)),
        )

    @app.route("/api/attendance", methods=["POST"], endpoint="mark_attendance")
    @page_permission(Page.ATTENDANCE, edit=True)
    def mark_attendance():
        data = request.get_json(silent=True) or {}
        try:
            member_id = int(data["member_id"])
        except (KeyError, TypeError, ValueError):
            return error_response(ValidationError("member_id must be a number"))

        try:
            location = None
            if data.get("latitude") is not None and data.get("longitude") is not None:
                location = {
                    "latitude": data.get("latitude"),
                    "longitude": data.get("longitude"),
                    "accuracy": data.get("accuracy"),
                    "address": data.get("address"),
                }
            record = container.attendance_service.mark_attendance(
                member_id,
                _requested_date(data.get("date")),
                data.get("status", ""),
                photo=data.get("photo"),
                location=location,
                marked_by=g.current_user.user_id,
            )
            return ok(record=_record_dict(record), message="Attendance saved")
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("saving attendance")

    @app.route("/api/members/<int:member_id>/attendance", methods=["GET"], endpoint="member_attendance_history")
    @page_permission(Page.ATTENDANCE)
    def member_attendance_history(member_id: int):
        try:
            records = container.attendance_service.get_member_history(member_id)
        except DomainError as e:
            return error_response(e)
        return ok(records=[_record_dict(r) for r in records])

    @app.route("/attendance-photos/<path:key>", methods=["GET"], endpoint="attendance_photo")
    @login_required
    def attendance_photo(key: str):
        root = container.photo_storage.root_dir if container.photo_storage else None
        if root is None:
            abort(404)
        return send_from_directory(root.resolve(), key, mimetype="image/jpeg")
