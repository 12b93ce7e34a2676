from __future__ import annotations

from dataclasses import asdict

from flask import Flask, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.guards import page_permission
from ..common.responses import error_response, internal_error, ok
from ..container import Container
from ..core.constants import REPORT_PAGE_SIZE
from ..core.exceptions import DomainError
from ..users.permissions import Page
from .service import paginate


def register(app: Flask, container: Container) -> None:
    def build_report():
        day_arg = request.args.get("date")
        day = parse_iso_date(day_arg) if day_arg else now_local().date()
        return container.report_projector.build(
            day,
            department=request.args.get("department") or None,
            status=request.args.get("status") or None,
            search=request.args.get("search", ""),
        )

    def download(body: bytes, *, filename: str, mimetype: str):
        return app.response_class(
            body,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="attendance_report")
    @page_permission(Page.ATTENDANCE)
    def attendance_report():
        try:
            report = build_report()
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("building report")

        pages = paginate([e.to_dict() for e in report.rows], REPORT_PAGE_SIZE)
        return ok(
            date=report.report_date.isoformat(),
            stats=asdict(report.stats),
            matched=len(report.rows),
            filtered_stats=asdict(report.filtered_stats),
            page_size=REPORT_PAGE_SIZE,
            pages=pages,
        )

    @app.route("/api/reports/attendance.csv", methods=["GET"], endpoint="attendance_report_csv")
    @page_permission(Page.ATTENDANCE)
    def attendance_report_csv():
        try:
            report = build_report()
            body = container.report_projector.to_csv(report)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("exporting report")
        return download(body, filename=f"attendance_{report.report_date.isoformat()}.csv", mimetype="text/csv")

    @app.route("/api/reports/attendance.xlsx", methods=["GET"], endpoint="attendance_report_excel")
    @page_permission(Page.ATTENDANCE)
    def attendance_report_excel():
        try:
            report = build_report()
            body = container.report_projector.to_excel(report)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return internal_error("exporting report")
        return download(
            body,
            filename=f"attendance_{report.report_date.isoformat()}.xlsx",
            mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
