from __future__ import annotations

import csv
import io
from datetime import date

import pytest
from openpyxl import load_workbook

from src.committee_portal.committee_portal.attendance.service import AttendanceLedgerService
from src.committee_portal.committee_portal.core.constants import REPORT_PAGE_SIZE
from src.committee_portal.committee_portal.core.enums import AttendanceStatus, Department
from src.committee_portal.committee_portal.core.exceptions import ValidationError
from src.committee_portal.committee_portal.reports.service import ReportProjector, paginate

D = date(2026, 3, 14)


@pytest.fixture
def projector(attendance_repo, members_repo, fixed_now):
    ledger = AttendanceLedgerService(attendance_repo, members_repo, clock=lambda: fixed_now)
    roster = [
        ("Andi", Department.FNB, "attend"),
        ("Bella", Department.FNB, None),
        ("Citra", Department.PR_COMMUNICATION, "attend"),
        ("Dimas", Department.SPONSORSHIP_FINANCE, "absent"),
        ("Eka", Department.TECHNICAL_IT_SUPPORT, "attend"),
    ]
    for name, dept, status in roster:
        member = members_repo.add(name, dept)
        if status:
            ledger.mark_attendance(member.member_id, D, status)
    return ReportProjector(ledger)


def _names(report):
    return [e.member.name for e in report.rows]


def test_unfiltered_report_covers_whole_roster(projector):
    report = projector.build(D)

    assert _names(report) == ["Andi", "Bella", "Citra", "Dimas", "Eka"]
    assert (report.stats.total, report.stats.attend, report.stats.absent, report.stats.rate) == (5, 3, 2, 60)


def test_department_filter(projector):
    assert _names(projector.build(D, department="fnb")) == ["Andi", "Bella"]


def test_status_filter_counts_unrecorded_members_as_absent(projector):
    assert _names(projector.build(D, status="absent")) == ["Bella", "Dimas"]
    assert _names(projector.build(D, status="attend")) == ["Andi", "Citra", "Eka"]
    assert len(projector.build(D, status="all").rows) == 5


def test_search_matches_name_and_department_case_insensitively(projector):
    assert _names(projector.build(D, search="CIT")) == ["Citra"]
    assert _names(projector.build(D, search="sponsorship")) == ["Dimas"]
    assert _names(projector.build(D, search="it support")) == ["Eka"]


def test_filters_combine_and_stats_stay_whole_day(projector):
    report = projector.build(D, department="fnb", status="attend", search="an")

    assert _names(report) == ["Andi"]
    assert report.stats.total == 5
    assert report.filtered_stats.total == 1
    assert report.status == AttendanceStatus.ATTEND


def test_bad_filters_are_rejected(projector):
    with pytest.raises(ValidationError):
        projector.build(D, department="kitchen")
    with pytest.raises(ValidationError):
        projector.build(D, status="late")


def test_pagination_uses_pages_of_six():
    pages = paginate(list(range(13)))

    assert REPORT_PAGE_SIZE == 6
    assert [len(p) for p in pages] == [6, 6, 1]
    assert paginate([]) == []
    with pytest.raises(ValueError):
        paginate([1], 0)


def test_csv_export(projector):
    body = projector.to_csv(projector.build(D, department="fnb"))

    rows = list(csv.DictReader(io.StringIO(body.decode("utf-8-sig"))))
    assert [(r["no"], r["name"], r["status"]) for r in rows] == [("1", "Andi", "attend"), ("2", "Bella", "absent")]
    assert rows[0]["department"] == "Food & Beverage"
    assert rows[0]["check_in_time"] == "09:30:00"
    assert rows[1]["check_in_time"] == ""


def test_excel_export(projector):
    body = projector.to_excel(projector.build(D))

    ws = load_workbook(io.BytesIO(body)).active
    values = list(ws.values)
    assert ws.title == "2026-03-14"
    assert values[0][:4] == ("no", "name", "department", "status")
    assert [row[1] for row in values[1:]] == ["Andi", "Bella", "Citra", "Dimas", "Eka"]
