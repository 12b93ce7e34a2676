from __future__ import annotations

from datetime import date

import pytest

from src.committee_portal.committee_portal.core.enums import Department, Role


@pytest.fixture(autouse=True)
def seed(users_repo, members_repo, container):
    users_repo.add("chair", "chair123", role=Role.CHAIRPERSON)
    for i in range(8):
        member = members_repo.add(f"Member {i}", Department.EXECUTIVE if i % 2 else Department.FNB)
        if i < 4:
            container.attendance_service.mark_attendance(member.member_id, date(2026, 3, 14), "attend")


def test_report_json_is_paginated(client, login):
    login(client, "chair", "chair123")

    body = client.get("/api/reports/attendance?date=2026-03-14").get_json()

    assert body["page_size"] == 6
    assert [len(p) for p in body["pages"]] == [6, 2]
    assert body["stats"] == {"total": 8, "attend": 4, "absent": 4, "rate": 50}


def test_report_filters_via_query(client, login):
    login(client, "chair", "chair123")

    body = client.get("/api/reports/attendance?date=2026-03-14&department=fnb&status=attend").get_json()

    assert body["matched"] == 2
    assert body["filtered_stats"]["attend"] == 2


def test_csv_and_excel_downloads(client, login):
    login(client, "chair", "chair123")

    csv_resp = client.get("/api/reports/attendance.csv?date=2026-03-14")
    xlsx_resp = client.get("/api/reports/attendance.xlsx?date=2026-03-14")

    assert csv_resp.status_code == 200
    assert csv_resp.mimetype == "text/csv"
    assert "attendance_2026-03-14.csv" in csv_resp.headers["Content-Disposition"]
    assert xlsx_resp.status_code == 200
    assert xlsx_resp.data[:2] == b"PK"


def test_bad_date_is_400(client, login):
    login(client, "chair", "chair123")
    assert client.get("/api/reports/attendance?date=yesterday").status_code == 400
