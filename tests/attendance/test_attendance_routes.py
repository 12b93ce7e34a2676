from __future__ import annotations

import pytest

from src.committee_portal.committee_portal.core.enums import Department, Role


@pytest.fixture(autouse=True)
def seed(users_repo, members_repo):
    users_repo.add("protocol", "protocol1", role=Role.PROTOCOL)
    users_repo.add("committee", "committee123", role=Role.COMMITTEE)
    members_repo.add("Dewi", Department.PR_COMMUNICATION)
    members_repo.add("Eko", Department.FNB)


def test_mark_and_read_attendance(client, login, members_repo):
    login(client, "protocol", "protocol1")
    dewi = members_repo.list_all()[0]

    resp = client.post(
        "/api/attendance",
        json={"member_id": dewi.member_id, "date": "2026-03-14", "status": "attend", "latitude": -6.9, "longitude": 107.6},
    )
    assert resp.status_code == 200
    record = resp.get_json()["record"]
    assert record["status"] == "attend"
    assert record["address"] == "Jalan Merdeka, Bandung, West Java"

    day = client.get("/api/attendance?date=2026-03-14").get_json()
    assert [e["name"] for e in day["entries"]] == ["Dewi", "Eko"]
    assert [e["is_recorded"] for e in day["entries"]] == [True, False]
    assert day["stats"] == {"total": 2, "attend": 1, "absent": 1, "rate": 50}


def test_view_only_role_cannot_mark(client, login, members_repo):
    login(client, "committee", "committee123")
    member_id = members_repo.list_all()[0].member_id

    assert client.get("/api/attendance?date=2026-03-14").status_code == 200
    resp = client.post("/api/attendance", json={"member_id": member_id, "status": "attend"})
    assert resp.status_code == 403


@pytest.mark.parametrize(
    "payload,status",
    [
        ({"status": "attend"}, 400),
        ({"member_id": "abc", "status": "attend"}, 400),
        ({"member_id": 1, "status": "late"}, 400),
        ({"member_id": 1, "status": "attend", "date": "14/03/2026"}, 400),
        ({"member_id": 1, "status": "attend", "photo": 123}, 400),
        ({"member_id": 1, "status": "attend", "photo": "javascript:alert(1)"}, 400),
        ({"member_id": 999, "status": "attend"}, 404),
    ],
)
def test_mark_attendance_errors(client, login, payload, status):
    login(client, "protocol", "protocol1")
    assert client.post("/api/attendance", json=payload).status_code == status


def test_members_api(client, login):
    login(client, "protocol", "protocol1")

    created = client.post("/api/members", json={"name": "Fajar", "department": "executive"})
    assert created.status_code == 201
    names = [m["name"] for m in client.get("/api/members").get_json()["members"]]
    assert names == ["Dewi", "Eko", "Fajar"]

    member_id = created.get_json()["id"]
    assert client.delete(f"/api/members/{member_id}").status_code == 200
    assert client.delete(f"/api/members/{member_id}").status_code == 404


def test_non_string_member_name_is_400(client, login):
    login(client, "protocol", "protocol1")

    resp = client.post("/api/members", json={"name": 123, "department": "fnb"})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "ValidationError"
