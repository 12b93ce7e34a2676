from __future__ import annotations

import pytest

from src.committee_portal.committee_portal.core.enums import Role


@pytest.fixture(autouse=True)
def seed(users_repo, container):
    users_repo.add("registration", "regis123", role=Role.REGISTRATION_COORDINATOR)
    users_repo.add("committee", "committee123", role=Role.COMMITTEE)
    container.team_allocator.ensure_default_teams()


def test_register_participant_and_list_teams(client, login, teams_repo, users_repo):
    login(client, "registration", "regis123")

    resp = client.post("/api/participants", json={"name": "Nadia"})

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["team"]["name"].startswith("Team ")
    stored = teams_repo.get_participant(body["participant"]["id"])
    assert stored.registered_by == users_repo.get_by_username("registration").user_id

    listing = client.get("/api/teams").get_json()
    assert listing["stats"]["total_participants"] == 1
    assert sum(t["size"] for t in listing["teams"]) == 1


def test_move_and_delete_team(client, login, teams_repo):
    login(client, "registration", "regis123")
    g1, g2 = [g.group_id for g in teams_repo.list_groups()[:2]]
    pid = teams_repo.create_participant(name="Omar", group_id=g1, registered_by=None)

    moved = client.post(f"/api/participants/{pid}/move", json={"from_group_id": g1, "to_group_id": g2})
    assert moved.status_code == 200
    assert client.post(f"/api/participants/{pid}/move", json={"to_group_id": g2}).status_code == 400

    deleted = client.delete(f"/api/teams/{g2}")
    assert deleted.get_json()["removed_participants"] == 1
    assert teams_repo.participants == {}


def test_committee_can_view_but_not_register(client, login):
    login(client, "committee", "committee123")

    assert client.get("/api/teams").status_code == 200
    assert client.post("/api/participants", json={"name": "Nadia"}).status_code == 403
    assert client.post("/api/teams").status_code == 403


@pytest.mark.parametrize("name", [123, None, ["Nadia"]])
def test_non_string_participant_name_is_400(client, login, teams_repo, name):
    login(client, "registration", "regis123")

    assert client.post("/api/participants", json={"name": name}).status_code == 400
    assert teams_repo.participants == {}
