from __future__ import annotations

import random
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.committee_portal.committee_portal.attendance.model import AttendanceRecord
from src.committee_portal.committee_portal.container import assemble
from src.committee_portal.committee_portal.core.enums import Department, Role, UserStatus
from src.committee_portal.committee_portal.core.exceptions import ConstraintViolation, StorageUnavailable
from src.committee_portal.committee_portal.main import create_app
from src.committee_portal.committee_portal.members.model import CommitteeMember
from src.committee_portal.committee_portal.settings.model import SiteSetting
from src.committee_portal.committee_portal.teams.model import Group, Participant
from src.committee_portal.committee_portal.users.model import User

FIXED_NOW = datetime(2026, 3, 14, 9, 30, 0)

# Fast hashes keep the suite quick; production uses werkzeug's default method.
TEST_HASH_METHOD = "pbkdf2:sha256:1000"


class InMemoryUsers:
    def __init__(self):
        self._users: dict[int, User] = {}
        self._next_id = 1

    def add(
        self,
        username: str,
        password: str,
        *,
        role: Role = Role.COMMITTEE,
        department: Department = Department.LOGISTICS_OPERATIONS,
        status: UserStatus = UserStatus.ACTIVE,
    ) -> User:
        user_id = self.create_user(
            username=username,
            password_hash=generate_password_hash(password, method=TEST_HASH_METHOD),
            display_name=username.title(),
            department=department,
            role=role,
        )
        if status != UserStatus.ACTIVE:
            self.set_status(user_id, status)
        return self._users[user_id]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.username == username), None)

    def create_user(self, *, username, password_hash, display_name, department, role) -> int:
        if self.get_by_username(username):
            raise ConstraintViolation("Duplicate entry")
        user_id = self._next_id
        self._next_id += 1
        self._users[user_id] = User(
            user_id=user_id,
            username=username,
            password_hash=password_hash,
            display_name=display_name,
            department=department,
            role=role,
            created_at=FIXED_NOW,
        )
        return user_id

    def _update(self, user_id: int, **changes) -> bool:
        user = self._users.get(int(user_id))
        if not user:
            return False
        self._users[user.user_id] = replace(user, **changes)
        return True

    def set_session(self, user_id, *, token, issued_at) -> bool:
        return self._update(user_id, session_token=token, session_issued_at=issued_at)

    def update_password_hash(self, user_id, password_hash) -> bool:
        return self._update(user_id, password_hash=password_hash)

    def set_status(self, user_id, status) -> bool:
        return self._update(user_id, status=status)

    def delete_by_id(self, user_id) -> bool:
        return self._users.pop(int(user_id), None) is not None

    def list_all(self):
        return list(self._users.values())


class InMemoryMembers:
    def __init__(self):
        self._members: dict[int, CommitteeMember] = {}
        self._next_id = 1

    def add(self, name: str, department: Department = Department.LOGISTICS_OPERATIONS) -> CommitteeMember:
        return self._members[self.create(name=name, department=department)]

    def get_by_id(self, member_id):
        return self._members.get(int(member_id))

    def list_all(self, *, department=None):
        members = [m for m in self._members.values() if department is None or m.department == department]
        return sorted(members, key=lambda m: m.name)

    def create(self, *, name, department) -> int:
        member_id = self._next_id
        self._next_id += 1
        self._members[member_id] = CommitteeMember(member_id=member_id, name=name, department=department)
        return member_id

    def delete_by_id(self, member_id) -> bool:
        return self._members.pop(int(member_id), None) is not None


class InMemoryAttendance:
    """Enforces the (member, date) unique key like the real table."""

    def __init__(self):
        self.rows: dict[int, AttendanceRecord] = {}
        self._next_id = 1
        self.create_calls = 0
        self.before_create = None

    def get_for_member_and_date(self, member_id: int, attendance_date: date):
        return next(
            (r for r in self.rows.values() if r.member_id == member_id and r.attendance_date == attendance_date),
            None,
        )

    def list_for_date(self, attendance_date):
        return [r for r in self.rows.values() if r.attendance_date == attendance_date]

    def list_for_member(self, member_id, *, limit=30):
        records = [r for r in self.rows.values() if r.member_id == int(member_id)]
        return sorted(records, key=lambda r: r.attendance_date, reverse=True)[:limit]

    def create(self, *, member_id, attendance_date, status, photo_url, location, check_in_time, marked_by) -> int:
        self.create_calls += 1
        if self.before_create is not None:
            hook, self.before_create = self.before_create, None
            hook()
        if self.get_for_member_and_date(member_id, attendance_date):
            raise ConstraintViolation("Duplicate entry")
        attendance_id = self._next_id
        self._next_id += 1
        self.rows[attendance_id] = AttendanceRecord(
            attendance_id=attendance_id,
            member_id=member_id,
            attendance_date=attendance_date,
            status=status,
            photo_url=photo_url,
            location=location,
            check_in_time=check_in_time,
            marked_by=marked_by,
        )
        return attendance_id

    def update(self, *, attendance_id, status, photo_url, location, check_in_time, marked_by) -> None:
        self.rows[attendance_id] = replace(
            self.rows[attendance_id],
            status=status,
            photo_url=photo_url,
            location=location,
            check_in_time=check_in_time,
            marked_by=marked_by,
        )


class InMemoryTeams:
    def __init__(self):
        self.groups: dict[int, Group] = {}
        self.participants: dict[int, Participant] = {}
        self._next_group_id = 1
        self._next_participant_id = 1

    def list_groups(self):
        return [self.groups[k] for k in sorted(self.groups)]

    def get_group(self, group_id):
        return self.groups.get(int(group_id))

    def create_group(self, name: str) -> int:
        group_id = self._next_group_id
        self._next_group_id += 1
        self.groups[group_id] = Group(group_id=group_id, name=name)
        return group_id

    def delete_group_with_participants(self, group_id) -> int:
        doomed = [pid for pid, p in self.participants.items() if p.group_id == int(group_id)]
        for pid in doomed:
            del self.participants[pid]
        self.groups.pop(int(group_id), None)
        return len(doomed)

    def participant_counts(self):
        counts: dict[int, int] = {}
        for p in self.participants.values():
            if p.group_id is not None:
                counts[p.group_id] = counts.get(p.group_id, 0) + 1
        return counts

    def list_participants(self):
        return [self.participants[k] for k in sorted(self.participants)]

    def get_participant(self, participant_id):
        return self.participants.get(int(participant_id))

    def create_participant(self, *, name, group_id, registered_by) -> int:
        pid = self._next_participant_id
        self._next_participant_id += 1
        self.participants[pid] = Participant(
            participant_id=pid,
            name=name,
            group_id=int(group_id),
            registered_at=FIXED_NOW,
            registered_by=registered_by,
        )
        return pid

    def set_participant_group(self, participant_id, group_id) -> None:
        self.participants[int(participant_id)] = replace(self.participants[int(participant_id)], group_id=int(group_id))

    def delete_participant(self, participant_id) -> bool:
        return self.participants.pop(int(participant_id), None) is not None


class InMemorySettings:
    def __init__(self):
        self.values: dict[str, SiteSetting] = {}
        self.broken = False

    def get(self, key):
        if self.broken:
            raise StorageUnavailable("Table 'site_settings' doesn't exist")
        return self.values.get(key)

    def put(self, key, value, *, updated_by):
        if self.broken:
            raise StorageUnavailable("Table 'site_settings' doesn't exist")
        self.values[key] = SiteSetting(key=key, value=value, updated_by=updated_by)


class FakePhotoStorage:
    def __init__(self):
        self.uploads: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_uploads = False

    def upload(self, data: bytes, key: str) -> str:
        if self.fail_uploads:
            raise StorageUnavailable("Could not store the attendance photo")
        self.uploads[key] = data
        return f"https://photos.test/{key}"

    def delete(self, url: str) -> None:
        self.deleted.append(url)


class FakeGeocoder:
    def __init__(self, address: Optional[str] = "Jalan Merdeka, Bandung, West Java"):
        self.address = address
        self.calls: list[tuple[float, float]] = []

    def address_for(self, latitude: float, longitude: float) -> str:
        self.calls.append((latitude, longitude))
        return self.address or f"{latitude:.6f}, {longitude:.6f}"


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def users_repo():
    return InMemoryUsers()


@pytest.fixture
def members_repo():
    return InMemoryMembers()


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def teams_repo():
    return InMemoryTeams()


@pytest.fixture
def settings_repo():
    return InMemorySettings()


@pytest.fixture
def photo_storage():
    return FakePhotoStorage()


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def container(users_repo, members_repo, attendance_repo, teams_repo, settings_repo, photo_storage, geocoder):
    return assemble(
        conn=None,
        users_repo=users_repo,
        members_repo=members_repo,
        attendance_repo=attendance_repo,
        teams_repo=teams_repo,
        settings_repo=settings_repo,
        photo_storage=photo_storage,
        geocoder=geocoder,
        clock=lambda: FIXED_NOW,
        rng=random.Random(7),
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    # Validate the session token on every request.
    app.config["SESSION_CHECK_INTERVAL"] = 0
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login():
    def _login(client, username: str, password: str):
        return client.post("/api/auth/login", json={"username": username, "password": password})

    return _login
