from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.geocoding import ReverseGeocoder
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.photos import LocalPhotoStorage
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceLedgerService
from .database.connection import DBConfig, DatabaseConnection
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .members.service import MemberService
from .reports.service import ReportProjector
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import MaintenanceService
from .teams.mysql_team_repository import MySQLTeamRepository
from .teams.repository import TeamRepository
from .teams.service import TeamAllocator
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    members_repo: MemberRepository
    attendance_repo: AttendanceRepository
    teams_repo: TeamRepository
    settings_repo: SettingsRepository

    photo_storage: Optional[LocalPhotoStorage]

    auth_service: AuthService
    user_service: UserService
    member_service: MemberService
    attendance_service: AttendanceLedgerService
    team_allocator: TeamAllocator
    report_projector: ReportProjector
    maintenance_service: MaintenanceService


def assemble(
    *,
    conn: Optional[DatabaseConnection],
    users_repo: UserRepository,
    members_repo: MemberRepository,
    attendance_repo: AttendanceRepository,
    teams_repo: TeamRepository,
    settings_repo: SettingsRepository,
    photo_storage: Optional[LocalPhotoStorage] = None,
    geocoder: Optional[ReverseGeocoder] = None,
    **service_options,
) -> Container:
    """Wire services over the given repositories.

    `service_options` may carry `clock` (auth and ledger) and `rng` (allocator).
    """

    clock = service_options.get("clock")
    clock_kw = {"clock": clock} if clock is not None else {}

    attendance_service = AttendanceLedgerService(
        attendance_repo,
        members_repo,
        photos=photo_storage,
        geocoder=geocoder,
        **clock_kw,
    )
    return Container(
        conn=conn,
        users_repo=users_repo,
        members_repo=members_repo,
        attendance_repo=attendance_repo,
        teams_repo=teams_repo,
        settings_repo=settings_repo,
        photo_storage=photo_storage,
        auth_service=AuthService(users_repo, **clock_kw),
        user_service=UserService(users_repo),
        member_service=MemberService(members_repo),
        attendance_service=attendance_service,
        team_allocator=TeamAllocator(teams_repo, rng=service_options.get("rng")),
        report_projector=ReportProjector(attendance_service),
        maintenance_service=MaintenanceService(settings_repo),
    )


def build_container(
    *,
    db_config: dict,
    photo_upload_dir: str,
    photo_public_base_url: str = "/attendance-photos",
    geocoder_url: Optional[str] = None,
    geocoder_timeout: float = 5,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        members_repo=MySQLMemberRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        teams_repo=MySQLTeamRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        photo_storage=LocalPhotoStorage(photo_upload_dir, public_base_url=photo_public_base_url),
        geocoder=ReverseGeocoder(geocoder_url, timeout=geocoder_timeout) if geocoder_url else None,
    )
