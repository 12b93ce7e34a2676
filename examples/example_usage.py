"""Example: drive the service layer directly, without Flask.

Controllers are thin; the rules live in the services wired by the container.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.committee_portal.committee_portal.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, photo_upload_dir=settings.PHOTO_UPLOAD_DIR)

    report = container.report_projector.build(date.today())
    print(f"{report.report_date}: {report.stats.attend}/{report.stats.total} present ({report.stats.rate}%)")
    for team in container.team_allocator.list_teams():
        print(f"{team.group.name}: {team.size} participant(s)")


if __name__ == "__main__":
    main()
