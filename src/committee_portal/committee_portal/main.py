from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .members.controller import register as register_members
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings
from .teams.controller import register as register_teams
from .users.controller import register as register_users

PROJECT_ROOT = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app; pass `container` to run over prepared repositories."""

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_CHECK_INTERVAL"] = int(getattr(settings, "SESSION_CHECK_INTERVAL", 10))

    if container is None:
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=PROJECT_ROOT / "database" / "schema.sql")
            app.logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        auto_seed_db = bool(getattr(settings, "AUTO_SEED_DB", False))
        if auto_seed_db:
            apply_seed_sql(db_config, seed_path=PROJECT_ROOT / "database" / "seed.sql")
            ensure_demo_users(db_config)
            app.logger.info("demo seed ready")

        upload_dir = Path(getattr(settings, "PHOTO_UPLOAD_DIR", "uploads/attendance-photos"))
        if not upload_dir.is_absolute():
            upload_dir = PROJECT_ROOT / upload_dir
        container = build_container(
            db_config=db_config,
            photo_upload_dir=str(upload_dir),
            photo_public_base_url=getattr(settings, "PHOTO_PUBLIC_BASE_URL", "/attendance-photos"),
            geocoder_url=getattr(settings, "GEOCODER_URL", None),
            geocoder_timeout=float(getattr(settings, "GEOCODER_TIMEOUT", 5)),
        )
        if auto_seed_db:
            container.team_allocator.ensure_default_teams()

    # Order matters: the session hook sets g.current_user before the maintenance guard reads it.
    register_users(app, container)
    register_settings(app, container)
    register_members(app, container)
    register_attendance(app, container)
    register_teams(app, container)
    register_reports(app, container)

    return app
