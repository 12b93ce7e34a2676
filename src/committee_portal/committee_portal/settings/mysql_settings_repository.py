from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SiteSetting
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[SiteSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT setting_key, setting_value, updated_by, updated_at FROM site_settings WHERE setting_key=%s",
                (key,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return SiteSetting(
                key=row["setting_key"],
                value=row["setting_value"],
                updated_by=row.get("updated_by"),
                updated_at=row.get("updated_at"),
            )

    def put(self, key: str, value: str, *, updated_by: Optional[int]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO site_settings(setting_key, setting_value, updated_by)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE setting_value=VALUES(setting_value), updated_by=VALUES(updated_by)
                """,
                (key, value, updated_by),
            )
