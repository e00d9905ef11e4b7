from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SystemSetting
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[SystemSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT setting_key, setting_value, description FROM system_settings ORDER BY setting_key")
            return [
                SystemSetting(setting_key=r["setting_key"], setting_value=r.get("setting_value"), description=r.get("description"))
                for r in fetchall(cur)
            ]

    def get(self, key: str) -> Optional[SystemSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT setting_key, setting_value, description FROM system_settings WHERE setting_key=%s",
                (key,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return SystemSetting(setting_key=r["setting_key"], setting_value=r.get("setting_value"), description=r.get("description"))

    def set_value(self, key: str, value: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO system_settings(setting_key, setting_value)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE setting_value=VALUES(setting_value)
                """,
                (key, value),
            )
