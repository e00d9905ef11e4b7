from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import HolidayType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Holiday
from .repository import HolidayRepository


def _to_model(r: dict) -> Holiday:
    return Holiday(
        holiday_id=int(r["holiday_id"]),
        name=r["name"],
        holiday_date=r["holiday_date"],
        holiday_type=HolidayType(r["holiday_type"]),
        description=r.get("description"),
        is_active=bool(r["is_active"]),
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_on(self, day: date) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, name, holiday_date, holiday_type, description, is_active
                FROM holidays
                WHERE holiday_date=%s AND is_active=1
                LIMIT 1
                """,
                (day,),
            )
            r = fetchone(cur)
            return _to_model(r) if r else None

    def list_active(self, *, year: Optional[int] = None) -> Sequence[Holiday]:
        clauses = ["is_active=1"]
        params: list[object] = []
        if year is not None:
            clauses.append("YEAR(holiday_date)=%s")
            params.append(int(year))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT holiday_id, name, holiday_date, holiday_type, description, is_active
                FROM holidays
                WHERE {" AND ".join(clauses)}
                ORDER BY holiday_date ASC
                """,
                tuple(params),
            )
            return [_to_model(r) for r in fetchall(cur)]

    def create(self, *, name: str, holiday_date: date, holiday_type: HolidayType, description: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO holidays(name, holiday_date, holiday_type, description, is_active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (name, holiday_date, holiday_type.value, description),
            )
            return int(cur.lastrowid)

    def delete(self, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM holidays WHERE holiday_id=%s", (int(holiday_id),))
            return cur.rowcount > 0
