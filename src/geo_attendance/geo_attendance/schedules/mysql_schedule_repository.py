from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import WorkSchedule
from .repository import ScheduleRepository

_COLUMNS = """
    schedule_id, day_of_week, day_name, start_time, end_time,
    on_time_end_time, tolerance_start_time, tolerance_end_time,
    late_tolerance_minutes, is_active
"""


def _to_model(r: dict) -> WorkSchedule:
    return WorkSchedule(
        schedule_id=int(r["schedule_id"]),
        day_of_week=int(r["day_of_week"]),
        day_name=r["day_name"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        on_time_end_time=normalize_mysql_time(r.get("on_time_end_time")),
        tolerance_start_time=normalize_mysql_time(r.get("tolerance_start_time")),
        tolerance_end_time=normalize_mysql_time(r.get("tolerance_end_time")),
        late_tolerance_minutes=int(r.get("late_tolerance_minutes") or 0),
        is_active=bool(r["is_active"]),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_schedules ORDER BY day_of_week")
            return [_to_model(r) for r in fetchall(cur)]

    def get_by_id(self, schedule_id: int) -> Optional[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_schedules WHERE schedule_id=%s", (int(schedule_id),))
            r = fetchone(cur)
            return _to_model(r) if r else None

    def update(self, schedule: WorkSchedule) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_schedules
                SET start_time=%s, end_time=%s, on_time_end_time=%s, tolerance_start_time=%s,
                    tolerance_end_time=%s, late_tolerance_minutes=%s, is_active=%s
                WHERE schedule_id=%s
                """,
                (
                    schedule.start_time,
                    schedule.end_time,
                    schedule.on_time_end_time,
                    schedule.tolerance_start_time,
                    schedule.tolerance_end_time,
                    int(schedule.late_tolerance_minutes),
                    1 if schedule.is_active else 0,
                    int(schedule.schedule_id),
                ),
            )
            return cur.rowcount > 0
