from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_COLUMNS = """
    a.attendance_id, a.employee_id, a.check_in_time, a.check_out_time, a.status, a.notes,
    a.face_match_score, a.check_in_latitude, a.check_in_longitude,
    a.check_out_latitude, a.check_out_longitude, a.office_location_id
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=r.get("status"),
        notes=r.get("notes"),
        face_match_score=as_float(r.get("face_match_score")),
        check_in_latitude=as_float(r.get("check_in_latitude")),
        check_in_longitude=as_float(r.get("check_in_longitude")),
        check_out_latitude=as_float(r.get("check_out_latitude")),
        check_out_longitude=as_float(r.get("check_out_longitude")),
        office_location_id=int(r["office_location_id"]) if r.get("office_location_id") is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_open_between(self, employee_id: int, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance a
                WHERE a.employee_id=%s
                  AND a.check_in_time >= %s AND a.check_in_time < %s
                  AND a.check_out_time IS NULL
                ORDER BY a.check_in_time DESC
                """,
                (int(employee_id), start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_between(
        self,
        start: datetime,
        end: datetime,
        *,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["a.check_in_time >= %s", "a.check_in_time < %s"]
        params: list[object] = [start, end]
        if employee_id is not None:
            clauses.append("a.employee_id=%s")
            params.append(int(employee_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, e.employee_code, e.full_name
                FROM attendance a
                JOIN employees e ON e.employee_id = a.employee_id
                WHERE {" AND ".join(clauses)}
                ORDER BY a.check_in_time DESC
                """,
                tuple(params),
            )
            return [
                AttendanceReportRow(record=_to_record(r), employee_code=r["employee_code"], full_name=r["full_name"])
                for r in fetchall(cur)
            ]

    def create_checkin(
        self,
        *,
        employee_id: int,
        check_in_time: datetime,
        latitude: float,
        longitude: float,
        status: AttendanceStatus,
        notes: Optional[str] = None,
        face_match_score: Optional[float] = None,
        office_location_id: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(
                    employee_id, check_in_time, check_in_latitude, check_in_longitude,
                    office_location_id, face_match_score, status, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    check_in_time,
                    latitude,
                    longitude,
                    office_location_id,
                    face_match_score,
                    status.value,
                    notes,
                ),
            )
            return int(cur.lastrowid)

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        latitude: float,
        longitude: float,
        face_match_score: Optional[float] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out_time=%s, check_out_latitude=%s, check_out_longitude=%s,
                    face_match_score=COALESCE(%s, face_match_score)
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, latitude, longitude, face_match_score, int(attendance_id)),
            )
            return cur.rowcount > 0
