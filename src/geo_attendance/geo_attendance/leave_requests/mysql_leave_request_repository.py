from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest, LeaveRequestRow
from .repository import LeaveRequestRepository

_COLUMNS = """
    r.request_id, r.employee_id, r.leave_type, r.start_date, r.end_date, r.days,
    r.reason, r.attachment_url, r.status, r.admin_notes, r.reviewed_by,
    r.reviewed_at, r.created_at
"""


def _to_model(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        days=int(r["days"]),
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        attachment_url=r.get("attachment_url"),
        admin_notes=r.get("admin_notes"),
        reviewed_by=r.get("reviewed_by"),
        reviewed_at=r.get("reviewed_at"),
        created_at=r.get("created_at"),
    )


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        days: int,
        reason: str,
        attachment_url: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(
                    employee_id, leave_type, start_date, end_date, days, reason, attachment_url, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    leave_type.value,
                    start_date,
                    end_date,
                    int(days),
                    reason,
                    attachment_url,
                    LeaveStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests r WHERE r.request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_model(r) if r else None

    def list_rows(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[int] = None,
        on_date: Optional[date] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequestRow]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("r.status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("r.employee_id=%s")
            params.append(int(employee_id))
        if on_date is not None:
            clauses.append("r.start_date<=%s AND r.end_date>=%s")
            params.extend([on_date, on_date])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, e.employee_code, e.full_name, e.department
                FROM leave_requests r
                JOIN employees e ON e.employee_id = r.employee_id
                WHERE {" AND ".join(clauses)}
                ORDER BY r.created_at DESC, r.request_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [
                LeaveRequestRow(
                    request=_to_model(r),
                    employee_code=r["employee_code"],
                    full_name=r["full_name"],
                    department=r.get("department"),
                )
                for r in fetchall(cur)
            ]

    def decide(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        reviewed_by: str,
        admin_notes: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, reviewed_by=%s, reviewed_at=NOW(), admin_notes=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    reviewed_by,
                    admin_notes,
                    int(request_id),
                    LeaveStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0
