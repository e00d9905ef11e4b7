from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, employee_code, full_name, email, phone, department, position,
    hire_date, is_active, face_encoding_path
"""


def _to_model(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        employee_code=r["employee_code"],
        full_name=r["full_name"],
        is_active=bool(r["is_active"]),
        face_encoding_path=r.get("face_encoding_path"),
        email=r.get("email"),
        phone=r.get("phone"),
        department=r.get("department"),
        position=r.get("position"),
        hire_date=r.get("hire_date"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value: object) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE {where}=%s LIMIT 1", (value,))
            r = fetchone(cur)
            return _to_model(r) if r else None

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._get_one("employee_id", int(employee_id))

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        return self._get_one("employee_code", employee_code)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self._get_one("email", email)

    def list_all(self, *, include_inactive: bool = False, email: Optional[str] = None) -> Sequence[Employee]:
        clauses = ["1=1"]
        params: list[object] = []
        if not include_inactive:
            clauses.append("is_active=1")
        if email:
            clauses.append("email=%s")
            params.append(email)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE {" AND ".join(clauses)}
                ORDER BY created_at DESC, employee_id DESC
                """,
                tuple(params),
            )
            return [_to_model(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        employee_code: str,
        full_name: str,
        email: str,
        phone: Optional[str] = None,
        department: Optional[str] = None,
        position: Optional[str] = None,
        hire_date: Optional[date] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(
                    employee_code, full_name, email, phone, department, position, hire_date, is_active
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,1)
                """,
                (employee_code, full_name, email, phone, department, position, hire_date),
            )
            return int(cur.lastrowid)

    def update(self, employee: Employee) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET full_name=%s, email=%s, phone=%s, department=%s, position=%s,
                    is_active=%s, face_encoding_path=%s
                WHERE employee_id=%s
                """,
                (
                    employee.full_name,
                    employee.email,
                    employee.phone,
                    employee.department,
                    employee.position,
                    1 if employee.is_active else 0,
                    employee.face_encoding_path,
                    int(employee.employee_id),
                ),
            )
            return cur.rowcount > 0

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET is_active=%s WHERE employee_id=%s",
                (1 if is_active else 0, int(employee_id)),
            )
            return cur.rowcount > 0

    def delete(self, employee_id: int) -> bool:
        # Attendance and leave rows go with it (ON DELETE CASCADE).
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
