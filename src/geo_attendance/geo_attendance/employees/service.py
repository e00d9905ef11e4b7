from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_OPTIONAL_TEXT = ("phone", "department", "position", "face_encoding_path")


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip() or None


class EmployeeService:
    """Use case: manage the employee roster (admin)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_all(self, *, include_inactive: bool = False, email: Optional[str] = None) -> Sequence[Employee]:
        return self._employees.list_all(include_inactive=include_inactive, email=(email or "").strip() or None)

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Karyawan tidak ditemukan")
        return employee

    def _require_unique_email(self, email: str, *, exclude_id: Optional[int] = None) -> None:
        existing = self._employees.get_by_email(email)
        if existing and existing.employee_id != exclude_id:
            raise ValidationError("Email sudah digunakan")

    def create(
        self,
        *,
        employee_code: str,
        full_name: str,
        email: str,
        phone: Optional[str] = None,
        department: Optional[str] = None,
        position: Optional[str] = None,
        hire_date: Optional[str] = None,
    ) -> Employee:
        employee_code = require_non_empty(employee_code, "Kode karyawan")
        full_name = require_non_empty(full_name, "Nama lengkap")
        email = require_non_empty(email, "Email")

        if self._employees.get_by_code(employee_code):
            raise ValidationError("Kode karyawan sudah digunakan")
        self._require_unique_email(email)

        try:
            hired = parse_iso_date(hire_date) if hire_date else None
        except ValueError:
            raise ValidationError("Tanggal masuk tidak valid (YYYY-MM-DD)")

        employee_id = self._employees.create(
            employee_code=employee_code,
            full_name=full_name,
            email=email,
            phone=_optional_text(phone),
            department=_optional_text(department),
            position=_optional_text(position),
            hire_date=hired,
        )
        logger.info("Employee %s (%s) created", employee_code, full_name)
        return self.get(employee_id)

    def update(self, employee_id: int, changes: Mapping[str, Any]) -> Employee:
        current = self.get(employee_id)

        fields: dict[str, Any] = {}
        if "full_name" in changes:
            fields["full_name"] = require_non_empty(changes["full_name"], "Nama lengkap")
        if changes.get("email"):
            email = require_non_empty(changes["email"], "Email")
            self._require_unique_email(email, exclude_id=current.employee_id)
            fields["email"] = email
        for name in _OPTIONAL_TEXT:
            if name in changes:
                fields[name] = _optional_text(changes[name])
        if "is_active" in changes:
            fields["is_active"] = bool(changes["is_active"])

        updated = replace(current, **fields)
        self._employees.update(updated)
        logger.info("Employee %s updated: %s", updated.employee_code, sorted(fields))
        return updated

    def set_active(self, employee_id: int, *, is_active: bool) -> Employee:
        current = self.get(employee_id)
        self._employees.set_active(current.employee_id, is_active=is_active)
        logger.info("Employee %s %s", current.employee_code, "activated" if is_active else "deactivated")
        return replace(current, is_active=is_active)

    def delete(self, employee_id: int) -> Employee:
        current = self.get(employee_id)
        self._employees.delete(current.employee_id)
        logger.warning("Employee %s deleted with their attendance history", current.employee_code)
        return current
