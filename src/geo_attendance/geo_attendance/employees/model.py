from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: employee who checks in/out.

    Plain data object (no DB access code).
    """

    employee_id: int
    employee_code: str
    full_name: str
    is_active: bool = True
    face_encoding_path: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    hire_date: Optional[date] = None

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "employee_code": self.employee_code,
            "full_name": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "department": self.department,
            "position": self.position,
            "hire_date": self.hire_date.strftime("%Y-%m-%d") if self.hire_date else None,
            "is_active": self.is_active,
            "face_encoding_path": self.face_encoding_path,
        }
