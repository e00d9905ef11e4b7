from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self, *, include_inactive: bool = False, email: Optional[str] = None) -> Sequence[Employee]:
        """Newest first."""

        raise NotImplementedError

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
        raise NotImplementedError

    def update(self, employee: Employee) -> bool:
        raise NotImplementedError

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def delete(self, employee_id: int) -> bool:
        raise NotImplementedError
