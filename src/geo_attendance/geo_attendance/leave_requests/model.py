from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


def _fmt_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.strftime("%Y-%m-%d %H:%M") if value else None


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    days: int
    reason: str
    status: LeaveStatus
    attachment_url: Optional[str] = None
    admin_notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "employee_id": self.employee_id,
            "leave_type": self.leave_type.value,
            "start_date": self.start_date.strftime("%Y-%m-%d"),
            "end_date": self.end_date.strftime("%Y-%m-%d"),
            "days": self.days,
            "reason": self.reason,
            "attachment_url": self.attachment_url,
            "status": self.status.value,
            "admin_notes": self.admin_notes,
            "reviewed_by": self.reviewed_by,
            "reviewed_at": _fmt_datetime(self.reviewed_at),
            "created_at": _fmt_datetime(self.created_at),
        }


@dataclass(frozen=True)
class LeaveRequestRow:
    """Leave request joined with the requesting employee, for list views."""

    request: LeaveRequest
    employee_code: str
    full_name: str
    department: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            **self.request.to_dict(),
            "employee_code": self.employee_code,
            "employee_name": self.full_name,
            "department": self.department,
        }
