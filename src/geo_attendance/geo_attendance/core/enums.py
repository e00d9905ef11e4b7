from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status stored on the attendance row at check-in time."""

    PRESENT = "present"
    LATE = "late"


class StatusDetail(str, Enum):
    """Three-way classification shown in reports."""

    ON_TIME = "on_time"
    WITHIN_TOLERANCE = "within_tolerance"
    LATE = "late"

    @property
    def label(self) -> str:
        return {
            StatusDetail.ON_TIME: "Tepat Waktu",
            StatusDetail.WITHIN_TOLERANCE: "Dalam Toleransi",
            StatusDetail.LATE: "Terlambat",
        }[self]


class HolidayType(str, Enum):
    NATIONAL = "national"
    COMPANY = "company"


class LeaveStatus(str, Enum):
    """Review state of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveType(str, Enum):
    SICK = "sick"
    ANNUAL = "annual"
    PERSONAL = "personal"
    EMERGENCY = "emergency"
