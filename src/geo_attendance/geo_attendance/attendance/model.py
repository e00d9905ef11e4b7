from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus, StatusDetail


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in (and optional check-out).

    ``status`` is free-form text as stored; ``'late'`` is authoritative when present.
    Timestamps are UTC (naive values are read as UTC).
    """

    attendance_id: int
    employee_id: int
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    face_match_score: Optional[float] = None
    check_in_latitude: Optional[float] = None
    check_in_longitude: Optional[float] = None
    check_out_latitude: Optional[float] = None
    check_out_longitude: Optional[float] = None
    office_location_id: Optional[int] = None


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for report views (record joined with employee)."""

    record: AttendanceRecord
    employee_code: str
    full_name: str


@dataclass(frozen=True)
class StatusClassification:
    status_detail: StatusDetail
    on_time_range: str = "-"
    tolerance_range: str = "-"
    late_minutes: int = 0

    @property
    def status_label(self) -> str:
        return self.status_detail.label

    def to_dict(self) -> dict:
        return {
            "status_detail": self.status_detail.value,
            "status_label": self.status_label,
            "on_time_range": self.on_time_range,
            "tolerance_range": self.tolerance_range,
            "late_minutes": self.late_minutes,
        }


@dataclass(frozen=True)
class CheckInDecision:
    """What gets stored on the row at check-in time."""

    status: AttendanceStatus
    status_detail: StatusDetail
    late_minutes: int = 0
    notes: Optional[str] = None
