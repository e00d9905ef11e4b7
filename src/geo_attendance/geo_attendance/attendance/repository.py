from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    """Timestamps in and out are UTC-naive."""

    def list_open_between(self, employee_id: int, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        """Check-ins in [start, end) without a check-out, newest first."""

        raise NotImplementedError

    def list_between(
        self,
        start: datetime,
        end: datetime,
        *,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        """Check-ins in [start, end), newest first."""

        raise NotImplementedError

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
        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        latitude: float,
        longitude: float,
        face_match_score: Optional[float] = None,
    ) -> bool:
        raise NotImplementedError
