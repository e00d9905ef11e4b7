from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import local_minutes
from ...core.enums import AttendanceStatus, StatusDetail
from ...schedules.model import ScheduleWindows, WorkSchedule
from ..model import AttendanceRecord, CheckInDecision, StatusClassification
from .base import ClassificationStrategy


def place_in_windows(minutes: int, windows: ScheduleWindows) -> StatusDetail:
    """Where a time-of-day (minutes since midnight) falls in the day's windows.

    Anything outside ``start..tolerance_end`` is late, including arrivals
    before the start time.
    """
    if windows.start_minutes <= minutes <= windows.on_time_end_minutes:
        return StatusDetail.ON_TIME
    if windows.on_time_end_minutes < minutes <= windows.tolerance_end_minutes:
        return StatusDetail.WITHIN_TOLERANCE
    return StatusDetail.LATE


class ScheduleStrategy(ClassificationStrategy):
    """Fallback: compute from the day's schedule; lenient when there is none."""

    def classify(
        self,
        *,
        record: AttendanceRecord,
        local_check_in: datetime,
        schedule: Optional[WorkSchedule],
    ) -> Optional[StatusClassification]:
        if schedule is None:
            return StatusClassification(status_detail=StatusDetail.ON_TIME)

        windows = schedule.windows()
        minutes = local_minutes(local_check_in)
        detail = place_in_windows(minutes, windows)

        if detail == StatusDetail.ON_TIME:
            return StatusClassification(status_detail=detail, on_time_range=windows.on_time_range)
        if detail == StatusDetail.WITHIN_TOLERANCE:
            return StatusClassification(status_detail=detail, tolerance_range=windows.tolerance_range)
        # Negative before the start time.
        return StatusClassification(status_detail=detail, late_minutes=minutes - windows.start_minutes)


def decide_checkin(local_now: datetime, schedule: WorkSchedule) -> CheckInDecision:
    """Status and note written when an employee checks in.

    The notes use the phrases ``NotesStrategy`` recognises so the row reads
    back with the same classification. Arriving before the start time is
    on time here; the note carries that, since the schedule rule alone would
    call it late.
    """
    windows = schedule.windows()
    minutes = local_minutes(local_now)
    after_start = minutes - windows.start_minutes

    if after_start < 0:
        return CheckInDecision(
            status=AttendanceStatus.PRESENT,
            status_detail=StatusDetail.ON_TIME,
            notes=f"Tepat waktu (masuk {-after_start} menit sebelum jam mulai)",
        )

    detail = place_in_windows(minutes, windows)

    if detail == StatusDetail.ON_TIME:
        notes = f"Tepat waktu (masuk {after_start} menit setelah jam mulai)" if after_start > 0 else None
        return CheckInDecision(status=AttendanceStatus.PRESENT, status_detail=detail, notes=notes)

    if detail == StatusDetail.WITHIN_TOLERANCE:
        return CheckInDecision(
            status=AttendanceStatus.PRESENT,
            status_detail=detail,
            notes=f"Hadir dalam toleransi (+{after_start} menit)",
        )

    return CheckInDecision(
        status=AttendanceStatus.LATE,
        status_detail=detail,
        late_minutes=after_start,
        notes=f"Terlambat {after_start} menit (melewati batas toleransi: {windows.tolerance_end})",
    )
