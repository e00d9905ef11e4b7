from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import StatusDetail
from ...schedules.model import WorkSchedule
from ..model import AttendanceRecord, StatusClassification
from .base import ClassificationStrategy, parse_late_minutes

# Checked in this order; late keywords win over the others.
LATE_KEYWORDS = ("terlambat", "late", "melewati batas", "melewati")
ON_TIME_KEYWORDS = ("tepat waktu", "tepatwaktu", "tepat-waktu")
TOLERANCE_KEYWORDS = ("dalam toleransi", "toleransi", "hadir dalam")


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(k in text for k in keywords)


class NotesStrategy(ClassificationStrategy):
    """Classify from the note written at check-in time."""

    def classify(
        self,
        *,
        record: AttendanceRecord,
        local_check_in: datetime,
        schedule: Optional[WorkSchedule],
    ) -> Optional[StatusClassification]:
        if not record.notes or not record.notes.strip():
            return None

        text = record.notes.lower().strip()
        windows = schedule.windows() if schedule else None

        if _contains_any(text, LATE_KEYWORDS):
            return StatusClassification(status_detail=StatusDetail.LATE, late_minutes=parse_late_minutes(record.notes))

        if _contains_any(text, ON_TIME_KEYWORDS):
            return StatusClassification(
                status_detail=StatusDetail.ON_TIME,
                on_time_range=windows.on_time_range if windows else "-",
            )

        if _contains_any(text, TOLERANCE_KEYWORDS):
            return StatusClassification(
                status_detail=StatusDetail.WITHIN_TOLERANCE,
                tolerance_range=windows.tolerance_range if windows else "-",
            )

        return None
