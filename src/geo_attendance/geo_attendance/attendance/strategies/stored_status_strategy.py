from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus, StatusDetail
from ...schedules.model import WorkSchedule
from ..model import AttendanceRecord, StatusClassification
from .base import ClassificationStrategy, parse_late_minutes


class StoredStatusStrategy(ClassificationStrategy):
    """A stored ``late`` status overrides every other signal."""

    def classify(
        self,
        *,
        record: AttendanceRecord,
        local_check_in: datetime,
        schedule: Optional[WorkSchedule],
    ) -> Optional[StatusClassification]:
        if record.status != AttendanceStatus.LATE.value:
            return None
        return StatusClassification(status_detail=StatusDetail.LATE, late_minutes=parse_late_minutes(record.notes))
