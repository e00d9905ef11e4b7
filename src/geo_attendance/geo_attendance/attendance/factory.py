from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import day_of_week, to_local
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import StatusDetail
from ..schedules.model import WorkSchedule
from .model import AttendanceRecord, StatusClassification
from .strategies.base import ClassificationStrategy
from .strategies.notes_strategy import NotesStrategy
from .strategies.schedule_strategy import ScheduleStrategy
from .strategies.stored_status_strategy import StoredStatusStrategy


def default_strategies() -> list[ClassificationStrategy]:
    """Priority order: stored status, then notes, then schedule arithmetic."""
    return [StoredStatusStrategy(), NotesStrategy(), ScheduleStrategy()]


def schedule_for_day(schedules: Sequence[WorkSchedule], dow: int) -> Optional[WorkSchedule]:
    return next((s for s in schedules if s.day_of_week == dow and s.is_active), None)


@dataclass
class AttendanceClassifier:
    """Chain of classification strategies; the first one that answers wins."""

    tz_name: str = DEFAULT_TIMEZONE
    strategies: list[ClassificationStrategy] = field(default_factory=default_strategies)

    def classify(self, record: AttendanceRecord, schedules: Sequence[WorkSchedule]) -> StatusClassification:
        if record.check_in_time is None:
            return StatusClassification(status_detail=StatusDetail.ON_TIME)

        local_check_in = to_local(record.check_in_time, self.tz_name)
        schedule = schedule_for_day(schedules, day_of_week(local_check_in.date()))

        for strategy in self.strategies:
            result = strategy.classify(record=record, local_check_in=local_check_in, schedule=schedule)
            if result is not None:
                return result

        # ScheduleStrategy always answers; this only guards custom chains.
        return StatusClassification(status_detail=StatusDetail.ON_TIME)


def summarize(classifications: Iterable[StatusClassification]) -> dict[str, int]:
    counts = Counter(c.status_detail for c in classifications)
    return {
        "total": sum(counts.values()),
        StatusDetail.ON_TIME.value: counts[StatusDetail.ON_TIME],
        StatusDetail.WITHIN_TOLERANCE.value: counts[StatusDetail.WITHIN_TOLERANCE],
        StatusDetail.LATE.value: counts[StatusDetail.LATE],
    }
