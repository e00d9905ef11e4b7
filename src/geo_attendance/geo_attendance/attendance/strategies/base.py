from __future__ import annotations

import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ...schedules.model import WorkSchedule
from ..model import AttendanceRecord, StatusClassification

_LATE_MINUTES_RE = re.compile(r"(\d+)\s*menit")


def parse_late_minutes(notes: Optional[str]) -> int:
    """First "<N> menit" in the notes, else 0."""
    if not notes:
        return 0
    match = _LATE_MINUTES_RE.search(notes)
    return int(match.group(1)) if match else 0


class ClassificationStrategy(ABC):
    """Strategy Pattern: one rule of the status classification chain.

    ``classify`` returns None when the rule does not apply, letting the next
    strategy decide.
    """

    @abstractmethod
    def classify(
        self,
        *,
        record: AttendanceRecord,
        local_check_in: datetime,
        schedule: Optional[WorkSchedule],
    ) -> Optional[StatusClassification]:
        raise NotImplementedError
