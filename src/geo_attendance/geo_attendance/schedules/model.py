from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import minutes_to_hhmm, time_to_minutes, truncate_hhmm


@dataclass(frozen=True)
class ScheduleWindows:
    """Resolved HH:MM boundaries of one working day."""

    start: str
    on_time_end: str
    tolerance_start: str
    tolerance_end: str

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start)

    @property
    def on_time_end_minutes(self) -> int:
        return time_to_minutes(self.on_time_end)

    @property
    def tolerance_end_minutes(self) -> int:
        return time_to_minutes(self.tolerance_end)

    @property
    def on_time_range(self) -> str:
        return f"{self.start}-{self.on_time_end}"

    @property
    def tolerance_range(self) -> str:
        return f"{self.tolerance_start}-{self.tolerance_end}"


@dataclass(frozen=True)
class WorkSchedule:
    """Working hours for one day of the week (Sunday = 0)."""

    schedule_id: int
    day_of_week: int
    day_name: str
    start_time: str
    end_time: str
    on_time_end_time: Optional[str] = None
    tolerance_start_time: Optional[str] = None
    tolerance_end_time: Optional[str] = None
    late_tolerance_minutes: int = 0
    is_active: bool = True

    def windows(self) -> ScheduleWindows:
        start = truncate_hhmm(self.start_time)
        on_time_end = truncate_hhmm(self.on_time_end_time) or start
        tolerance_start = truncate_hhmm(self.tolerance_start_time) or on_time_end

        tolerance_end = truncate_hhmm(self.tolerance_end_time)
        if not tolerance_end:
            extra = max(0, int(self.late_tolerance_minutes or 0))
            tolerance_end = minutes_to_hhmm(time_to_minutes(tolerance_start) + extra)

        return ScheduleWindows(
            start=start,
            on_time_end=on_time_end,
            tolerance_start=tolerance_start,
            tolerance_end=tolerance_end,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.schedule_id,
            "day_of_week": self.day_of_week,
            "day_name": self.day_name,
            "start_time": self.start_time,
            "on_time_end_time": self.on_time_end_time,
            "tolerance_start_time": self.tolerance_start_time,
            "tolerance_end_time": self.tolerance_end_time,
            "end_time": self.end_time,
            "late_tolerance_minutes": self.late_tolerance_minutes,
            "is_active": self.is_active,
        }
