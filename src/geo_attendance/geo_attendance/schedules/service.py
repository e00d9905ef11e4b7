from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.cache import TTLCache
from ..common.datetime_utils import day_of_week, time_to_minutes
from ..common.validators import require_int_range, require_time_str
from ..core.exceptions import NotFoundError, ValidationError
from .model import WorkSchedule
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)

_CACHE_KEY = "work_schedules"
_OPTIONAL_TIMES = ("on_time_end_time", "tolerance_start_time", "tolerance_end_time")


class ScheduleService:
    def __init__(self, schedules: ScheduleRepository, *, cache: Optional[TTLCache] = None):
        self._schedules = schedules
        self._cache = cache or TTLCache()

    def list_all(self, *, force_refresh: bool = False) -> Sequence[WorkSchedule]:
        return self._cache.get_or_load(_CACHE_KEY, self._schedules.list_all, force_refresh=force_refresh)

    def get_any_for_date(self, day: date) -> Optional[WorkSchedule]:
        """Schedule row for the day regardless of ``is_active``."""
        dow = day_of_week(day)
        return next((s for s in self.list_all() if s.day_of_week == dow), None)

    def update(self, schedule_id: int, changes: Mapping[str, Any]) -> WorkSchedule:
        current = self._schedules.get_by_id(int(schedule_id))
        if not current:
            raise NotFoundError("Jadwal kerja tidak ditemukan")

        fields: dict[str, Any] = {}
        if "start_time" in changes:
            fields["start_time"] = require_time_str(changes["start_time"], "Jam mulai")
        if "end_time" in changes:
            fields["end_time"] = require_time_str(changes["end_time"], "Jam selesai")
        for name in _OPTIONAL_TIMES:
            if name in changes:
                # Empty string clears the column so the default cascade applies.
                value = changes[name]
                fields[name] = require_time_str(value, name) if value else None
        if "late_tolerance_minutes" in changes:
            fields["late_tolerance_minutes"] = require_int_range(
                changes["late_tolerance_minutes"], "Toleransi keterlambatan", 0, 240
            )
        if "is_active" in changes:
            fields["is_active"] = bool(changes["is_active"])

        updated = replace(current, **fields)
        self._check_ordering(updated)

        self._schedules.update(updated)
        self._cache.invalidate()
        logger.info("Work schedule %s (%s) updated: %s", updated.schedule_id, updated.day_name, sorted(fields))
        return updated

    @staticmethod
    def _check_ordering(schedule: WorkSchedule) -> None:
        w = schedule.windows()
        if not (w.start_minutes <= w.on_time_end_minutes <= w.tolerance_end_minutes):
            raise ValidationError("Urutan jam tidak valid: mulai <= batas tepat waktu <= batas toleransi")
