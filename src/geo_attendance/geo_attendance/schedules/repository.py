from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WorkSchedule


class ScheduleRepository(Protocol):
    def list_all(self) -> Sequence[WorkSchedule]:
        raise NotImplementedError

    def get_by_id(self, schedule_id: int) -> Optional[WorkSchedule]:
        raise NotImplementedError

    def update(self, schedule: WorkSchedule) -> bool:
        """Persist every column of an existing schedule row."""

        raise NotImplementedError
