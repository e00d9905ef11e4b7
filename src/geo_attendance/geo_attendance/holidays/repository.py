from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import HolidayType
from .model import Holiday


class HolidayRepository(Protocol):
    def get_active_on(self, day: date) -> Optional[Holiday]:
        raise NotImplementedError

    def list_active(self, *, year: Optional[int] = None) -> Sequence[Holiday]:
        raise NotImplementedError

    def create(self, *, name: str, holiday_date: date, holiday_type: HolidayType, description: Optional[str] = None) -> int:
        raise NotImplementedError

    def delete(self, holiday_id: int) -> bool:
        raise NotImplementedError
