from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty
from ..core.enums import HolidayType
from ..core.exceptions import NotFoundError, ValidationError
from .model import Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def holiday_on(self, day: date) -> Optional[Holiday]:
        return self._holidays.get_active_on(day)

    def list_active(self, *, year: Optional[int] = None) -> Sequence[Holiday]:
        return self._holidays.list_active(year=year)

    def create(self, *, name: str, holiday_date: str, holiday_type: str, description: Optional[str] = None) -> int:
        name = require_non_empty(name, "Nama hari libur")
        try:
            day = parse_iso_date(require_non_empty(holiday_date, "Tanggal"))
        except ValueError:
            raise ValidationError("Tanggal tidak valid (YYYY-MM-DD)")
        try:
            kind = HolidayType(holiday_type)
        except ValueError:
            raise ValidationError('type must be either "national" or "company"')

        holiday_id = self._holidays.create(
            name=name,
            holiday_date=day,
            holiday_type=kind,
            description=(description or "").strip() or None,
        )
        logger.info("Holiday %s created for %s", name, day)
        return holiday_id

    def delete(self, holiday_id: int) -> None:
        if not self._holidays.delete(int(holiday_id)):
            raise NotFoundError("Hari libur tidak ditemukan")
