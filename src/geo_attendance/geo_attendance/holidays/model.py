from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import HolidayType


@dataclass(frozen=True)
class Holiday:
    holiday_id: int
    name: str
    holiday_date: date
    holiday_type: HolidayType
    description: Optional[str] = None
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.holiday_id,
            "name": self.name,
            "date": self.holiday_date.strftime("%Y-%m-%d"),
            "type": self.holiday_type.value,
            "description": self.description,
            "is_active": self.is_active,
        }
