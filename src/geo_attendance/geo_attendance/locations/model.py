from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class OfficeLocation:
    """Office used as geofence centre for check-in/out."""

    location_id: int
    name: str
    latitude: float
    longitude: float
    radius: int
    is_active: bool = True
    address: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.location_id,
            "name": self.name,
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "radius": self.radius,
            "is_active": self.is_active,
        }
