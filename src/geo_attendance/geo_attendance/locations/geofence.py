"""GPS geofence checks against the active office location."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.constants import EARTH_RADIUS_METERS
from .model import OfficeLocation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeofenceResult:
    valid: bool
    distance: Optional[float] = None
    max_radius: Optional[int] = None
    office: Optional[OfficeLocation] = None
    error: Optional[str] = None

    def details(self) -> dict:
        return {
            "distance": round(self.distance) if self.distance is not None else None,
            "max_radius": self.max_radius,
            "office": self.office.name if self.office else None,
        }


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def pick_active_office(offices: Sequence[OfficeLocation]) -> Optional[OfficeLocation]:
    active = [o for o in offices if o.is_active]
    if len(active) > 1:
        logger.warning(
            "%d office locations are active (%s); using %r",
            len(active),
            ", ".join(o.name for o in active),
            active[0].name,
        )
    return active[0] if active else None


def effective_radius(office: OfficeLocation, fallback_radius: int) -> int:
    """The office's own radius wins; the system setting covers unset radii."""
    if office.radius and office.radius > 0:
        return int(office.radius)
    return int(fallback_radius)


def validate_geofence(
    latitude: float,
    longitude: float,
    offices: Sequence[OfficeLocation],
    *,
    fallback_radius: int,
) -> GeofenceResult:
    """Check a coordinate against the active office. Never raises."""
    if not offices:
        return GeofenceResult(valid=False, error="Belum ada lokasi kantor terdaftar")

    office = pick_active_office(offices)
    if office is None:
        return GeofenceResult(valid=False, error="Tidak ada lokasi kantor aktif")

    try:
        distance = haversine_distance(latitude, longitude, office.latitude, office.longitude)
    except (TypeError, ValueError):
        logger.exception("Could not compute distance to office %s", office.location_id)
        return GeofenceResult(valid=False, office=office, error="Gagal memvalidasi lokasi GPS")

    max_radius = effective_radius(office, fallback_radius)
    if distance > max_radius:
        return GeofenceResult(
            valid=False,
            distance=distance,
            max_radius=max_radius,
            office=office,
            error=f"Anda berada di luar jangkauan kantor (jarak: {distance:.0f}m, maksimal: {max_radius}m)",
        )

    return GeofenceResult(valid=True, distance=distance, max_radius=max_radius, office=office)
