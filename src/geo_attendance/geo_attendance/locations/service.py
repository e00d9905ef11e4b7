from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..common.cache import TTLCache
from ..common.validators import require_coordinates, require_int_range, require_non_empty
from ..core.constants import MAX_GPS_RADIUS_METERS
from ..core.exceptions import NotFoundError, ValidationError
from ..settings.service import SettingsService
from .geofence import GeofenceResult, validate_geofence
from .model import OfficeLocation
from .repository import LocationRepository

logger = logging.getLogger(__name__)

_CACHE_KEY = "office_locations"
DEFAULT_OFFICE_RADIUS = 100


class LocationService:
    def __init__(self, locations: LocationRepository, settings: SettingsService, *, cache: Optional[TTLCache] = None):
        self._locations = locations
        self._settings = settings
        self._cache = cache or TTLCache()

    def list_all(self, *, force_refresh: bool = False) -> Sequence[OfficeLocation]:
        return self._cache.get_or_load(_CACHE_KEY, self._locations.list_all, force_refresh=force_refresh)

    def get(self, location_id: int) -> OfficeLocation:
        location = self._locations.get_by_id(int(location_id))
        if not location:
            raise NotFoundError("Lokasi kantor tidak ditemukan")
        return location

    def validate_position(self, latitude: float, longitude: float) -> GeofenceResult:
        # Uncached: activation changes must apply to the next check-in.
        return validate_geofence(
            latitude,
            longitude,
            self.list_all(force_refresh=True),
            fallback_radius=self._settings.gps_radius(),
        )

    def create(
        self,
        *,
        name: str,
        latitude: Any,
        longitude: Any,
        radius: Any = DEFAULT_OFFICE_RADIUS,
        address: Optional[str] = None,
        is_active: bool = True,
    ) -> OfficeLocation:
        name = require_non_empty(name, "Nama lokasi")
        lat, lon = require_coordinates(latitude, longitude)
        radius = require_int_range(radius, "Radius", 0, MAX_GPS_RADIUS_METERS)

        location_id = self._locations.create(
            name=name,
            latitude=lat,
            longitude=lon,
            radius=radius,
            is_active=bool(is_active),
            address=(address or "").strip() or None,
        )
        if is_active:
            self._enforce_single_active(location_id)
        self._cache.invalidate()
        logger.info("Office location %s (%s) created", location_id, name)
        return self.get(location_id)

    def update(self, location_id: int, changes: Mapping[str, Any]) -> OfficeLocation:
        current = self.get(location_id)

        fields: dict[str, Any] = {}
        if "name" in changes:
            fields["name"] = require_non_empty(changes["name"], "Nama lokasi")
        if "address" in changes:
            fields["address"] = (changes["address"] or "").strip() or None
        if "latitude" in changes or "longitude" in changes:
            lat, lon = require_coordinates(
                changes.get("latitude", current.latitude),
                changes.get("longitude", current.longitude),
            )
            fields["latitude"] = lat
            fields["longitude"] = lon
        if "radius" in changes:
            fields["radius"] = require_int_range(changes["radius"], "Radius", 0, MAX_GPS_RADIUS_METERS)
        if "is_active" in changes:
            fields["is_active"] = bool(changes["is_active"])

        updated = replace(current, **fields)
        self._locations.update(updated)
        if updated.is_active and not current.is_active:
            self._enforce_single_active(updated.location_id)
        self._cache.invalidate()
        return updated

    def activate(self, location_id: int) -> OfficeLocation:
        return self.update(location_id, {"is_active": True})

    def delete(self, location_id: int) -> None:
        self.get(location_id)
        if not self._locations.delete(int(location_id)):
            raise ValidationError("Gagal menghapus lokasi kantor")
        self._cache.invalidate()
        logger.info("Office location %s deleted", location_id)

    def _enforce_single_active(self, location_id: int) -> None:
        changed = self._locations.deactivate_all_except(int(location_id))
        if changed:
            logger.info("Deactivated %d other office location(s) after activating %s", changed, location_id)
