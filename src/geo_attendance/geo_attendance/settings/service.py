from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.cache import TTLCache
from ..common.validators import require_int_range
from ..core.constants import (
    DEFAULT_FACE_THRESHOLD,
    DEFAULT_GPS_RADIUS_METERS,
    MAX_FACE_THRESHOLD,
    MAX_GPS_RADIUS_METERS,
    MIN_FACE_THRESHOLD,
    MIN_GPS_RADIUS_METERS,
    SETTING_FACE_THRESHOLD,
    SETTING_GPS_RADIUS,
)
from .repository import SettingsRepository

logger = logging.getLogger(__name__)

_CACHE_KEY = "system_settings"


class SettingsService:
    def __init__(
        self,
        settings: SettingsRepository,
        *,
        cache: Optional[TTLCache] = None,
        default_gps_radius: int = DEFAULT_GPS_RADIUS_METERS,
    ):
        self._settings = settings
        self._cache = cache or TTLCache()
        self._default_gps_radius = int(default_gps_radius)

    def as_dict(self, *, force_refresh: bool = False) -> dict[str, dict]:
        def load() -> dict[str, dict]:
            return {
                s.setting_key: {"value": s.setting_value, "description": s.description}
                for s in self._settings.list_all()
            }

        return self._cache.get_or_load(_CACHE_KEY, load, force_refresh=force_refresh)

    def _get_int(self, key: str, default: int) -> int:
        entry = self.as_dict().get(key)
        raw = entry["value"] if entry else None
        if raw in (None, ""):
            return default
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning("System setting %s has non-numeric value %r; using %s", key, raw, default)
            return default

    def gps_radius(self) -> int:
        return self._get_int(SETTING_GPS_RADIUS, self._default_gps_radius)

    def face_threshold(self) -> int:
        return self._get_int(SETTING_FACE_THRESHOLD, DEFAULT_FACE_THRESHOLD)

    def update(self, changes: Mapping[str, Any]) -> None:
        # Validate everything before writing anything.
        values: dict[str, int] = {}
        if changes.get(SETTING_FACE_THRESHOLD) is not None:
            values[SETTING_FACE_THRESHOLD] = require_int_range(
                changes[SETTING_FACE_THRESHOLD], "Face recognition threshold", MIN_FACE_THRESHOLD, MAX_FACE_THRESHOLD
            )
        if changes.get(SETTING_GPS_RADIUS) is not None:
            values[SETTING_GPS_RADIUS] = require_int_range(
                changes[SETTING_GPS_RADIUS], "GPS radius", MIN_GPS_RADIUS_METERS, MAX_GPS_RADIUS_METERS
            )

        for key, value in values.items():
            self._settings.set_value(key, str(value))
            logger.info("System setting %s set to %s", key, value)

        if values:
            self._cache.invalidate()
