from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError
from .datetime_utils import is_valid_time_str


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} wajib diisi")
    return str(value).strip()


def require_int_range(value: Any, field_name: str, lo: int, hi: int) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} harus berupa angka")
    if n < lo or n > hi:
        raise ValidationError(f"{field_name} harus antara {lo}-{hi}")
    return n


def require_time_str(value: str, field_name: str) -> str:
    if not is_valid_time_str(value):
        raise ValidationError(f"{field_name} tidak valid (HH:MM)")
    return value.strip()


def require_coordinates(latitude: Any, longitude: Any) -> tuple[float, float]:
    if latitude is None or longitude is None:
        raise ValidationError("Lokasi GPS tidak tersedia. Pastikan GPS pada perangkat Anda aktif.")

    # bool is an int subclass; reject it explicitly.
    if isinstance(latitude, bool) or not isinstance(latitude, (int, float)) or not -90 <= latitude <= 90:
        raise ValidationError("Koordinat latitude tidak valid")
    if isinstance(longitude, bool) or not isinstance(longitude, (int, float)) or not -180 <= longitude <= 180:
        raise ValidationError("Koordinat longitude tidak valid")

    return float(latitude), float(longitude)
