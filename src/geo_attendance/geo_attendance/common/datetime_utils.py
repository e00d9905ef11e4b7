from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Optional

import pytz

from ..core.constants import DEFAULT_TIMEZONE

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(:[0-5]\d)?$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def get_timezone(name: Optional[str] = None):
    return pytz.timezone(name or DEFAULT_TIMEZONE)


def now_utc() -> datetime:
    """Current UTC time (aware).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(pytz.utc)


def ensure_utc(value: datetime) -> datetime:
    """Aware UTC datetime; naive input is taken to be UTC already."""
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


def to_utc_naive(value: datetime) -> datetime:
    return ensure_utc(value).replace(tzinfo=None)


def to_local(value: datetime, tz_name: Optional[str] = None) -> datetime:
    """Convert a timestamp into organisation local time.

    Naive values are treated as UTC, which is how check-in times are stored.
    """
    return ensure_utc(value).astimezone(get_timezone(tz_name))


def local_day_bounds(day: date, tz_name: Optional[str] = None) -> tuple[datetime, datetime]:
    """UTC-naive [start, end) of a local calendar day, for DB range queries."""
    tz = get_timezone(tz_name)
    start = tz.localize(datetime.combine(day, time.min))
    end = tz.localize(datetime.combine(day + timedelta(days=1), time.min))
    return (
        start.astimezone(pytz.utc).replace(tzinfo=None),
        end.astimezone(pytz.utc).replace(tzinfo=None),
    )


def day_of_week(value: date) -> int:
    """Day index with Sunday = 0 ... Saturday = 6."""
    return (value.weekday() + 1) % 7


def is_valid_time_str(value: str) -> bool:
    return isinstance(value, str) and bool(_TIME_RE.match(value.strip()))


def truncate_hhmm(value: Optional[str]) -> str:
    """HH:MM[:SS] -> HH:MM (seconds are ignored)."""
    if not value:
        return ""
    return value.strip()[:5]


def time_to_minutes(value: str) -> int:
    h, m = truncate_hhmm(value).split(":")
    return int(h) * 60 + int(m)


def minutes_to_hhmm(total: int) -> str:
    return f"{(total // 60) % 24:02d}:{total % 60:02d}"


def local_minutes(value: datetime) -> int:
    """Minutes since local midnight of an already-localized timestamp."""
    return value.hour * 60 + value.minute
