from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[str]:
    """Normalize MySQL TIME values to an ``HH:MM:SS`` string.

    mysql-connector can return TIME as:
    - datetime.timedelta
    - datetime.time
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

    if isinstance(value, time):
        return value.strftime("%H:%M:%S")

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return f"{int(parts[0]):02d}:{int(parts[1]):02d}:{seconds:02d}"

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def as_float(value: Any) -> Optional[float]:
    """DECIMAL columns come back as Decimal; the domain works in floats."""
    return float(value) if value is not None else None
