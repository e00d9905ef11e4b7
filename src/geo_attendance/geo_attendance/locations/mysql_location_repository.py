from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import OfficeLocation
from .repository import LocationRepository


def _to_model(r: dict) -> OfficeLocation:
    return OfficeLocation(
        location_id=int(r["location_id"]),
        name=r["name"],
        address=r.get("address"),
        latitude=as_float(r["latitude"]),
        longitude=as_float(r["longitude"]),
        radius=int(r.get("radius") or 0),
        is_active=bool(r["is_active"]),
    )


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[OfficeLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT location_id, name, address, latitude, longitude, radius, is_active
                FROM office_locations
                ORDER BY created_at DESC, location_id DESC
                """
            )
            return [_to_model(r) for r in fetchall(cur)]

    def get_by_id(self, location_id: int) -> Optional[OfficeLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT location_id, name, address, latitude, longitude, radius, is_active
                FROM office_locations
                WHERE location_id=%s
                """,
                (int(location_id),),
            )
            r = fetchone(cur)
            return _to_model(r) if r else None

    def create(
        self,
        *,
        name: str,
        latitude: float,
        longitude: float,
        radius: int,
        is_active: bool,
        address: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO office_locations(name, address, latitude, longitude, radius, is_active)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (name, address, latitude, longitude, int(radius), 1 if is_active else 0),
            )
            return int(cur.lastrowid)

    def update(self, location: OfficeLocation) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE office_locations
                SET name=%s, address=%s, latitude=%s, longitude=%s, radius=%s, is_active=%s
                WHERE location_id=%s
                """,
                (
                    location.name,
                    location.address,
                    location.latitude,
                    location.longitude,
                    int(location.radius),
                    1 if location.is_active else 0,
                    int(location.location_id),
                ),
            )
            return cur.rowcount > 0

    def deactivate_all_except(self, location_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE office_locations SET is_active=0 WHERE location_id<>%s AND is_active=1",
                (int(location_id),),
            )
            return int(cur.rowcount)

    def delete(self, location_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM office_locations WHERE location_id=%s", (int(location_id),))
            return cur.rowcount > 0
