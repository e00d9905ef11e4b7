from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import OfficeLocation


class LocationRepository(Protocol):
    def list_all(self) -> Sequence[OfficeLocation]:
        raise NotImplementedError

    def get_by_id(self, location_id: int) -> Optional[OfficeLocation]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update(self, location: OfficeLocation) -> bool:
        raise NotImplementedError

    def deactivate_all_except(self, location_id: int) -> int:
        """Keep the single-active-office invariant; returns rows changed."""

        raise NotImplementedError

    def delete(self, location_id: int) -> bool:
        raise NotImplementedError
