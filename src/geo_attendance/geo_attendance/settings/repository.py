from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SystemSetting


class SettingsRepository(Protocol):
    def list_all(self) -> Sequence[SystemSetting]:
        raise NotImplementedError

    def get(self, key: str) -> Optional[SystemSetting]:
        raise NotImplementedError

    def set_value(self, key: str, value: str) -> None:
        """Insert or update a setting value."""

        raise NotImplementedError
