from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional

from ..core.constants import DEFAULT_CACHE_TTL_SECONDS


@dataclass
class _Entry:
    value: Any
    stored_at: float


class TTLCache:
    """Read-through in-memory cache with time-based expiry.

    Services call ``invalidate`` after every write so readers never see their
    own stale data; the TTL only bounds staleness from other processes.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS, *, clock: Callable[[], float] = time.monotonic):
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._entries: Dict[Hashable, _Entry] = {}

    def _is_valid(self, entry: _Entry) -> bool:
        return (self._clock() - entry.stored_at) < self._ttl

    def get_or_load(self, key: Hashable, loader: Callable[[], Any], *, force_refresh: bool = False) -> Any:
        if not force_refresh:
            entry = self._entries.get(key)
            if entry is not None:
                if self._is_valid(entry):
                    return entry.value
                del self._entries[key]

        value = loader()
        self._entries[key] = _Entry(value=value, stored_at=self._clock())
        return value

    def invalidate(self, key: Optional[Hashable] = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def clear_expired(self) -> int:
        expired = [k for k, e in self._entries.items() if not self._is_valid(e)]
        for k in expired:
            del self._entries[k]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
