from __future__ import annotations

import threading
from datetime import datetime, timedelta
from typing import Protocol

from fleetbook.services._shared.clock import Clock, utc_now


class CacheStore(Protocol):
    """
    Key/value cache with per-entry expiry.

    Values are opaque strings; callers own serialization. Adapters raise
    :class:`~fleetbook.services._shared.errors.DependencyError` when the
    backing store cannot be reached.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str, *, ttl_seconds: int) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryCacheStore(CacheStore):
    """Process-local cache with clock-driven expiry (development and tests)."""

    def __init__(self, *, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[str, datetime]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: str, *, ttl_seconds: int) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() + timedelta(seconds=ttl_seconds))

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)
