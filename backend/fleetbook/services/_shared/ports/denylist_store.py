from __future__ import annotations

import threading
from datetime import datetime, timedelta
from typing import Protocol

from fleetbook.services._shared.clock import Clock, utc_now


class TokenDenylistStore(Protocol):
    """
    Revocation registry for **access tokens**.

    Entries expire on their own once the token would have expired anyway, so
    the registry never grows past the set of live revoked tokens. Adapters
    raise :class:`~fleetbook.services._shared.errors.DependencyError` when
    the backing store cannot be reached.
    """

    def is_revoked(self, token: str) -> bool: ...

    def revoke(self, token: str, *, ttl_seconds: int) -> None:
        """Mark ``token`` revoked for ``ttl_seconds``; no-op when ``ttl_seconds <= 0``."""
        ...


class InMemoryDenylistStore(TokenDenylistStore):
    """Process-local denylist with clock-driven expiry (development and tests)."""

    def __init__(self, *, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._revoked: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def is_revoked(self, token: str) -> bool:
        with self._lock:
            expires_at = self._revoked.get(token)
            if expires_at is None:
                return False
            if self._clock() >= expires_at:
                del self._revoked[token]
                return False
            return True

    def revoke(self, token: str, *, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        with self._lock:
            self._revoked[token] = self._clock() + timedelta(seconds=ttl_seconds)
