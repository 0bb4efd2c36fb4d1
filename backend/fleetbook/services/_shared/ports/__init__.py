"""
fleetbook.services._shared.ports
================================

*Ports* (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`token_provider`:
    :class:`~.TokenProvider` issues and verifies access and refresh tokens.

- :mod:`denylist_store`:
    :class:`~.TokenDenylistStore` is the revocation registry for logged-out
    access tokens.

- :mod:`cache_store`:
    :class:`~.CacheStore` is the TTL key/value store behind the public
    vehicle listing.

- :mod:`notifier`:
    :class:`~.Notifier` delivers trip emails.

Concrete Redis, PyJWT and SMTP adapters live under ``fleetbook.infra``; the
in-memory variants next to each port are used in development and tests.
"""

from __future__ import annotations

from .cache_store import CacheStore, InMemoryCacheStore
from .denylist_store import InMemoryDenylistStore, TokenDenylistStore
from .notifier import LoggingNotifier, Notifier
from .token_provider import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    TokenClaims,
    TokenProvider,
)

__all__ = [
    "ACCESS_TOKEN_TYPE",
    "REFRESH_TOKEN_TYPE",
    "CacheStore",
    "InMemoryCacheStore",
    "InMemoryDenylistStore",
    "LoggingNotifier",
    "Notifier",
    "TokenClaims",
    "TokenDenylistStore",
    "TokenProvider",
]
