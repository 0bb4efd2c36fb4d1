from __future__ import annotations

from typing import cast

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from fleetbook.services._shared.errors import DependencyError


class RedisTokenDenylistStore:
    """
    Revocation registry for **access tokens** keyed by the raw token.

    Each entry lives exactly as long as the token's remaining validity, so
    Redis expires it for us.
    """

    MARKER = "blacklisted"

    def __init__(self, r: redis.Redis, *, prefix: str = "deny:at:") -> None:
        self.r = r
        self.prefix = prefix

    def _k(self, token: str) -> str:
        return f"{self.prefix}{token}"

    def is_revoked(self, token: str) -> bool:
        try:
            return cast(int, self.r.exists(self._k(token))) == 1
        except RedisError as exc:
            raise DependencyError("redis", "Revocation registry unavailable") from exc

    def revoke(self, token: str, *, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        try:
            self.r.set(self._k(token), self.MARKER, ex=int(ttl_seconds))
        except RedisError as exc:
            raise DependencyError("redis", "Revocation registry unavailable") from exc
