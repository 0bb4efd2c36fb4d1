from __future__ import annotations

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from fleetbook.services._shared.errors import DependencyError


class RedisCacheStore:
    """String cache on top of ``SET key value EX ttl`` / ``GET`` / ``DEL``."""

    def __init__(self, r: redis.Redis) -> None:
        self.r = r

    def get(self, key: str) -> str | None:
        try:
            raw = self.r.get(key)
        except RedisError as exc:
            raise DependencyError("redis", "Cache unavailable") from exc
        if raw is None:
            return None
        # Clients built without decode_responses hand back bytes
        return raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)

    def set(self, key: str, value: str, *, ttl_seconds: int) -> None:
        try:
            self.r.set(key, value, ex=int(ttl_seconds))
        except RedisError as exc:
            raise DependencyError("redis", "Cache unavailable") from exc

    def delete(self, key: str) -> None:
        try:
            self.r.delete(key)
        except RedisError as exc:
            raise DependencyError("redis", "Cache unavailable") from exc
