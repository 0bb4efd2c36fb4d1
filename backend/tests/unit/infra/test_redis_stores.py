# tests/unit/infra/test_redis_stores.py
"""
Redis adapters exercised against fakeredis.

A disconnected fake server stands in for an unreachable Redis.
"""

from __future__ import annotations

import fakeredis
import pytest

from fleetbook.infra.redis.redis_cache_store import RedisCacheStore
from fleetbook.infra.redis.redis_denylist_store import RedisTokenDenylistStore
from fleetbook.services._shared.errors import DependencyError


@pytest.fixture
def server():
    return fakeredis.FakeServer()


@pytest.fixture
def fake_redis(server):
    """Provide a fresh FakeRedis instance for each test."""
    return fakeredis.FakeRedis(server=server)


class TestRedisTokenDenylistStore:
    def test_revoke_sets_marker_with_ttl(self, fake_redis):
        store = RedisTokenDenylistStore(fake_redis)
        store.revoke("tok", ttl_seconds=90)

        assert store.is_revoked("tok") is True
        assert fake_redis.get("deny:at:tok") == b"blacklisted"
        assert 0 < fake_redis.ttl("deny:at:tok") <= 90

    def test_non_positive_ttl_is_a_noop(self, fake_redis):
        store = RedisTokenDenylistStore(fake_redis)
        store.revoke("tok", ttl_seconds=0)
        store.revoke("tok", ttl_seconds=-5)

        assert store.is_revoked("tok") is False
        assert fake_redis.keys() == []

    def test_unknown_token_is_not_revoked(self, fake_redis):
        assert RedisTokenDenylistStore(fake_redis).is_revoked("other") is False

    def test_unreachable_redis_raises_dependency_error(self, server, fake_redis):
        store = RedisTokenDenylistStore(fake_redis)
        server.connected = False

        with pytest.raises(DependencyError):
            store.is_revoked("tok")
        with pytest.raises(DependencyError):
            store.revoke("tok", ttl_seconds=10)


class TestRedisCacheStore:
    def test_set_get_delete(self, fake_redis):
        cache = RedisCacheStore(fake_redis)
        cache.set("public:vehicles", "[]", ttl_seconds=300)

        assert cache.get("public:vehicles") == "[]"
        assert 0 < fake_redis.ttl("public:vehicles") <= 300

        cache.delete("public:vehicles")
        assert cache.get("public:vehicles") is None

    def test_unreachable_redis_raises_dependency_error(self, server, fake_redis):
        cache = RedisCacheStore(fake_redis)
        server.connected = False

        with pytest.raises(DependencyError):
            cache.get("k")
        with pytest.raises(DependencyError):
            cache.set("k", "v", ttl_seconds=1)
        with pytest.raises(DependencyError):
            cache.delete("k")
