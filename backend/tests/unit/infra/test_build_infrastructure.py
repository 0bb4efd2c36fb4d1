# tests/unit/infra/test_build_infrastructure.py
"""Store selection when the infrastructure bundle is assembled."""

from __future__ import annotations

import fakeredis
import pytest

from fleetbook.core.config import ProductionConfig
from fleetbook.factory import create_app
from fleetbook.infra import build_infrastructure
from fleetbook.infra.redis.redis_cache_store import RedisCacheStore
from fleetbook.infra.redis.redis_denylist_store import RedisTokenDenylistStore
from fleetbook.services._shared.ports import InMemoryCacheStore, InMemoryDenylistStore

BASE = {
    "JWT_ACCESS_SECRET": "access-secret-0123456789abcdef",
    "JWT_REFRESH_SECRET": "refresh-secret-0123456789abcdef",
    "REDIS_URL": None,
}


class ProductionWithoutRedis(ProductionConfig):
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    JWT_ACCESS_SECRET = BASE["JWT_ACCESS_SECRET"]
    JWT_REFRESH_SECRET = BASE["JWT_REFRESH_SECRET"]
    REDIS_URL = None


def test_missing_redis_is_refused_by_default():
    with pytest.raises(RuntimeError, match="REDIS_URL"):
        build_infrastructure(BASE)


def test_production_app_refuses_to_start_without_redis(monkeypatch):
    monkeypatch.delenv("REDIS_URL", raising=False)
    with pytest.raises(RuntimeError, match="REDIS_URL"):
        create_app(ProductionWithoutRedis)


def test_local_stores_only_when_allowed():
    infra = build_infrastructure({**BASE, "ALLOW_LOCAL_STORES": True})

    assert isinstance(infra.denylist, InMemoryDenylistStore)
    assert isinstance(infra.cache, InMemoryCacheStore)
    assert infra.redis is None


def test_injected_client_wins_over_local_stores():
    client = fakeredis.FakeRedis()
    infra = build_infrastructure({**BASE, "ALLOW_LOCAL_STORES": True}, redis_client=client)

    assert isinstance(infra.denylist, RedisTokenDenylistStore)
    assert isinstance(infra.cache, RedisCacheStore)
    assert infra.redis is client


def test_workers_sharing_redis_see_each_others_revocations():
    server = fakeredis.FakeServer()
    first = build_infrastructure(BASE, redis_client=fakeredis.FakeRedis(server=server))
    second = build_infrastructure(BASE, redis_client=fakeredis.FakeRedis(server=server))

    first.denylist.revoke("access-token", ttl_seconds=60)

    assert second.denylist.is_revoked("access-token") is True
