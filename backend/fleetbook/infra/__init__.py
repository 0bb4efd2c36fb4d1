"""
Concrete adapters and the per-application infrastructure container.

:func:`build_infrastructure` turns application config into an
:class:`Infrastructure` bundle once at startup. Services receive the bundle
(or single handles from it) explicitly; nothing in the service layer reaches
for a module-level client.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

import redis  # type: ignore[import-untyped]
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from fleetbook.infra.jwt.pyjwt_token_provider import JWTTokenProvider
from fleetbook.infra.mail.smtp_notifier import SMTPNotifier
from fleetbook.infra.redis.redis_cache_store import RedisCacheStore
from fleetbook.infra.redis.redis_denylist_store import RedisTokenDenylistStore
from fleetbook.services._shared.ports import (
    CacheStore,
    InMemoryCacheStore,
    InMemoryDenylistStore,
    LoggingNotifier,
    Notifier,
    TokenDenylistStore,
    TokenProvider,
)

log = logging.getLogger(__name__)


@dataclass(slots=True)
class Infrastructure:
    """
    Shared handles used by the service layer.

    :param tokens: Access/refresh token issuer and verifier.
    :param denylist: Revocation registry for logged-out access tokens.
    :param cache: TTL cache behind the public vehicle listing.
    :param notifier: Outbound email.
    :param cache_key: Key holding the serialized public listing.
    :param cache_ttl: Listing lifetime in seconds.
    :param redis: Raw client when Redis is configured, for health checks.
    """

    tokens: TokenProvider
    denylist: TokenDenylistStore
    cache: CacheStore
    notifier: Notifier
    cache_key: str = "public:vehicles"
    cache_ttl: int = 300
    redis: redis.Redis | None = None


def build_token_provider(config: Mapping[str, Any]) -> JWTTokenProvider:
    """Create the JWT adapter from ``JWT_*`` settings."""
    access_secret = str(config["JWT_ACCESS_SECRET"])
    refresh_secret = str(config["JWT_REFRESH_SECRET"])
    if access_secret == refresh_secret:
        raise RuntimeError("JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must differ.")
    return JWTTokenProvider(
        access_secret=access_secret,
        refresh_secret=refresh_secret,
        access_ttl=timedelta(seconds=int(config.get("JWT_ACCESS_EXPIRES", 900))),
        refresh_ttl=timedelta(seconds=int(config.get("JWT_REFRESH_EXPIRES", 604800))),
        algorithm=str(config.get("JWT_ALGORITHM", "HS256")),
    )


def build_notifier(config: Mapping[str, Any]) -> Notifier:
    """Return an SMTP notifier when ``MAIL_HOST`` is set, else a logging one."""
    host = config.get("MAIL_HOST")
    if not host:
        return LoggingNotifier()
    return SMTPNotifier(
        host=str(host),
        port=int(config.get("MAIL_PORT", 587)),
        username=config.get("MAIL_USERNAME"),
        password=config.get("MAIL_PASSWORD"),
        use_tls=bool(config.get("MAIL_USE_TLS", True)),
        sender=str(config.get("MAIL_FROM", "no-reply@fleetbook.local")),
    )


def build_infrastructure(
    config: Mapping[str, Any], *, redis_client: redis.Redis | None = None
) -> Infrastructure:
    """
    Assemble the :class:`Infrastructure` bundle for an application.

    With ``REDIS_URL`` set (or an explicit ``redis_client``), revocation and
    caching share one Redis client. Without either, process-local stores are
    used, which only ``ALLOW_LOCAL_STORES`` permits: they are not shared
    between workers.
    An unreachable Redis at startup is logged but not fatal: the gate then
    rejects protected requests and the listing falls back to the database
    until Redis comes back.

    :param config: Flask config (or any mapping with the same keys).
    :param redis_client: Pre-built client used instead of ``REDIS_URL``.
    :returns: Ready-to-use infrastructure bundle.
    :raises RuntimeError: No Redis configured and local stores not allowed.
    """
    tokens = build_token_provider(config)
    notifier = build_notifier(config)
    cache_key = str(config.get("PUBLIC_VEHICLES_CACHE_KEY", "public:vehicles"))
    cache_ttl = int(config.get("PUBLIC_VEHICLES_CACHE_TTL", 300))

    redis_url = config.get("REDIS_URL")
    if redis_client is None and not redis_url:
        if not config.get("ALLOW_LOCAL_STORES", False):
            raise RuntimeError(
                "REDIS_URL is required: the revocation registry and listing cache "
                "must be shared by every worker."
            )
        log.warning("infra.local_stores", extra={"reason": "REDIS_URL not set"})
        return Infrastructure(
            tokens=tokens,
            denylist=InMemoryDenylistStore(),
            cache=InMemoryCacheStore(),
            notifier=notifier,
            cache_key=cache_key,
            cache_ttl=cache_ttl,
        )

    client = redis_client
    if client is None:
        client = redis.Redis.from_url(str(redis_url))
    try:
        client.ping()
    except RedisError:
        log.warning("redis.unreachable_at_startup", exc_info=True)
    return Infrastructure(
        tokens=tokens,
        denylist=RedisTokenDenylistStore(client),
        cache=RedisCacheStore(client),
        notifier=notifier,
        cache_key=cache_key,
        cache_ttl=cache_ttl,
        redis=client,
    )


__all__ = ["Infrastructure", "build_infrastructure", "build_notifier", "build_token_provider"]
