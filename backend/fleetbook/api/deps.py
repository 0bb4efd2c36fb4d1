"""Shared API helpers: service wiring, auth decorators and responses."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request

from fleetbook.core.extensions import get_infrastructure
from fleetbook.core.logger import ensure_request_id
from fleetbook.models.user import Role
from fleetbook.services._shared.base import ServiceContext
from fleetbook.services.admin import AdminService
from fleetbook.services.auth import AuthenticatedIdentity, AuthGate, AuthService
from fleetbook.services.drivers import DriverService
from fleetbook.services.trips import TripService
from fleetbook.services.vehicles import AvailabilityCache, VehicleService

F = TypeVar("F", bound=Callable[..., Any])


# --------------------------------------------------------------------------
# Service wiring
# --------------------------------------------------------------------------


def service_context() -> ServiceContext:
    """Build the request-scoped context handed to services."""

    identity: AuthenticatedIdentity | None = g.get("current_user")
    return ServiceContext(
        actor_id=identity.id if identity else None,
        actor_role=identity.role.value if identity else None,
        request_id=ensure_request_id(),
    )


def auth_service() -> AuthService:
    infra = get_infrastructure()
    return AuthService(
        token_provider=infra.tokens, denylist_store=infra.denylist, ctx=service_context()
    )


def auth_gate() -> AuthGate:
    infra = get_infrastructure()
    return AuthGate(token_provider=infra.tokens, denylist_store=infra.denylist)


def availability_cache() -> AvailabilityCache:
    infra = get_infrastructure()
    return AvailabilityCache(
        cache=infra.cache, key=infra.cache_key, ttl_seconds=infra.cache_ttl, ctx=service_context()
    )


def vehicle_service() -> VehicleService:
    return VehicleService(availability=availability_cache(), ctx=service_context())


def driver_service() -> DriverService:
    return DriverService(availability=availability_cache(), ctx=service_context())


def trip_service() -> TripService:
    return TripService(notifier=get_infrastructure().notifier, ctx=service_context())


def admin_service() -> AdminService:
    return AdminService(vehicles=vehicle_service(), ctx=service_context())


# --------------------------------------------------------------------------
# Authentication / authorization
# --------------------------------------------------------------------------


def current_identity() -> AuthenticatedIdentity:
    """Return the caller attached by :func:`require_auth`."""

    identity = g.get("current_user")
    if identity is None:
        raise RuntimeError("current_identity() used outside a protected view.")
    return cast(AuthenticatedIdentity, identity)


def authenticate_request() -> AuthenticatedIdentity:
    """Run the auth gate and attach the identity to ``g.current_user``."""

    g.pop("current_user", None)
    identity = auth_gate().authenticate(request.headers.get("Authorization"))
    g.current_user = identity
    return identity


def require_auth(func: F) -> F:
    """Ensure the request carries a valid, unrevoked access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        authenticate_request()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_roles(*roles: Role) -> Callable[[F], F]:
    """Authenticate, then allow only callers holding one of ``roles``."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            identity = authenticate_request()
            AuthGate.authorize(identity, roles)
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


# --------------------------------------------------------------------------
# Responses
# --------------------------------------------------------------------------


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def message_response(message: str, *, status: int = 200) -> Response:
    return json_response({"message": message}, status=status)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
