"""API v1 blueprint package bundling versioned routes."""

from __future__ import annotations

from flask import Blueprint

API_VERSION = "v1"

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .admin import bp as admin_bp  # noqa: E402
from .auth import bp as auth_bp  # noqa: E402
from .driver import bp as driver_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .trips import bp as trips_bp  # noqa: E402
from .vehicles import bp as vehicles_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_version)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/v1
    (auth_bp, "/auth"),  # -> /api/v1/auth
    (vehicles_bp, "/vehicles"),  # -> /api/v1/vehicles
    (driver_bp, "/driver"),  # -> /api/v1/driver
    (trips_bp, "/trips"),  # -> /api/v1/trips
    (admin_bp, "/admin"),  # -> /api/v1/admin
]

__all__ = ["API_VERSION", "REGISTRY"]
