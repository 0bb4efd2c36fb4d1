"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from typing import cast

from flask import Flask, current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

from fleetbook.infra import Infrastructure, build_infrastructure

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe, bound per app in init_app)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
limiter = Limiter(key_func=get_remote_address)

INFRA_KEY = "fleetbook.infrastructure"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, rate limiting and the infra bundle.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`fleetbook.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Notes
    -----
    Flask-Limiter reads ``RATELIMIT_ENABLED`` and ``RATELIMIT_STORAGE_URI``
    straight from ``app.config``.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from fleetbook import models as _models  # noqa: F401

    migrate.init_app(app, db)
    limiter.init_app(app)

    app.extensions[INFRA_KEY] = build_infrastructure(app.config)


def get_infrastructure(app: Flask | None = None) -> Infrastructure:
    """Return the infrastructure bundle of ``app`` (default: the current app)."""
    target = app or current_app
    infra = target.extensions.get(INFRA_KEY)
    if infra is None:
        raise RuntimeError("Infrastructure is not initialized. Call init_app() first.")
    return cast(Infrastructure, infra)
