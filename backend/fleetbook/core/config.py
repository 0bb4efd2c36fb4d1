"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Load .env during development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_ACCESS_SECRET: str
        HMAC key for access tokens. Must differ from ``JWT_REFRESH_SECRET``.
    JWT_REFRESH_SECRET: str
        HMAC key for refresh tokens.
    JWT_ALGORITHM: str
        Signing algorithm passed to PyJWT (``HS256`` by default).
    JWT_ACCESS_EXPIRES: int
        Access token lifetime in seconds (15 minutes by default).
    JWT_REFRESH_EXPIRES: int
        Refresh token lifetime in seconds (7 days by default).
    REFRESH_COOKIE_NAME: str
        Name of the HttpOnly cookie carrying the refresh token.
    REFRESH_COOKIE_SECURE: bool
        Sets the ``Secure`` attribute on the refresh cookie.
    REDIS_URL: str | None
        Connection string for the shared revocation registry and availability
        cache.
    ALLOW_LOCAL_STORES: bool
        Permit process-local revocation and cache stores when ``REDIS_URL``
        is unset. Only development and testing turn this on; otherwise the
        app refuses to start without Redis.
    PUBLIC_VEHICLES_CACHE_KEY: str
        Key holding the serialized public vehicle listing.
    PUBLIC_VEHICLES_CACHE_TTL: int
        Lifetime of the cached listing in seconds.
    RATELIMIT_ENABLED: bool
        Toggles Flask-Limiter globally.
    RATELIMIT_STORAGE_URI: str
        Flask-Limiter storage backend (``memory://`` or a Redis URL).
    AUTH_RATE_LIMIT: str
        Limit applied to the register and login endpoints.
    MAIL_HOST: str | None
        SMTP relay for trip notifications. Notifications are only logged when
        unset.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_ACCESS_SECRET = os.getenv("JWT_ACCESS_SECRET", "CHANGE_ME_ACCESS")
    JWT_REFRESH_SECRET = os.getenv("JWT_REFRESH_SECRET", "CHANGE_ME_REFRESH")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_ACCESS_EXPIRES = env_int("JWT_ACCESS_EXPIRES", 15 * 60)
    JWT_REFRESH_EXPIRES = env_int("JWT_REFRESH_EXPIRES", 7 * 24 * 60 * 60)

    # Refresh cookie
    REFRESH_COOKIE_NAME = os.getenv("REFRESH_COOKIE_NAME", "refreshToken")
    REFRESH_COOKIE_SECURE = env_bool("REFRESH_COOKIE_SECURE", True)

    # Redis-backed stores
    REDIS_URL = os.getenv("REDIS_URL") or None
    ALLOW_LOCAL_STORES = False
    PUBLIC_VEHICLES_CACHE_KEY = os.getenv("PUBLIC_VEHICLES_CACHE_KEY", "public:vehicles")
    PUBLIC_VEHICLES_CACHE_TTL = env_int("PUBLIC_VEHICLES_CACHE_TTL", 300)

    # Rate limiting
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    AUTH_RATE_LIMIT = os.getenv("AUTH_RATE_LIMIT", "100 per 15 minutes")

    # Outbound email
    MAIL_HOST = os.getenv("MAIL_HOST") or None
    MAIL_PORT = env_int("MAIL_PORT", 587)
    MAIL_USERNAME = os.getenv("MAIL_USERNAME") or None
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD") or None
    MAIL_USE_TLS = env_bool("MAIL_USE_TLS", True)
    MAIL_FROM = os.getenv("MAIL_FROM", "no-reply@fleetbook.local")

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging, CORS & proxy
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and drops the ``Secure`` flag from the
    refresh cookie so it survives plain-HTTP localhost.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    REFRESH_COOKIE_SECURE = env_bool("REFRESH_COOKIE_SECURE", False)
    ALLOW_LOCAL_STORES = env_bool("ALLOW_LOCAL_STORES", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Never talks to a real Redis or SMTP server. Process-local stores are
      allowed; the test fixtures swap in fakeredis.
    - Rate limiting is off so suites can hammer the auth endpoints.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = True
    JWT_ACCESS_SECRET = "test-access-secret-0123456789abcdef"
    JWT_REFRESH_SECRET = "test-refresh-secret-0123456789abcdef"
    REFRESH_COOKIE_SECURE = False
    REDIS_URL = None
    ALLOW_LOCAL_STORES = True
    MAIL_HOST = None
    RATELIMIT_ENABLED = False
    USE_PROXYFIX = False
    LOG_LEVEL = "WARNING"


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control. ``REDIS_URL`` is mandatory: gunicorn
    runs several workers and they must share one revocation registry and
    one listing cache.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    ALLOW_LOCAL_STORES = False
    REFRESH_COOKIE_SECURE = True


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
