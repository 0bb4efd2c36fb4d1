"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
concerns. They are the stable contract between repositories, adapters and
application services.

The translation to HTTP responses (RFC 7807) is done by
:func:`fleetbook.services._shared.base.translate_service_error`, which the
error handlers in ``fleetbook/core/errors.py`` call for every uncaught
:class:`ServiceError`.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        Constraint name (e.g. ``'uq_vehicles_license_plate'``). SQLite reports
        the column list instead, so ``'vehicles.license_plate'`` style hints
        are matched as well.

    Returns
    -------
    bool
        True if the IntegrityError message mentions the constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - Subclasses carry a client-safe message in ``str(exc)``.
    """

    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ValidationError(ServiceError):
    """Input is missing fields or carries values outside the allowed set."""

    default_message = "Invalid input"


class AuthenticationError(ServiceError):
    """The caller could not be authenticated (missing, invalid or revoked credentials)."""

    default_message = "Not authorized"


class AuthorizationError(ServiceError):
    """The caller is authenticated but not allowed to perform the action."""

    default_message = "Forbidden"


class DependencyError(ServiceError):
    """
    A backing store (Redis, SMTP) is unreachable or misbehaving.

    :param dependency: Short name of the failing dependency.
    :type dependency: str
    """

    default_message = "Dependency unavailable"

    def __init__(self, dependency: str, message: str | None = None) -> None:
        self.dependency = dependency
        super().__init__(message or f"{dependency} unavailable")


# --------------------------------------------------------------------------- #
# Token verification
# --------------------------------------------------------------------------- #


class TokenError(ServiceError):
    """Base class for token verification failures."""

    default_message = "Invalid token"


class TokenExpiredError(TokenError):
    """The token's ``exp`` claim is not in the future."""

    default_message = "Token expired"


class InvalidTokenError(TokenError):
    """Bad signature, malformed payload, or wrong token type."""


# --------------------------------------------------------------------------- #
# Entity errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found (or is soft-deleted).

    :param entity: Entity name (e.g., "Vehicle").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "Vehicle").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"
