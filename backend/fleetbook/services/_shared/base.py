# fleetbook/services/_shared/base.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from fleetbook.core import errors as api_errors
from fleetbook.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DependencyError,
    NotFoundError,
    ServiceError,
    TokenError,
    ValidationError,
)
from fleetbook.services._shared.outcome import Outcome
from fleetbook.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

log = logging.getLogger(__name__)


def translate_service_error(exc: ServiceError) -> api_errors.APIError:
    """
    Map a service-level error onto its HTTP counterpart.

    :param exc: Error raised inside a service.
    :type exc: ServiceError
    :returns: API error carrying status code and client-safe message.
    :rtype: fleetbook.core.errors.APIError
    """
    message = str(exc)
    if isinstance(exc, (AuthenticationError, TokenError)):
        return api_errors.Unauthorized(message)
    if isinstance(exc, AuthorizationError):
        return api_errors.Forbidden(message)
    if isinstance(exc, NotFoundError):
        return api_errors.NotFound(message)
    if isinstance(exc, ConflictError):
        return api_errors.Conflict(message)
    if isinstance(exc, DependencyError):
        return api_errors.ServiceUnavailable(message)
    if isinstance(exc, ValidationError):
        return api_errors.BadRequest(message)
    # Any other ServiceError subclass → 400 Bad Request
    return api_errors.BadRequest(message)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry request-scoped data into services.

    :param actor_id: Authenticated user identifier.
    :param actor_role: Role value of the authenticated user.
    :param request_id: Correlation id for logging.
    """

    actor_id: int | None = None
    actor_role: str | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Log failed best-effort side effects (cache, revocation, email).
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    Services never touch the global session directly; they always go through
    a Unit of Work.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        :param ctx: Optional request-scoped context.
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Create a read-write Unit of Work."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Create a read-only Unit of Work."""
        return SQLAlchemyReadOnlyUnitOfWork()

    # ----------------------- Best-effort side effects -----------------------

    @staticmethod
    def log_outcome(event: str, outcome: Outcome, **fields: object) -> Outcome:
        """Log a failed best-effort side effect and hand the outcome back."""
        if not outcome.ok:
            log.warning("%s.failed", event, extra={"reason": outcome.reason, **fields})
        return outcome
