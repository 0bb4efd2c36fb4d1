# fleetbook/services/auth/gate.py
from __future__ import annotations

import logging
from collections.abc import Iterable

from fleetbook.models.user import Role
from fleetbook.services._shared.base import BaseService, ServiceContext
from fleetbook.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    DependencyError,
    TokenError,
)
from fleetbook.services._shared.policies.common import is_authorized
from fleetbook.services._shared.ports import TokenDenylistStore, TokenProvider
from fleetbook.services.auth.dto import AuthenticatedIdentity

log = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer(authorization: str | None) -> str | None:
    """Return the token of an ``Authorization: Bearer <token>`` header, else ``None``."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


class AuthGate(BaseService):
    """
    Per-request authentication and role authorization.

    :meth:`authenticate` runs these checks in order and stops at the first
    failure, always with :class:`AuthenticationError`:

    1. a bearer token is present;
    2. it is not in the revocation registry (an unreachable registry counts
       as revoked);
    3. it verifies against the access secret and has not expired;
    4. its subject exists and is not soft-deleted.

    :meth:`authorize` is a separate, later step that trusts the identity it
    is given.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        denylist_store: TokenDenylistStore,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.tokens = token_provider
        self.denylist = denylist_store

    def authenticate(self, authorization: str | None) -> AuthenticatedIdentity:
        """
        Resolve the caller from an ``Authorization`` header value.

        :param authorization: Raw header value (may be ``None``).
        :returns: Identity of the token's subject.
        :raises AuthenticationError: On any failed check.
        """
        token = extract_bearer(authorization)
        if token is None:
            raise AuthenticationError("Not authorized, no token")

        try:
            revoked = self.denylist.is_revoked(token)
        except DependencyError as exc:
            log.warning("auth.gate.registry_unavailable", extra={"reason": str(exc)})
            raise AuthenticationError("Not authorized") from exc
        if revoked:
            raise AuthenticationError("Token has been revoked")

        try:
            claims = self.tokens.verify_access(token)
        except TokenError as exc:
            raise AuthenticationError("Not authorized, token failed") from exc

        with self.ro_uow() as uow:
            user = uow.users.get_active(claims.subject_id)
            if user is None:
                raise AuthenticationError("User not found or deleted")
            return AuthenticatedIdentity.from_user(user)

    @staticmethod
    def authorize(identity: AuthenticatedIdentity, required_roles: Iterable[Role | str]) -> None:
        """
        :raises AuthorizationError: When the identity's role is not listed.
        """
        if not is_authorized(identity.role, required_roles):
            raise AuthorizationError(
                f"User role {identity.role.value} is not authorized to access this route"
            )
