# fleetbook/services/auth/service.py
from __future__ import annotations

import logging
import math

from sqlalchemy.exc import IntegrityError

from fleetbook.models.user import SELF_ASSIGNABLE_ROLES, Role
from fleetbook.repositories.user import UserRepository
from fleetbook.services._shared.base import BaseService, ServiceContext
from fleetbook.services._shared.clock import Clock, utc_now
from fleetbook.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    DependencyError,
    TokenError,
    ValidationError,
    violates,
)
from fleetbook.services._shared.outcome import Outcome
from fleetbook.services._shared.ports import TokenDenylistStore, TokenProvider
from fleetbook.services.auth.dto import (
    AuthenticatedIdentity,
    AuthResultOut,
    LoginIn,
    RegisterIn,
)

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication lifecycle service (register / login / refresh / logout).

    Tokens are issued through a pluggable :class:`TokenProvider`; logged-out
    access tokens are parked in a :class:`TokenDenylistStore` until they
    would have expired.

    Refresh tokens are stateless: they are neither rotated nor tracked
    server side, so a leaked refresh token stays usable until it expires.
    Logout only revokes the access token it was called with.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        denylist_store: TokenDenylistStore,
        clock: Clock = utc_now,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        :param token_provider: Adapter for issuing/verifying JWTs.
        :param denylist_store: Revocation registry for access tokens.
        :param clock: Time source used to compute remaining token lifetime.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_provider
        self.denylist = denylist_store
        self.clock = clock

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> AuthResultOut:
        """
        Create an account and sign it in.

        :param dto: Registration input.
        :returns: New identity with an access/refresh token pair.
        :raises ValidationError: Role outside customer/driver/owner, or the
            email is already registered.
        """
        try:
            role = Role(dto.role)
        except ValueError:
            role = None
        if role not in SELF_ASSIGNABLE_ROLES:
            raise ValidationError("Invalid role")

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if repo.exists_by_email(dto.email):
                raise ValidationError("User already exists")
            try:
                user = repo.add(
                    repo.model(name=dto.name, email=dto.email, password=dto.password, role=role)
                )
            except IntegrityError as exc:
                if violates(exc, "uq_users_email") or violates(exc, "users.email"):
                    raise ValidationError("User already exists") from exc
                raise
            identity = AuthenticatedIdentity.from_user(user)

        log.info("auth.registered", extra={"user_id": identity.id})
        return self._issue_pair(identity)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> AuthResultOut:
        """
        Authenticate credentials and issue a fresh token pair.

        :raises AuthenticationError: Unknown email, wrong password, or a
            soft-deleted account. The message does not say which.
        """
        with self.ro_uow() as uow:
            user = uow.users.authenticate(dto.email, dto.password)
            if user is None:
                raise AuthenticationError("Invalid email or password")
            identity = AuthenticatedIdentity.from_user(user)

        return self._issue_pair(identity)

    # ------------------------------------------------------------------ #
    # Refresh (no rotation)
    # ------------------------------------------------------------------ #

    def refresh(self, refresh_token: str | None) -> str:
        """
        Exchange a refresh token for a new access token.

        :param refresh_token: Value of the refresh cookie, if any.
        :returns: New access token. The refresh token is left as is.
        :raises AuthenticationError: Cookie missing, or its subject no longer
            exists or is deleted.
        :raises AuthorizationError: The refresh token fails verification.
        """
        if not refresh_token:
            raise AuthenticationError("No refresh token")
        try:
            claims = self.tokens.verify_refresh(refresh_token)
        except TokenError as exc:
            raise AuthorizationError("Invalid refresh token") from exc

        with self.ro_uow() as uow:
            if uow.users.get_active(claims.subject_id) is None:
                raise AuthenticationError("User not found")

        return self.tokens.issue_access_token(claims.subject_id)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, access_token: str | None) -> Outcome:
        """
        Revoke the access token for the rest of its lifetime.

        The entry never lasts longer than the configured access-token TTL,
        whatever ``exp`` the presented token claims.

        Never raises: a malformed or already expired token needs no
        revocation, and a registry outage is reported as a failed outcome so
        the caller can still clear the refresh cookie.
        """
        if not access_token:
            return Outcome.applied()
        payload = self.tokens.decode_unverified(access_token)
        exp = payload.get("exp") if payload else None
        if not isinstance(exp, (int, float)):
            return Outcome.applied()

        # exp is unverified here; never park an entry longer than an access token lives
        remaining = min(
            math.ceil(exp - self.clock().timestamp()),
            math.ceil(self.tokens.access_ttl.total_seconds()),
        )
        if remaining <= 0:
            return Outcome.applied()
        try:
            self.denylist.revoke(access_token, ttl_seconds=remaining)
        except DependencyError as exc:
            return self.log_outcome("auth.revoke", Outcome.failed(str(exc)))
        return Outcome.applied()

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def _issue_pair(self, identity: AuthenticatedIdentity) -> AuthResultOut:
        return AuthResultOut(
            identity=identity,
            access_token=self.tokens.issue_access_token(identity.id),
            refresh_token=self.tokens.issue_refresh_token(identity.id),
        )
