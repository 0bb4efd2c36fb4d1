"""Tiny helpers shared across test modules."""

from __future__ import annotations

from fleetbook.core.extensions import get_infrastructure
from fleetbook.services.auth.dto import AuthenticatedIdentity


def identity_of(user) -> AuthenticatedIdentity:
    """Build the identity the auth gate would attach for ``user``."""
    return AuthenticatedIdentity.from_user(user)


def bearer_for(app, user) -> dict[str, str]:
    """Return an ``Authorization`` header carrying a fresh access token for ``user``."""
    token = get_infrastructure(app).tokens.issue_access_token(user.id)
    return {"Authorization": f"Bearer {token}"}
