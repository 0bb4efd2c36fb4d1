from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Protocol

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Verified claims of an access or refresh token.

    :param subject_id: Identity the token was issued to.
    :type subject_id: int
    :param issued_at: ``iat`` claim (UTC).
    :type issued_at: datetime
    :param expires_at: ``exp`` claim (UTC).
    :type expires_at: datetime
    :param token_type: ``"access"`` or ``"refresh"``.
    :type token_type: str
    :param jti: Unique token identifier.
    :type jti: str
    """

    subject_id: int
    issued_at: datetime
    expires_at: datetime
    token_type: str
    jti: str


class TokenProvider(Protocol):
    """
    Port for issuing and verifying signed tokens.

    Access and refresh tokens are signed with different secrets, so a token
    of one kind never verifies as the other. Verification raises
    :class:`~fleetbook.services._shared.errors.TokenExpiredError` when
    ``now >= exp`` and
    :class:`~fleetbook.services._shared.errors.InvalidTokenError` for any
    other failure.

    ``access_ttl`` is the lifetime given to every access token; nothing
    a client presents can outlive it.
    """

    access_ttl: timedelta

    def issue_access_token(self, subject_id: int) -> str: ...

    def issue_refresh_token(self, subject_id: int) -> str: ...

    def verify_access(self, token: str) -> TokenClaims: ...

    def verify_refresh(self, token: str) -> TokenClaims: ...

    def decode_unverified(self, token: str) -> dict[str, Any] | None:
        """Return the payload without checking the signature, or ``None`` if malformed."""
        ...
