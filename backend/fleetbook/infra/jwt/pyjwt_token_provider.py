# fleetbook/infra/jwt/pyjwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from fleetbook.services._shared.clock import Clock, utc_now
from fleetbook.services._shared.errors import InvalidTokenError, TokenExpiredError
from fleetbook.services._shared.ports import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    TokenClaims,
    TokenProvider,
)

_REQUIRED_CLAIMS = ["sub", "iat", "exp", "jti", "type"]


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    HMAC-signed JWT adapter built on PyJWT.

    Access and refresh tokens use separate secrets and carry a ``type``
    claim. Every token gets a fresh random ``jti``, so two tokens issued for
    the same subject within the same second are still distinct.

    Expiry is checked against :attr:`clock` rather than PyJWT's internal
    wall clock so tests can pin time. A token is expired once
    ``now >= exp``.
    """

    access_secret: str
    refresh_secret: str
    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=7)
    algorithm: str = "HS256"
    clock: Clock = field(default=utc_now)

    # ------------------------------------------------------------------ #
    # Issue
    # ------------------------------------------------------------------ #

    def issue_access_token(self, subject_id: int) -> str:
        return self._issue(subject_id, ACCESS_TOKEN_TYPE, self.access_secret, self.access_ttl)

    def issue_refresh_token(self, subject_id: int) -> str:
        return self._issue(subject_id, REFRESH_TOKEN_TYPE, self.refresh_secret, self.refresh_ttl)

    def _issue(self, subject_id: int, token_type: str, secret: str, ttl: timedelta) -> str:
        now = self.clock()
        payload: dict[str, Any] = {
            "sub": str(subject_id),
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
            "jti": uuid4().hex,
            "type": token_type,
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    # ------------------------------------------------------------------ #
    # Verify
    # ------------------------------------------------------------------ #

    def verify_access(self, token: str) -> TokenClaims:
        return self._verify(token, ACCESS_TOKEN_TYPE, self.access_secret)

    def verify_refresh(self, token: str) -> TokenClaims:
        return self._verify(token, REFRESH_TOKEN_TYPE, self.refresh_secret)

    def _verify(self, token: str, expected_type: str, secret: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": _REQUIRED_CLAIMS},
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError() from exc

        if payload.get("type") != expected_type:
            raise InvalidTokenError("Wrong token type")

        try:
            subject_id = int(payload["sub"])
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
        except (TypeError, ValueError) as exc:
            raise InvalidTokenError("Malformed token claims") from exc

        if self.clock() >= expires_at:
            raise TokenExpiredError()

        return TokenClaims(
            subject_id=subject_id,
            issued_at=issued_at,
            expires_at=expires_at,
            token_type=expected_type,
            jti=str(payload["jti"]),
        )

    def decode_unverified(self, token: str) -> dict[str, Any] | None:
        try:
            payload = jwt.decode(token, options={"verify_signature": False, "verify_exp": False})
        except jwt.InvalidTokenError:
            return None
        return payload if isinstance(payload, dict) else None
