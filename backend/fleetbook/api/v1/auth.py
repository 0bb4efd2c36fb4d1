"""Authentication endpoints: register, login, refresh, logout and whoami."""

from __future__ import annotations

from flask import Blueprint, Response, current_app, request

from fleetbook.api.deps import (
    auth_service,
    current_identity,
    json_response,
    message_response,
    require_auth,
    timing,
)
from fleetbook.core.extensions import limiter
from fleetbook.schemas import AccessTokenSchema, IdentitySchema, LoginSchema, RegisterSchema
from fleetbook.services.auth import AuthResultOut, LoginIn, RegisterIn, extract_bearer

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
identity_schema = IdentitySchema()
access_token_schema = AccessTokenSchema()


def _auth_rate_limit() -> str:
    return str(current_app.config.get("AUTH_RATE_LIMIT", "100 per 15 minutes"))


# register and login draw from one budget per client address
auth_limit = limiter.shared_limit(_auth_rate_limit, scope="auth")


def _cookie_path() -> str:
    # Scope the cookie to this blueprint's mount point
    rule = request.url_rule.rule if request.url_rule else request.path
    return rule.rsplit("/", 1)[0] or "/"


def _set_refresh_cookie(response: Response, token: str) -> None:
    config = current_app.config
    response.set_cookie(
        config["REFRESH_COOKIE_NAME"],
        token,
        max_age=int(config["JWT_REFRESH_EXPIRES"]),
        httponly=True,
        secure=bool(config["REFRESH_COOKIE_SECURE"]),
        samesite="Strict",
        path=_cookie_path(),
    )


def _clear_refresh_cookie(response: Response) -> None:
    config = current_app.config
    response.delete_cookie(
        config["REFRESH_COOKIE_NAME"],
        httponly=True,
        secure=bool(config["REFRESH_COOKIE_SECURE"]),
        samesite="Strict",
        path=_cookie_path(),
    )


def _auth_body(result: AuthResultOut, *, include_refresh: bool) -> dict:
    body = identity_schema.dump(result.identity)
    body["accessToken"] = result.access_token
    if include_refresh:
        body["refreshToken"] = result.refresh_token
    return body


@bp.post("/register")
@auth_limit
@timing
def register():
    """Create an account, set the refresh cookie and return an access token."""

    data = register_schema.load(request.get_json(silent=True) or {})
    result = auth_service().register(RegisterIn(**data))
    response = json_response(_auth_body(result, include_refresh=False), status=201)
    _set_refresh_cookie(response, result.refresh_token)
    return response


@bp.post("/login")
@auth_limit
@timing
def login():
    """Authenticate credentials and issue a token pair."""

    data = login_schema.load(request.get_json(silent=True) or {})
    result = auth_service().login(LoginIn(**data))
    response = json_response(_auth_body(result, include_refresh=True))
    _set_refresh_cookie(response, result.refresh_token)
    return response


@bp.post("/refresh")
@timing
def refresh():
    """Exchange the refresh cookie for a new access token (no rotation)."""

    token = request.cookies.get(current_app.config["REFRESH_COOKIE_NAME"])
    access_token = auth_service().refresh(token)
    return json_response(access_token_schema.dump({"access_token": access_token}))


@bp.post("/logout")
@timing
def logout():
    """Revoke the presented access token and clear the refresh cookie.

    Succeeds without a token and when revocation could not be recorded.
    """

    auth_service().logout(extract_bearer(request.headers.get("Authorization")))
    response = message_response("Logged out successfully")
    _clear_refresh_cookie(response)
    return response


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the authenticated identity."""

    return json_response(identity_schema.dump(current_identity()))
