# tests/api/test_auth_api.py
from __future__ import annotations

import time
from datetime import timedelta

import jwt
from freezegun import freeze_time

from tests.factories.user import DEFAULT_PASSWORD, CustomerFactory, OwnerFactory
from tests.helpers.utils import bearer_for

BASE = "/api/v1/auth"


def _refresh_cookie(response) -> str:
    cookies = [h for h in response.headers.getlist("Set-Cookie") if h.startswith("refreshToken=")]
    assert len(cookies) == 1
    return cookies[0]


def test_register_returns_identity_access_token_and_cookie(client, infra):
    payload = {"name": "Ola", "email": "ola@example.com", "password": "secret1", "role": "driver"}

    response = client.post(f"{BASE}/register", json=payload)

    assert response.status_code == 201
    body = response.get_json()
    assert set(body) == {"_id", "name", "email", "role", "accessToken"}
    assert body["role"] == "driver"
    assert infra.tokens.verify_access(body["accessToken"]).subject_id == body["_id"]
    cookie = _refresh_cookie(response)
    assert "HttpOnly" in cookie
    assert "SameSite=Strict" in cookie
    assert "Path=/api/v1/auth" in cookie
    assert "Max-Age=604800" in cookie


def test_register_admin_is_rejected(client):
    payload = {"name": "Eve", "email": "eve@example.com", "password": "secret1", "role": "admin"}
    response = client.post(f"{BASE}/register", json=payload)

    assert response.status_code == 400
    assert response.get_json()["message"] == "Invalid role"
    assert response.mimetype == "application/problem+json"


def test_register_missing_fields(client):
    response = client.post(f"{BASE}/register", json={"email": "x@example.com"})

    assert response.status_code == 400
    body = response.get_json()
    assert body["code"] == "validation_error"
    assert {"name", "password", "role"} <= set(body["details"]["errors"])


def test_register_duplicate_email(client):
    CustomerFactory(email="dup@example.com")
    payload = {"name": "D", "email": "dup@example.com", "password": "secret1", "role": "customer"}
    response = client.post(f"{BASE}/register", json=payload)
    assert response.status_code == 400
    assert response.get_json()["message"] == "User already exists"


def test_login_returns_both_tokens(client, infra):
    user = OwnerFactory()

    response = client.post(f"{BASE}/login", json={"email": user.email, "password": DEFAULT_PASSWORD})

    assert response.status_code == 200
    body = response.get_json()
    assert body["_id"] == user.id
    assert infra.tokens.verify_refresh(body["refreshToken"]).subject_id == user.id
    assert body["refreshToken"] in _refresh_cookie(response)


def test_login_bad_credentials(client):
    user = CustomerFactory()
    response = client.post(f"{BASE}/login", json={"email": user.email, "password": "wrong"})
    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid email or password"


def test_refresh_flow_uses_the_cookie_without_rotation(client, infra):
    user = CustomerFactory()
    client.post(f"{BASE}/login", json={"email": user.email, "password": DEFAULT_PASSWORD})

    first = client.post(f"{BASE}/refresh")
    second = client.post(f"{BASE}/refresh")

    assert first.status_code == second.status_code == 200
    assert "Set-Cookie" not in first.headers
    a, b = first.get_json()["accessToken"], second.get_json()["accessToken"]
    assert a != b
    assert infra.tokens.verify_access(a).subject_id == user.id


def test_refresh_without_cookie_is_unauthorized(client):
    assert client.post(f"{BASE}/refresh").status_code == 401


def test_refresh_with_forged_cookie_is_forbidden(client):
    client.set_cookie("refreshToken", "forged.token.value", path=BASE)
    response = client.post(f"{BASE}/refresh")
    assert response.status_code == 403
    assert response.get_json()["message"] == "Invalid refresh token"


def test_me_requires_a_token(client):
    response = client.get(f"{BASE}/me")
    assert response.status_code == 401
    assert response.get_json()["message"] == "Not authorized, no token"


def test_me_returns_identity(client, app):
    user = CustomerFactory(name="Mia")
    response = client.get(f"{BASE}/me", headers=bearer_for(app, user))
    assert response.get_json() == {
        "_id": user.id,
        "name": "Mia",
        "email": user.email,
        "role": "customer",
    }


def test_logout_revokes_until_natural_expiry(client, app, infra):
    user = CustomerFactory()
    with freeze_time("2026-02-01 10:00:00") as frozen:
        headers = bearer_for(app, user)
        assert client.get(f"{BASE}/me", headers=headers).status_code == 200

        response = client.post(f"{BASE}/logout", headers=headers)

        assert response.status_code == 200
        assert response.get_json() == {"message": "Logged out successfully"}
        cleared = _refresh_cookie(response)
        assert "Expires=Thu, 01 Jan 1970" in cleared
        revoked = client.get(f"{BASE}/me", headers=headers)
        assert revoked.status_code == 401
        assert revoked.get_json()["message"] == "Token has been revoked"

        token = headers["Authorization"].removeprefix("Bearer ")
        assert 0 < infra.redis.ttl(f"deny:at:{token}") <= 15 * 60

        frozen.tick(timedelta(minutes=15))
        assert client.get(f"{BASE}/me", headers=headers).status_code == 401


def test_logout_with_far_future_token_parks_it_for_one_access_lifetime(client, infra):
    forged = jwt.encode(
        {"sub": "1", "exp": int(time.time()) + 10 * 365 * 24 * 3600},
        "not-the-server-signing-key-0123456789",
        algorithm="HS256",
    )

    response = client.post(f"{BASE}/logout", headers={"Authorization": f"Bearer {forged}"})

    assert response.status_code == 200
    assert 0 < infra.redis.ttl(f"deny:at:{forged}") <= 15 * 60


def test_logout_without_token_still_succeeds(client):
    response = client.post(f"{BASE}/logout")
    assert response.status_code == 200


def test_deleted_user_token_is_rejected(client, app, session):
    user = CustomerFactory()
    headers = bearer_for(app, user)
    user.is_deleted = True
    session.commit()
    assert client.get(f"{BASE}/me", headers=headers).status_code == 401
