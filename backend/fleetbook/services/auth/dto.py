# fleetbook/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

from fleetbook.models.user import Role, User

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for self-service registration.

    :param name: Display name.
    :type name: str
    :param email: Login email (normalized by the model).
    :type email: str
    :param password: Raw password (hashed by the model).
    :type password: str
    :param role: Requested role value; ``admin`` is refused.
    :type role: str
    """

    name: str
    email: str
    password: str
    role: str


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthenticatedIdentity:
    """
    The caller as seen by the auth gate and role checks.

    :param id: User id.
    :param name: Display name.
    :param email: Login email.
    :param role: Role fixed at registration.
    """

    id: int
    name: str
    email: str
    role: Role

    @classmethod
    def from_user(cls, user: User) -> AuthenticatedIdentity:
        return cls(id=user.id, name=user.name, email=user.email, role=Role(user.role))


@dataclass(frozen=True, slots=True)
class AuthResultOut:
    """
    Identity plus the freshly issued token pair.

    :param identity: Authenticated user.
    :type identity: AuthenticatedIdentity
    :param access_token: Short-lived bearer token.
    :type access_token: str
    :param refresh_token: Long-lived token delivered in the refresh cookie.
    :type refresh_token: str
    """

    identity: AuthenticatedIdentity
    access_token: str
    refresh_token: str
