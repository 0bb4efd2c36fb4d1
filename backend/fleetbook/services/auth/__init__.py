"""Authentication lifecycle and the per-request auth gate."""

from .dto import AuthenticatedIdentity, AuthResultOut, LoginIn, RegisterIn
from .gate import AuthGate, extract_bearer
from .service import AuthService

__all__ = [
    "AuthGate",
    "AuthResultOut",
    "AuthService",
    "AuthenticatedIdentity",
    "LoginIn",
    "RegisterIn",
    "extract_bearer",
]
