"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from fleetbook.models.user import Role


class RegisterSchema(Schema):
    """Input payload for account registration.

    ``role`` is accepted as free text; the auth service decides which values
    may be self-assigned.
    """

    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=6, max=128))
    role = fields.String(required=True, validate=validate.Length(min=1, max=20))


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class IdentitySchema(Schema):
    """Identity block returned by register, login and ``/auth/me``."""

    id = fields.Integer(required=True, data_key="_id")
    name = fields.String(required=True)
    email = fields.Email(required=True)
    role = fields.Enum(Role, by_value=True, required=True)


class AccessTokenSchema(Schema):
    access_token = fields.String(required=True, data_key="accessToken")
