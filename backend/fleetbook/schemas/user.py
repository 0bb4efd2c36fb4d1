"""User resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields

from fleetbook.models.user import Role


class UserSummarySchema(Schema):
    """Minimal user reference embedded in vehicles and trips."""

    id = fields.Integer(required=True, data_key="_id")
    name = fields.String(required=True)


class UserSchema(Schema):
    """Admin-facing representation of a user (never exposes the hash)."""

    id = fields.Integer(required=True, data_key="_id")
    name = fields.String(required=True)
    email = fields.Email(required=True)
    role = fields.Enum(Role, by_value=True, required=True)
    is_deleted = fields.Boolean(required=True, data_key="isDeleted")
    created_at = fields.DateTime(required=True, data_key="createdAt")
    updated_at = fields.DateTime(required=True, data_key="updatedAt")
