"""Vehicle resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from fleetbook.models.vehicle import VehicleStatus

from .user import UserSummarySchema


class VehicleCreateSchema(Schema):
    """Payload for listing a new vehicle."""

    class Meta:
        unknown = EXCLUDE

    make = fields.String(required=True, validate=validate.Length(min=1, max=60))
    model = fields.String(required=True, validate=validate.Length(min=1, max=60))
    year = fields.Integer(required=True, validate=validate.Range(min=1900, max=2100))
    license_plate = fields.String(
        required=True, data_key="licensePlate", validate=validate.Length(min=1, max=20)
    )


class PublicVehicleSchema(Schema):
    """Projection cached for the public listing.

    Only what an anonymous visitor needs to book: the owner's name and the
    ids of the drivers that can be requested.
    """

    id = fields.Integer(required=True, data_key="_id")
    make = fields.String(required=True)
    model = fields.String(required=True)
    year = fields.Integer(required=True)
    owner = fields.Nested(UserSummarySchema, required=True)
    drivers = fields.List(fields.Integer(), attribute="driver_ids", required=True)


class VehicleSchema(Schema):
    """Owner-facing representation of a vehicle."""

    id = fields.Integer(required=True, data_key="_id")
    make = fields.String(required=True)
    model = fields.String(required=True)
    year = fields.Integer(required=True)
    license_plate = fields.String(required=True, data_key="licensePlate")
    status = fields.Enum(VehicleStatus, by_value=True, required=True)
    owner_id = fields.Integer(required=True, data_key="owner")
    drivers = fields.List(fields.Integer(), attribute="driver_ids", required=True)
    is_deleted = fields.Boolean(required=True, data_key="isDeleted")
    created_at = fields.DateTime(required=True, data_key="createdAt")
    updated_at = fields.DateTime(required=True, data_key="updatedAt")


class AdminVehicleSchema(VehicleSchema):
    """Vehicle with owner and driver details expanded for admin screens."""

    owner = fields.Nested(UserSummarySchema, required=True)
    drivers = fields.List(fields.Nested(UserSummarySchema), required=True)

    class Meta:
        exclude = ("owner_id",)
