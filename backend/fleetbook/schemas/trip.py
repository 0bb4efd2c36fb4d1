"""Trip resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from fleetbook.models.trip import TripStatus

from .user import UserSummarySchema


class TripBookSchema(Schema):
    """Payload for booking a trip."""

    class Meta:
        unknown = EXCLUDE

    vehicle_id = fields.Integer(required=True, data_key="vehicleId")
    driver_id = fields.Integer(required=True, data_key="driverId")
    start_time = fields.DateTime(required=True, data_key="startTime")
    end_time = fields.DateTime(required=True, data_key="endTime")
    total_amount = fields.Float(
        required=True, data_key="totalAmount", validate=validate.Range(min=0)
    )


class TripStatusUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    status = fields.String(required=True)


class TripVehicleSchema(Schema):
    id = fields.Integer(required=True, data_key="_id")
    make = fields.String(required=True)
    model = fields.String(required=True)
    license_plate = fields.String(required=True, data_key="licensePlate")


class TripSchema(Schema):
    """Representation of a trip with its parties expanded."""

    id = fields.Integer(required=True, data_key="_id")
    customer = fields.Nested(UserSummarySchema, required=True)
    driver = fields.Nested(UserSummarySchema, required=True)
    vehicle = fields.Nested(TripVehicleSchema, required=True)
    start_time = fields.DateTime(required=True, data_key="startTime")
    end_time = fields.DateTime(required=True, data_key="endTime")
    status = fields.Enum(TripStatus, by_value=True, required=True)
    total_amount = fields.Float(required=True, data_key="totalAmount")
    is_deleted = fields.Boolean(required=True, data_key="isDeleted")
    created_at = fields.DateTime(required=True, data_key="createdAt")
