"""Dashboard schemas for owners and admins."""

from __future__ import annotations

from marshmallow import Schema, fields

from .trip import TripSchema


class AnalyticsSchema(Schema):
    """Platform-wide counters."""

    total_users = fields.Integer(required=True, data_key="totalUsers")
    total_vehicles = fields.Integer(required=True, data_key="totalVehicles")
    total_trips = fields.Integer(required=True, data_key="totalTrips")
    total_revenue = fields.Float(required=True, data_key="totalRevenue")


class OwnerInsightsSchema(Schema):
    """Revenue and activity over an owner's fleet."""

    total_revenue = fields.Float(required=True, data_key="totalRevenue")
    total_bookings = fields.Integer(required=True, data_key="totalBookings")
    total_cancellations = fields.Integer(required=True, data_key="totalCancellations")
    trip_history = fields.List(fields.Nested(TripSchema), required=True, data_key="tripHistory")


class MessageSchema(Schema):
    message = fields.String(required=True)
