"""Convenience exports for application schemas."""

from __future__ import annotations

from .admin import AnalyticsSchema, MessageSchema, OwnerInsightsSchema
from .auth import AccessTokenSchema, IdentitySchema, LoginSchema, RegisterSchema
from .trip import TripBookSchema, TripSchema, TripStatusUpdateSchema
from .user import UserSchema, UserSummarySchema
from .vehicle import AdminVehicleSchema, PublicVehicleSchema, VehicleCreateSchema, VehicleSchema

__all__ = [
    "AccessTokenSchema",
    "AdminVehicleSchema",
    "AnalyticsSchema",
    "IdentitySchema",
    "LoginSchema",
    "MessageSchema",
    "OwnerInsightsSchema",
    "PublicVehicleSchema",
    "RegisterSchema",
    "TripBookSchema",
    "TripSchema",
    "TripStatusUpdateSchema",
    "UserSchema",
    "UserSummarySchema",
    "VehicleCreateSchema",
    "VehicleSchema",
]
