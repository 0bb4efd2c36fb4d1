"""Admin endpoints. Every route requires the ``admin`` role."""

from __future__ import annotations

from flask import Blueprint

from fleetbook.api.deps import (
    admin_service,
    authenticate_request,
    current_identity,
    json_response,
    message_response,
    timing,
)
from fleetbook.models.user import Role
from fleetbook.schemas import AdminVehicleSchema, AnalyticsSchema, TripSchema, UserSchema
from fleetbook.services.auth import AuthGate

bp = Blueprint("admin", __name__)

analytics_schema = AnalyticsSchema()
users_schema = UserSchema(many=True)
vehicles_schema = AdminVehicleSchema(many=True)
trips_schema = TripSchema(many=True)


@bp.before_request
def _admin_only() -> None:
    AuthGate.authorize(authenticate_request(), [Role.ADMIN])


@bp.get("/analytics")
@timing
def analytics():
    return json_response(analytics_schema.dump(admin_service().analytics()))


@bp.get("/users")
@timing
def list_users():
    return json_response(users_schema.dump(admin_service().list_users()))


@bp.delete("/users/<int:user_id>")
@timing
def delete_user(user_id: int):
    admin_service().soft_delete_user(user_id)
    return message_response("User successfully soft-deleted")


@bp.get("/vehicles")
@timing
def list_vehicles():
    return json_response(vehicles_schema.dump(admin_service().list_vehicles()))


@bp.delete("/vehicles/<int:vehicle_id>")
@timing
def delete_vehicle(vehicle_id: int):
    admin_service().delete_vehicle(current_identity(), vehicle_id)
    return message_response("Vehicle removed and future trips cancelled")


@bp.get("/trips")
@timing
def list_trips():
    return json_response(trips_schema.dump(admin_service().list_trips()))


@bp.delete("/trips/<int:trip_id>")
@timing
def delete_trip(trip_id: int):
    admin_service().soft_delete_trip(trip_id)
    return message_response("Trip successfully soft-deleted")
