"""Trip endpoints: booking, histories and lifecycle transitions."""

from __future__ import annotations

from flask import Blueprint, request

from fleetbook.api.deps import (
    current_identity,
    json_response,
    message_response,
    require_roles,
    timing,
    trip_service,
)
from fleetbook.models.user import Role
from fleetbook.schemas import TripBookSchema, TripSchema, TripStatusUpdateSchema
from fleetbook.services.trips import TripBookIn

bp = Blueprint("trips", __name__)

book_schema = TripBookSchema()
status_schema = TripStatusUpdateSchema()
trip_schema = TripSchema()
trips_schema = TripSchema(many=True)


@bp.post("/book")
@require_roles(Role.CUSTOMER)
@timing
def book():
    """Create a pending trip for the caller."""

    data = book_schema.load(request.get_json(silent=True) or {})
    trip = trip_service().book(current_identity(), TripBookIn(**data))
    return json_response(trip_schema.dump(trip), status=201)


@bp.get("/my-history")
@require_roles(Role.CUSTOMER)
@timing
def my_history():
    return json_response(trips_schema.dump(trip_service().my_history(current_identity())))


@bp.get("/assigned")
@require_roles(Role.DRIVER)
@timing
def assigned():
    return json_response(trips_schema.dump(trip_service().assigned(current_identity())))


@bp.patch("/<int:trip_id>/status")
@require_roles(Role.DRIVER, Role.ADMIN)
@timing
def update_status(trip_id: int):
    """Move a trip to ``ongoing`` or ``completed``."""

    data = status_schema.load(request.get_json(silent=True) or {})
    trip = trip_service().update_status(current_identity(), trip_id, data["status"])
    return json_response(trip_schema.dump(trip))


@bp.patch("/<int:trip_id>/accept")
@require_roles(Role.DRIVER)
@timing
def accept(trip_id: int):
    trip = trip_service().accept(current_identity(), trip_id)
    return json_response(trip_schema.dump(trip))


@bp.patch("/<int:trip_id>/cancel")
@require_roles(Role.DRIVER, Role.CUSTOMER)
@timing
def cancel(trip_id: int):
    trip_service().cancel(current_identity(), trip_id)
    return message_response("Trip successfully cancelled")
