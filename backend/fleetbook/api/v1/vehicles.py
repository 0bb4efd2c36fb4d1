"""Vehicle endpoints: public listing and owner management."""

from __future__ import annotations

from flask import Blueprint, request

from fleetbook.api.deps import (
    availability_cache,
    current_identity,
    json_response,
    message_response,
    require_roles,
    timing,
    vehicle_service,
)
from fleetbook.models.user import Role
from fleetbook.schemas import OwnerInsightsSchema, VehicleCreateSchema, VehicleSchema
from fleetbook.services.vehicles import VehicleCreateIn

bp = Blueprint("vehicles", __name__)

create_schema = VehicleCreateSchema()
vehicle_schema = VehicleSchema()
vehicles_schema = VehicleSchema(many=True)
insights_schema = OwnerInsightsSchema()


@bp.get("/public")
@timing
def list_public():
    """Bookable vehicles, served through the availability cache."""

    return json_response(availability_cache().get_public_vehicles())


@bp.post("")
@require_roles(Role.OWNER)
@timing
def create_vehicle():
    data = create_schema.load(request.get_json(silent=True) or {})
    vehicle = vehicle_service().create_vehicle(current_identity(), VehicleCreateIn(**data))
    return json_response(vehicle_schema.dump(vehicle), status=201)


@bp.get("/my-vehicles")
@require_roles(Role.OWNER)
@timing
def my_vehicles():
    vehicles = vehicle_service().list_my_vehicles(current_identity())
    return json_response(vehicles_schema.dump(vehicles))


@bp.get("/my-insights")
@require_roles(Role.OWNER, Role.ADMIN)
@timing
def my_insights():
    """Revenue, bookings, cancellations and the latest trips of the caller's fleet."""

    insights = vehicle_service().owner_insights(current_identity())
    return json_response(insights_schema.dump(insights))


@bp.delete("/<int:vehicle_id>")
@require_roles(Role.OWNER, Role.ADMIN)
@timing
def delete_vehicle(vehicle_id: int):
    """Soft-delete a vehicle and cancel its upcoming trips."""

    vehicle_service().soft_delete_vehicle(current_identity(), vehicle_id)
    return message_response("Vehicle removed and future trips cancelled")
