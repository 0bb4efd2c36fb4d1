"""Driver endpoints: discover vehicles and register onto them."""

from __future__ import annotations

from flask import Blueprint

from fleetbook.api.deps import (
    current_identity,
    driver_service,
    json_response,
    require_roles,
    timing,
)
from fleetbook.models.user import Role
from fleetbook.schemas import VehicleSchema

bp = Blueprint("driver", __name__)

vehicle_schema = VehicleSchema()
vehicles_schema = VehicleSchema(many=True)


@bp.get("/available-vehicles")
@require_roles(Role.DRIVER)
@timing
def available_vehicles():
    """Vehicles the caller is not registered on yet."""

    vehicles = driver_service().list_available_vehicles(current_identity())
    return json_response(vehicles_schema.dump(vehicles))


@bp.post("/register-vehicle/<int:vehicle_id>")
@require_roles(Role.DRIVER)
@timing
def register_vehicle(vehicle_id: int):
    result = driver_service().register_for_vehicle(current_identity(), vehicle_id)
    return json_response(
        {
            "message": "Successfully registered for vehicle",
            "vehicle": vehicle_schema.dump(result.vehicle),
        }
    )
