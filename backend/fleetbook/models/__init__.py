from fleetbook.models.trip import Trip, TripStatus
from fleetbook.models.user import Role, User
from fleetbook.models.vehicle import Vehicle, VehicleStatus, vehicle_drivers

__all__ = [
    "Role",
    "Trip",
    "TripStatus",
    "User",
    "Vehicle",
    "VehicleStatus",
    "vehicle_drivers",
]
