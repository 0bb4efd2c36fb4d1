"""Vehicle listing, ownership and public availability."""

from .availability import AvailabilityCache
from .dto import OwnerInsightsOut, VehicleCreateIn, VehicleRemovalOut
from .service import VehicleService

__all__ = [
    "AvailabilityCache",
    "OwnerInsightsOut",
    "VehicleCreateIn",
    "VehicleRemovalOut",
    "VehicleService",
]
