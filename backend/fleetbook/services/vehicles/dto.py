# fleetbook/services/vehicles/dto.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fleetbook.services._shared.outcome import Outcome

if TYPE_CHECKING:
    from fleetbook.models.trip import Trip


@dataclass(frozen=True, slots=True)
class VehicleCreateIn:
    """
    Input DTO for listing a vehicle.

    :param make: Manufacturer.
    :param model: Model name.
    :param year: Model year.
    :param license_plate: Plate, unique across all vehicles (deleted included).
    """

    make: str
    model: str
    year: int
    license_plate: str


@dataclass(frozen=True, slots=True)
class VehicleRemovalOut:
    """
    Result of a vehicle soft delete.

    :param vehicle_id: Removed vehicle.
    :param cancelled_trips: Upcoming trips moved to ``cancelled``.
    :param cache: Outcome of the public listing invalidation.
    """

    vehicle_id: int
    cancelled_trips: int
    cache: Outcome


@dataclass(frozen=True, slots=True)
class OwnerInsightsOut:
    total_revenue: float
    total_bookings: int
    total_cancellations: int
    trip_history: list[Trip] = field(default_factory=list)
