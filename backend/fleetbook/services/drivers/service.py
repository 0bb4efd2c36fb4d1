# fleetbook/services/drivers/service.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from fleetbook.models.vehicle import Vehicle
from fleetbook.services._shared.base import BaseService, ServiceContext
from fleetbook.services._shared.errors import NotFoundError, ValidationError
from fleetbook.services._shared.outcome import Outcome
from fleetbook.services.auth.dto import AuthenticatedIdentity
from fleetbook.services.vehicles.availability import AvailabilityCache

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DriverRegistrationOut:
    """
    :param vehicle: Vehicle the driver is now registered on.
    :param cache: Outcome of the public listing invalidation.
    """

    vehicle: Vehicle
    cache: Outcome


class DriverService(BaseService):
    """Driver self-registration onto vehicles."""

    def __init__(
        self, *, availability: AvailabilityCache, ctx: ServiceContext | None = None
    ) -> None:
        super().__init__(ctx=ctx)
        self.availability = availability

    def list_available_vehicles(self, driver: AuthenticatedIdentity) -> list[Vehicle]:
        """Non-deleted vehicles the driver has not registered on yet."""
        with self.ro_uow() as uow:
            return uow.vehicles.list_unregistered_for_driver(driver.id)

    def register_for_vehicle(
        self, driver: AuthenticatedIdentity, vehicle_id: int
    ) -> DriverRegistrationOut:
        """
        Add the driver to a vehicle's driver set.

        A vehicle with its first driver becomes public, so the listing is
        invalidated after the commit.

        :raises NotFoundError: Unknown or deleted vehicle, or the driver
            account is gone.
        :raises ValidationError: The driver is already registered.
        """
        with self.rw_uow() as uow:
            vehicle = uow.vehicles.get_active(vehicle_id)
            if vehicle is None:
                raise NotFoundError("Vehicle", vehicle_id)
            if vehicle.has_driver(driver.id):
                raise ValidationError("Driver is already registered for this vehicle")
            user = uow.users.get_active_driver(driver.id)
            if user is None:
                raise NotFoundError("Driver", driver.id)
            vehicle.drivers.append(user)

        log.info("drivers.registered", extra={"vehicle_id": vehicle_id, "user_id": driver.id})
        cache = self.availability.invalidate()
        return DriverRegistrationOut(vehicle=vehicle, cache=cache)
