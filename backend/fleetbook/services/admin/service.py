# fleetbook/services/admin/service.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from fleetbook.models.trip import Trip
from fleetbook.models.user import User
from fleetbook.models.vehicle import Vehicle
from fleetbook.services._shared.base import BaseService, ServiceContext
from fleetbook.services._shared.errors import NotFoundError
from fleetbook.services.auth.dto import AuthenticatedIdentity
from fleetbook.services.vehicles.dto import VehicleRemovalOut
from fleetbook.services.vehicles.service import VehicleService

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AnalyticsOut:
    """
    Platform counters over non-deleted rows.

    :param total_revenue: Sum over completed trips.
    """

    total_users: int
    total_vehicles: int
    total_trips: int
    total_revenue: float


class AdminService(BaseService):
    """
    Back-office reads and removals.

    Vehicle removal delegates to :class:`VehicleService` so trip
    cancellation and cache invalidation behave the same for owners and
    admins.
    """

    def __init__(self, *, vehicles: VehicleService, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.vehicles = vehicles

    def analytics(self) -> AnalyticsOut:
        with self.ro_uow() as uow:
            return AnalyticsOut(
                total_users=uow.users.count(),
                total_vehicles=uow.vehicles.count(),
                total_trips=uow.trips.count(),
                total_revenue=uow.trips.completed_revenue(),
            )

    def list_users(self) -> list[User]:
        with self.ro_uow() as uow:
            return uow.users.list(sort=["-created_at"])

    def soft_delete_user(self, user_id: int) -> None:
        """
        Flag a user as deleted. Their tokens stop passing the auth gate.

        :raises NotFoundError: Unknown or already deleted user.
        """
        with self.rw_uow() as uow:
            user = uow.users.get_active(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            uow.users.delete(user)
        log.info("admin.user_deleted", extra={"user_id": user_id})

    def list_vehicles(self) -> list[Vehicle]:
        """Every vehicle, deleted ones included."""
        with self.ro_uow() as uow:
            return uow.vehicles.list(sort=["-created_at"], include_deleted=True)

    def delete_vehicle(self, actor: AuthenticatedIdentity, vehicle_id: int) -> VehicleRemovalOut:
        return self.vehicles.soft_delete_vehicle(actor, vehicle_id)

    def list_trips(self) -> list[Trip]:
        """Every trip, deleted ones included."""
        with self.ro_uow() as uow:
            return uow.trips.list(sort=["-created_at"], include_deleted=True)

    def soft_delete_trip(self, trip_id: int) -> None:
        """
        :raises NotFoundError: Unknown or already deleted trip.
        """
        with self.rw_uow() as uow:
            trip = uow.trips.get_active(trip_id)
            if trip is None:
                raise NotFoundError("Trip", trip_id)
            uow.trips.delete(trip)
        log.info("admin.trip_deleted", extra={"trip_id": trip_id})
