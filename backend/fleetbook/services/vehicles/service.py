# fleetbook/services/vehicles/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from fleetbook.models.trip import TripStatus
from fleetbook.models.vehicle import Vehicle
from fleetbook.services._shared.base import BaseService, ServiceContext
from fleetbook.services._shared.clock import Clock, utc_now
from fleetbook.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    violates,
)
from fleetbook.services._shared.policies.common import is_owner_or_admin
from fleetbook.services.auth.dto import AuthenticatedIdentity
from fleetbook.services.vehicles.availability import AvailabilityCache
from fleetbook.services.vehicles.dto import OwnerInsightsOut, VehicleCreateIn, VehicleRemovalOut

log = logging.getLogger(__name__)

INSIGHTS_HISTORY_LIMIT = 10


class VehicleService(BaseService):
    """
    Owner-side vehicle management.

    Removing a vehicle changes the public listing, so the service holds the
    :class:`AvailabilityCache` and invalidates it once the removal has been
    committed.
    """

    def __init__(
        self,
        *,
        availability: AvailabilityCache,
        clock: Clock = utc_now,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.availability = availability
        self.clock = clock

    def create_vehicle(self, owner: AuthenticatedIdentity, dto: VehicleCreateIn) -> Vehicle:
        """
        List a new vehicle for ``owner``.

        A new vehicle has no drivers yet, so the public listing is unaffected.

        :raises ConflictError: The license plate is already registered.
        """
        with self.rw_uow() as uow:
            if uow.vehicles.plate_in_use(dto.license_plate):
                raise ConflictError("Vehicle", "license plate already registered")
            try:
                vehicle = uow.vehicles.add(
                    Vehicle(
                        owner_id=owner.id,
                        make=dto.make.strip(),
                        model=dto.model.strip(),
                        year=dto.year,
                        license_plate=dto.license_plate,
                    )
                )
            except IntegrityError as exc:
                if violates(exc, "uq_vehicles_license_plate") or violates(
                    exc, "vehicles.license_plate"
                ):
                    raise ConflictError("Vehicle", "license plate already registered") from exc
                raise

        log.info("vehicles.created", extra={"vehicle_id": vehicle.id, "user_id": owner.id})
        return vehicle

    def list_my_vehicles(self, owner: AuthenticatedIdentity) -> list[Vehicle]:
        with self.ro_uow() as uow:
            return uow.vehicles.list_by_owner(owner.id)

    def soft_delete_vehicle(
        self, actor: AuthenticatedIdentity, vehicle_id: int
    ) -> VehicleRemovalOut:
        """
        Soft-delete a vehicle and cancel its upcoming trips.

        Allowed for the vehicle's owner and for admins. The public listing is
        invalidated after the commit; an invalidation failure is reported in
        the result, not raised.

        :param actor: Caller.
        :param vehicle_id: Vehicle to remove.
        :returns: Removal summary.
        :raises NotFoundError: Unknown or already deleted vehicle.
        :raises AuthorizationError: Caller is neither owner nor admin.
        """
        with self.rw_uow() as uow:
            vehicle = uow.vehicles.get_active(vehicle_id)
            if vehicle is None:
                raise NotFoundError("Vehicle", vehicle_id)
            if not is_owner_or_admin(
                actor_id=actor.id, actor_role=actor.role, owner_id=vehicle.owner_id
            ):
                raise AuthorizationError("Not authorized to delete this vehicle")
            vehicle.mark_deleted()
            uow.vehicles.flush()
            cancelled = uow.trips.cancel_upcoming_for_vehicle(vehicle.id, now=self.clock())

        log.info(
            "vehicles.deleted",
            extra={"vehicle_id": vehicle_id, "user_id": actor.id, "cancelled_trips": cancelled},
        )
        cache = self.availability.invalidate()
        return VehicleRemovalOut(vehicle_id=vehicle_id, cancelled_trips=cancelled, cache=cache)

    def owner_insights(self, actor: AuthenticatedIdentity) -> OwnerInsightsOut:
        """
        Revenue and activity over the caller's fleet.

        Revenue and bookings count completed trips only. Admins get their own
        (usually empty) fleet; platform totals live in the admin analytics.
        """
        owner_id = actor.id
        with self.ro_uow() as uow:
            trips = uow.trips
            return OwnerInsightsOut(
                total_revenue=trips.completed_revenue(owner_id=owner_id),
                total_bookings=trips.count_for_owner(owner_id, status=TripStatus.COMPLETED),
                total_cancellations=trips.count_for_owner(owner_id, status=TripStatus.CANCELLED),
                trip_history=trips.list_for_owner(owner_id, limit=INSIGHTS_HISTORY_LIMIT),
            )


__all__ = ["VehicleService"]
