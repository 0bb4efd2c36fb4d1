# fleetbook/services/trips/service.py
from __future__ import annotations

import logging

from fleetbook.models.trip import CANCELLABLE_STATUSES, PROGRESS_STATUSES, Trip, TripStatus
from fleetbook.models.user import Role
from fleetbook.services._shared.base import BaseService, ServiceContext
from fleetbook.services._shared.clock import Clock, as_utc, utc_now
from fleetbook.services._shared.errors import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from fleetbook.services._shared.outcome import Outcome
from fleetbook.services._shared.ports import Notifier
from fleetbook.services.auth.dto import AuthenticatedIdentity
from fleetbook.services.trips.dto import TripBookIn, TripNotice

log = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M UTC"


class TripService(BaseService):
    """
    Booking lifecycle: book, accept, progress and cancel.

    Status moves ``pending`` → ``confirmed`` → ``ongoing`` → ``completed``;
    ``pending`` and ``confirmed`` trips may be cancelled. Customer emails go
    out after the transition commits and never fail the request.
    """

    def __init__(
        self,
        *,
        notifier: Notifier,
        clock: Clock = utc_now,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.notifier = notifier
        self.clock = clock

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def book(self, customer: AuthenticatedIdentity, dto: TripBookIn) -> Trip:
        """
        Create a ``pending`` trip for ``customer``.

        :raises ValidationError: ``end_time`` is not after ``start_time``.
        :raises NotFoundError: Vehicle missing or deleted; driver missing,
            deleted or not a driver.
        """
        start, end = as_utc(dto.start_time), as_utc(dto.end_time)
        if end <= start:
            raise ValidationError("End time must be after start time")

        with self.rw_uow() as uow:
            if uow.vehicles.get_active(dto.vehicle_id) is None:
                raise NotFoundError("Vehicle", dto.vehicle_id)
            if uow.users.get_active_driver(dto.driver_id) is None:
                raise NotFoundError("Driver", dto.driver_id)
            trip = uow.trips.add(
                Trip(
                    customer_id=customer.id,
                    vehicle_id=dto.vehicle_id,
                    driver_id=dto.driver_id,
                    start_time=start,
                    end_time=end,
                    total_amount=dto.total_amount,
                    status=TripStatus.PENDING,
                )
            )

        log.info("trips.booked", extra={"trip_id": trip.id, "user_id": customer.id})
        return trip

    def update_status(self, actor: AuthenticatedIdentity, trip_id: int, status: str) -> Trip:
        """
        Move a trip to ``ongoing`` or ``completed``.

        Only the assigned driver or an admin may do this.

        :raises ValidationError: Any other target status.
        :raises NotFoundError: Unknown or deleted trip.
        :raises AuthorizationError: Caller is neither the driver nor an admin.
        """
        try:
            target = TripStatus(status)
        except ValueError:
            target = None
        if target not in PROGRESS_STATUSES:
            raise ValidationError("Invalid status provided for this action")

        with self.rw_uow() as uow:
            trip = self._get_trip(uow, trip_id)
            if trip.driver_id != actor.id and actor.role is not Role.ADMIN:
                raise AuthorizationError("Not authorized to update this trip")
            trip.status = target

        log.info("trips.status_changed", extra={"trip_id": trip_id, "status": target.value})
        return trip

    def accept(self, driver: AuthenticatedIdentity, trip_id: int) -> Trip:
        """
        Confirm a ``pending`` trip as its assigned driver and notify the customer.

        :raises NotFoundError: Unknown or deleted trip.
        :raises AuthorizationError: Caller is not the trip's driver.
        :raises ValidationError: Trip is not pending.
        """
        with self.rw_uow() as uow:
            trip = self._get_trip(uow, trip_id)
            if trip.driver_id != driver.id:
                raise AuthorizationError("Not authorized to accept this trip")
            if trip.status is not TripStatus.PENDING:
                raise ValidationError("Trip is not in a pending state")
            trip.status = TripStatus.CONFIRMED
            notice = TripNotice(
                to=trip.customer.email,
                subject="Your Trip has been Confirmed!",
                body=(
                    f"Your booking for the {trip.vehicle.make} {trip.vehicle.model} "
                    f"starting at {as_utc(trip.start_time):{TIME_FORMAT}} "
                    "has been confirmed by the driver."
                ),
            )

        log.info("trips.accepted", extra={"trip_id": trip_id, "user_id": driver.id})
        self._notify(notice, trip_id=trip_id)
        return trip

    def cancel(self, actor: AuthenticatedIdentity, trip_id: int) -> Trip:
        """
        Cancel a ``pending`` or ``confirmed`` trip as its customer or driver.

        :raises NotFoundError: Unknown or deleted trip.
        :raises AuthorizationError: Caller is neither customer nor driver.
        :raises ValidationError: Trip already ongoing, completed or cancelled.
        """
        with self.rw_uow() as uow:
            trip = self._get_trip(uow, trip_id)
            if actor.id not in (trip.customer_id, trip.driver_id):
                raise AuthorizationError("Not authorized to cancel this trip")
            if trip.status not in CANCELLABLE_STATUSES:
                raise ValidationError(f"Cannot cancel a trip that is {trip.status.value}")
            trip.status = TripStatus.CANCELLED
            notice = TripNotice(
                to=trip.customer.email,
                subject="Your Trip has been Cancelled",
                body=(
                    "Your booking for a trip starting at "
                    f"{as_utc(trip.start_time):{TIME_FORMAT}} has been cancelled."
                ),
            )

        log.info("trips.cancelled", extra={"trip_id": trip_id, "user_id": actor.id})
        self._notify(notice, trip_id=trip_id)
        return trip

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def my_history(self, customer: AuthenticatedIdentity) -> list[Trip]:
        with self.ro_uow() as uow:
            return uow.trips.list_for_customer(customer.id)

    def assigned(self, driver: AuthenticatedIdentity) -> list[Trip]:
        with self.ro_uow() as uow:
            return uow.trips.list_for_driver(driver.id)

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    @staticmethod
    def _get_trip(uow, trip_id: int) -> Trip:
        trip = uow.trips.get_active(trip_id)
        if trip is None:
            raise NotFoundError("Trip", trip_id)
        return trip

    def _notify(self, notice: TripNotice, *, trip_id: int) -> Outcome:
        outcome = self.notifier.send(to=notice.to, subject=notice.subject, body=notice.body)
        return self.log_outcome("trips.notify", outcome, trip_id=trip_id)
