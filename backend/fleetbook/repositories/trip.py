"""Trip repository with the aggregate queries used by insights and analytics."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select, update

from fleetbook.models.trip import Trip, TripStatus
from fleetbook.models.vehicle import Vehicle
from fleetbook.repositories.base import BaseRepository


class TripRepository(BaseRepository[Trip]):
    """Persistence-only repository for :class:`Trip`."""

    model = Trip

    def _sortable_fields(self):
        return {
            "id": Trip.id,
            "start_time": Trip.start_time,
            "created_at": Trip.created_at,
        }

    def _filterable_fields(self):
        return {
            "customer_id": Trip.customer_id,
            "driver_id": Trip.driver_id,
            "vehicle_id": Trip.vehicle_id,
            "status": Trip.status,
        }

    # ---------------------------- Listings ----------------------------

    def list_for_customer(self, customer_id: int) -> list[Trip]:
        return self.list(filters={"customer_id": customer_id}, sort=["-start_time"])

    def list_for_driver(self, driver_id: int) -> list[Trip]:
        return self.list(filters={"driver_id": driver_id}, sort=["-start_time"])

    def list_for_owner(self, owner_id: int, *, limit: int | None = None) -> list[Trip]:
        """Non-deleted trips on any vehicle of the owner, newest first."""
        stmt = (
            select(Trip)
            .join_from(Trip, Vehicle, Vehicle.id == Trip.vehicle_id)
            .where(Vehicle.owner_id == owner_id, Trip.is_deleted.is_(False))
            .order_by(Trip.created_at.desc(), Trip.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.execute(stmt).scalars().all())

    # ---------------------------- Bulk updates ----------------------------

    def cancel_upcoming_for_vehicle(self, vehicle_id: int, *, now: datetime) -> int:
        """Cancel every trip on the vehicle starting at or after ``now``.

        :returns: Number of trips cancelled.
        :rtype: int
        """
        stmt = (
            update(Trip)
            .where(
                Trip.vehicle_id == vehicle_id,
                Trip.start_time >= now,
                Trip.is_deleted.is_(False),
                Trip.status != TripStatus.CANCELLED,
            )
            .values(status=TripStatus.CANCELLED)
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)

    # ---------------------------- Aggregates ----------------------------

    def completed_revenue(self, *, owner_id: int | None = None) -> float:
        """Sum of ``total_amount`` over completed trips, optionally for one owner."""
        stmt = select(func.coalesce(func.sum(Trip.total_amount), 0)).where(
            Trip.status == TripStatus.COMPLETED, Trip.is_deleted.is_(False)
        )
        if owner_id is not None:
            stmt = stmt.join_from(Trip, Vehicle, Vehicle.id == Trip.vehicle_id).where(
                Vehicle.owner_id == owner_id
            )
        return float(self.session.execute(stmt).scalar_one() or 0)

    def count_for_owner(self, owner_id: int, *, status: TripStatus | None = None) -> int:
        stmt = (
            select(func.count(Trip.id))
            .join_from(Trip, Vehicle, Vehicle.id == Trip.vehicle_id)
            .where(Vehicle.owner_id == owner_id, Trip.is_deleted.is_(False))
        )
        if status is not None:
            stmt = stmt.where(Trip.status == status)
        return int(self.session.execute(stmt).scalar_one())
