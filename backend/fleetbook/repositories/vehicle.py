"""Vehicle repository, including the public availability query."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from fleetbook.models.vehicle import Vehicle, VehicleStatus, vehicle_drivers
from fleetbook.repositories.base import BaseRepository


class VehicleRepository(BaseRepository[Vehicle]):
    """Persistence-only repository for :class:`Vehicle`."""

    model = Vehicle

    def _sortable_fields(self):
        return {
            "id": Vehicle.id,
            "make": Vehicle.make,
            "year": Vehicle.year,
            "created_at": Vehicle.created_at,
        }

    def _filterable_fields(self):
        return {
            "owner_id": Vehicle.owner_id,
            "status": Vehicle.status,
            "license_plate": Vehicle.license_plate,
        }

    def _default_eagerload(self, stmt):
        return stmt.options(selectinload(Vehicle.owner), selectinload(Vehicle.drivers))

    def list_public(self) -> list[Vehicle]:
        """Vehicles that are not deleted, ``available`` and have at least one driver.

        :returns: Public vehicles ordered by id.
        :rtype: list[Vehicle]
        """
        has_driver = (
            select(vehicle_drivers.c.vehicle_id)
            .where(vehicle_drivers.c.vehicle_id == Vehicle.id)
            .exists()
        )
        stmt = (
            select(Vehicle)
            .where(
                Vehicle.is_deleted.is_(False),
                Vehicle.status == VehicleStatus.AVAILABLE,
                has_driver,
            )
            .order_by(Vehicle.id.asc())
        )
        stmt = self._default_eagerload(stmt)
        return list(self.session.execute(stmt).scalars().all())

    def list_by_owner(self, owner_id: int) -> list[Vehicle]:
        return self.list(filters={"owner_id": owner_id}, sort=["-created_at"])

    def list_unregistered_for_driver(self, driver_id: int) -> list[Vehicle]:
        """Non-deleted vehicles the driver is not registered on yet."""
        registered = select(vehicle_drivers.c.vehicle_id).where(
            vehicle_drivers.c.driver_id == driver_id
        )
        stmt = (
            select(Vehicle)
            .where(Vehicle.is_deleted.is_(False), Vehicle.id.not_in(registered))
            .order_by(Vehicle.id.asc())
        )
        stmt = self._default_eagerload(stmt)
        return list(self.session.execute(stmt).scalars().all())

    def plate_in_use(self, license_plate: str) -> bool:
        return self.exists(license_plate=license_plate.strip().upper())
