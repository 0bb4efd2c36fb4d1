"""Vehicle model and the vehicle/driver association."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from sqlalchemy import (
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from fleetbook.core.extensions import db

from .base import PKMixin, ReprMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class VehicleStatus(str, enum.Enum):
    AVAILABLE = "available"
    BOOKED = "booked"
    MAINTENANCE = "maintenance"


VehicleStatusType = Enum(
    VehicleStatus,
    name="vehicle_status",
    values_callable=lambda statuses: [s.value for s in statuses],
    validate_strings=True,
)

# Drivers registered on a vehicle (set semantics through the composite PK)
vehicle_drivers = Table(
    "vehicle_drivers",
    db.metadata,
    Column("vehicle_id", ForeignKey("vehicles.id", ondelete="CASCADE"), primary_key=True),
    Column("driver_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Vehicle(PKMixin, TimestampMixin, SoftDeleteMixin, ReprMixin, db.Model):
    """
    A vehicle listed by an owner.

    A vehicle is *public* when it is not deleted, its status is
    ``available`` and at least one driver is registered on it.
    """

    __tablename__ = "vehicles"

    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    make: Mapped[str] = mapped_column(String(60), nullable=False)
    model: Mapped[str] = mapped_column(String(60), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    license_plate: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[VehicleStatus] = mapped_column(
        VehicleStatusType, nullable=False, default=VehicleStatus.AVAILABLE
    )

    __table_args__ = (
        UniqueConstraint("license_plate", name="uq_vehicles_license_plate"),
        Index("ix_vehicles_owner_id", "owner_id"),
        Index("ix_vehicles_status", "status"),
    )

    owner: Mapped[User] = relationship("User", back_populates="owned_vehicles", lazy="selectin")
    drivers: Mapped[list[User]] = relationship(
        "User", secondary=vehicle_drivers, lazy="selectin", order_by="User.id"
    )

    @property
    def driver_ids(self) -> list[int]:
        return [d.id for d in self.drivers]

    def has_driver(self, driver_id: int) -> bool:
        return any(d.id == driver_id for d in self.drivers)

    @validates("license_plate")
    def _normalize_plate(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("License plate is required.")
        return value.strip().upper()
