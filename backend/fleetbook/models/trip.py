"""Trip booking model."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleetbook.core.extensions import db

from .base import PKMixin, ReprMixin, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User
    from .vehicle import Vehicle


class TripStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# States a driver/admin may set through the progress endpoint
PROGRESS_STATUSES = frozenset({TripStatus.ONGOING, TripStatus.COMPLETED})
# States from which a trip can still be cancelled
CANCELLABLE_STATUSES = frozenset({TripStatus.PENDING, TripStatus.CONFIRMED})

TripStatusType = Enum(
    TripStatus,
    name="trip_status",
    values_callable=lambda statuses: [s.value for s in statuses],
    validate_strings=True,
)


class Trip(PKMixin, TimestampMixin, SoftDeleteMixin, ReprMixin, db.Model):
    """
    A customer booking of a vehicle with a specific driver.

    Lifecycle: ``pending`` → ``confirmed`` (driver accepts) → ``ongoing`` →
    ``completed``; ``pending``/``confirmed`` may go to ``cancelled``.
    """

    __tablename__ = "trips"

    customer_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    vehicle_id: Mapped[int] = mapped_column(
        ForeignKey("vehicles.id", ondelete="RESTRICT"), nullable=False
    )
    driver_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[TripStatus] = mapped_column(
        TripStatusType, nullable=False, default=TripStatus.PENDING
    )
    total_amount: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)

    __table_args__ = (
        Index("ix_trips_customer_id", "customer_id"),
        Index("ix_trips_driver_id", "driver_id"),
        Index("ix_trips_vehicle_start", "vehicle_id", "start_time"),
    )

    customer: Mapped[User] = relationship("User", foreign_keys=[customer_id], lazy="selectin")
    driver: Mapped[User] = relationship("User", foreign_keys=[driver_id], lazy="selectin")
    vehicle: Mapped[Vehicle] = relationship("Vehicle", lazy="selectin")
