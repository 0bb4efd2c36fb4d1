# fleetbook/services/trips/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class TripBookIn:
    """
    Input DTO for booking a trip.

    :param vehicle_id: Vehicle to book.
    :param driver_id: Requested driver.
    :param start_time: Trip start; naive values are taken as UTC.
    :param end_time: Trip end; must follow ``start_time``.
    :param total_amount: Agreed price.
    """

    vehicle_id: int
    driver_id: int
    start_time: datetime
    end_time: datetime
    total_amount: float


@dataclass(frozen=True, slots=True)
class TripNotice:
    """Email to the customer once a trip transition has been committed."""

    to: str
    subject: str
    body: str
