"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from fleetbook.models.trip import Trip, TripStatus
from fleetbook.models.user import Role, User
from fleetbook.models.vehicle import Vehicle

LOGGER = logging.getLogger(__name__)

USER_FIXTURES: list[dict[str, Any]] = [
    {"name": "Olivia Owner", "email": "olivia.owner@example.com", "role": Role.OWNER},
    {"name": "Omar Owner", "email": "omar.owner@example.com", "role": Role.OWNER},
    {"name": "Dana Driver", "email": "dana.driver@example.com", "role": Role.DRIVER},
    {"name": "Diego Driver", "email": "diego.driver@example.com", "role": Role.DRIVER},
    {"name": "Cara Customer", "email": "cara.customer@example.com", "role": Role.CUSTOMER},
    {"name": "Carl Customer", "email": "carl.customer@example.com", "role": Role.CUSTOMER},
]

SEED_PASSWORD = "fleetPass123"

VEHICLE_FIXTURES: list[dict[str, Any]] = [
    {
        "owner": "olivia.owner@example.com",
        "make": "Toyota",
        "model": "Corolla",
        "year": 2021,
        "license_plate": "FLT-1001",
        "drivers": ["dana.driver@example.com"],
    },
    {
        "owner": "olivia.owner@example.com",
        "make": "Honda",
        "model": "Civic",
        "year": 2020,
        "license_plate": "FLT-1002",
        "drivers": ["dana.driver@example.com", "diego.driver@example.com"],
    },
    {
        "owner": "omar.owner@example.com",
        "make": "Ford",
        "model": "Transit",
        "year": 2019,
        "license_plate": "FLT-2001",
        "drivers": [],
    },
]

TRIP_FIXTURES: list[dict[str, Any]] = [
    {
        "customer": "cara.customer@example.com",
        "plate": "FLT-1001",
        "driver": "dana.driver@example.com",
        "days_from_now": -7,
        "hours": 3,
        "amount": 120.0,
        "status": TripStatus.COMPLETED,
    },
    {
        "customer": "carl.customer@example.com",
        "plate": "FLT-1002",
        "driver": "diego.driver@example.com",
        "days_from_now": 2,
        "hours": 5,
        "amount": 210.0,
        "status": TripStatus.PENDING,
    },
]


def _bump(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    counters = summary.setdefault(table, {"created": 0, "existing": 0})
    counters["created" if created else "existing"] += 1


def _seed_users(session: Session, summary: dict[str, dict[str, int]]) -> dict[str, User]:
    users: dict[str, User] = {}
    for fixture in USER_FIXTURES:
        user = session.execute(
            select(User).where(User.email == fixture["email"])
        ).scalar_one_or_none()
        created = user is None
        if user is None:
            user = User(
                name=fixture["name"],
                email=fixture["email"],
                role=fixture["role"],
                password=SEED_PASSWORD,
            )
            session.add(user)
        users[user.email] = user
        _bump(summary, "users", created)
    session.flush()
    return users


def _seed_vehicles(
    session: Session, users: dict[str, User], summary: dict[str, dict[str, int]]
) -> dict[str, Vehicle]:
    vehicles: dict[str, Vehicle] = {}
    for fixture in VEHICLE_FIXTURES:
        vehicle = session.execute(
            select(Vehicle).where(Vehicle.license_plate == fixture["license_plate"])
        ).scalar_one_or_none()
        created = vehicle is None
        if vehicle is None:
            vehicle = Vehicle(
                owner_id=users[fixture["owner"]].id,
                make=fixture["make"],
                model=fixture["model"],
                year=fixture["year"],
                license_plate=fixture["license_plate"],
            )
            vehicle.drivers = [users[email] for email in fixture["drivers"]]
            session.add(vehicle)
        vehicles[vehicle.license_plate] = vehicle
        _bump(summary, "vehicles", created)
    session.flush()
    return vehicles


def _seed_trips(
    session: Session,
    users: dict[str, User],
    vehicles: dict[str, Vehicle],
    summary: dict[str, dict[str, int]],
) -> None:
    today = datetime.now(UTC).replace(hour=9, minute=0, second=0, microsecond=0)
    for fixture in TRIP_FIXTURES:
        customer = users[fixture["customer"]]
        vehicle = vehicles[fixture["plate"]]
        existing = session.execute(
            select(Trip.id).where(Trip.customer_id == customer.id, Trip.vehicle_id == vehicle.id)
        ).first()
        if existing is None:
            start = today + timedelta(days=fixture["days_from_now"])
            session.add(
                Trip(
                    customer_id=customer.id,
                    vehicle_id=vehicle.id,
                    driver_id=users[fixture["driver"]].id,
                    start_time=start,
                    end_time=start + timedelta(hours=fixture["hours"]),
                    total_amount=fixture["amount"],
                    status=fixture["status"],
                )
            )
        _bump(summary, "trips", existing is None)
    session.flush()


def run_all(db: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Seed users, vehicles and trips; safe to run repeatedly.

    :param db: Bound Flask-SQLAlchemy extension.
    :param verbose: Log every table summary at info level.
    :returns: ``{table: {"created": n, "existing": m}}``.
    """
    session = db.session
    summary: dict[str, dict[str, int]] = {}
    users = _seed_users(session, summary)
    vehicles = _seed_vehicles(session, users, summary)
    _seed_trips(session, users, vehicles, summary)
    session.commit()
    if verbose:
        for table, counters in summary.items():
            LOGGER.info(
                "seed.%s created=%d existing=%d", table, counters["created"], counters["existing"]
            )
    return summary
