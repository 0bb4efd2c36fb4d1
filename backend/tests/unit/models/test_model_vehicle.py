# tests/unit/models/test_model_vehicle.py
from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from fleetbook.models.vehicle import Vehicle
from tests.factories.user import DriverFactory
from tests.factories.vehicle import VehicleFactory


def test_plate_is_normalized():
    assert Vehicle(make="A", model="B", year=2000, license_plate=" xy-9 ").license_plate == "XY-9"


def test_blank_plate_is_rejected():
    with pytest.raises(ValueError):
        Vehicle(make="A", model="B", year=2000, license_plate="  ")


def test_driver_helpers(app):
    d1, d2 = DriverFactory(), DriverFactory()
    vehicle = VehicleFactory(drivers=[d2, d1])
    assert vehicle.driver_ids == sorted([d1.id, d2.id])
    assert vehicle.has_driver(d1.id)


def test_plate_is_unique(app, session):
    VehicleFactory(license_plate="DUP-1")
    with pytest.raises(IntegrityError):
        VehicleFactory(license_plate="dup-1")
    session.rollback()
