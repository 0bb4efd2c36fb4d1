# tests/unit/services/test_availability_cache.py
from __future__ import annotations

import json

import pytest

from fleetbook.models.vehicle import VehicleStatus
from fleetbook.services._shared.errors import DependencyError
from fleetbook.services._shared.ports import InMemoryCacheStore
from fleetbook.services.vehicles import AvailabilityCache
from tests.factories.user import DriverFactory
from tests.factories.vehicle import VehicleFactory

KEY = "public:vehicles"


class DownCache(InMemoryCacheStore):
    def get(self, key):
        raise DependencyError("redis")

    def set(self, key, value, *, ttl_seconds):
        raise DependencyError("redis")

    def delete(self, key):
        raise DependencyError("redis")


@pytest.fixture()
def cache() -> InMemoryCacheStore:
    return InMemoryCacheStore()


@pytest.fixture()
def availability(app, cache) -> AvailabilityCache:
    return AvailabilityCache(cache=cache, key=KEY, ttl_seconds=300)


def test_miss_loads_projection_and_stores_it(availability, cache):
    driver = DriverFactory()
    vehicle = VehicleFactory(make="Honda", model="Civic", year=2020, drivers=[driver])

    listing = availability.get_public_vehicles()

    assert listing == [
        {
            "_id": vehicle.id,
            "make": "Honda",
            "model": "Civic",
            "year": 2020,
            "owner": {"_id": vehicle.owner.id, "name": vehicle.owner.name},
            "drivers": [driver.id],
        }
    ]
    assert json.loads(cache.get(KEY)) == listing


def test_hit_is_served_without_reading_the_database(availability, cache):
    cache.set(KEY, json.dumps([{"_id": 99, "make": "Cached"}]), ttl_seconds=300)
    assert availability.get_public_vehicles() == [{"_id": 99, "make": "Cached"}]


def test_only_available_undeleted_vehicles_with_drivers_are_public(availability):
    driver = DriverFactory()
    public = VehicleFactory(drivers=[driver])
    VehicleFactory()  # no drivers
    VehicleFactory(drivers=[driver], status=VehicleStatus.MAINTENANCE)
    VehicleFactory(drivers=[driver], is_deleted=True)

    assert [v["_id"] for v in availability.get_public_vehicles()] == [public.id]


def test_invalidate_forces_a_reload(availability, cache, session):
    driver = DriverFactory()
    vehicle = VehicleFactory(drivers=[driver])
    assert len(availability.get_public_vehicles()) == 1

    vehicle.is_deleted = True
    session.commit()
    # still served from cache until invalidated
    assert len(availability.get_public_vehicles()) == 1

    assert availability.invalidate().ok
    assert cache.get(KEY) is None
    assert availability.get_public_vehicles() == []


def test_corrupt_entry_is_treated_as_a_miss(availability, cache):
    cache.set(KEY, "{not json", ttl_seconds=300)
    assert availability.get_public_vehicles() == []
    assert cache.get(KEY) == "[]"


def test_cache_outage_degrades_to_database(app):
    driver = DriverFactory()
    VehicleFactory(drivers=[driver])
    availability = AvailabilityCache(cache=DownCache(), key=KEY)

    assert len(availability.get_public_vehicles()) == 1
    outcome = availability.invalidate()
    assert not outcome.ok
    assert "redis" in outcome.reason
