# tests/api/test_admin_api.py
from __future__ import annotations

import pytest

from fleetbook.models.trip import TripStatus
from tests.factories.trip import TripFactory
from tests.factories.user import AdminFactory, CustomerFactory, OwnerFactory
from tests.factories.vehicle import VehicleFactory
from tests.helpers.utils import bearer_for

BASE = "/api/v1/admin"


@pytest.fixture()
def admin_headers(app):
    return bearer_for(app, AdminFactory())


@pytest.mark.parametrize("path", ["/analytics", "/users", "/vehicles", "/trips"])
def test_non_admins_are_forbidden(client, app, path):
    response = client.get(f"{BASE}{path}", headers=bearer_for(app, OwnerFactory()))
    assert response.status_code == 403


def test_anonymous_is_unauthorized(client):
    assert client.get(f"{BASE}/analytics").status_code == 401


def test_analytics_counts_and_revenue(client, admin_headers):
    TripFactory(status=TripStatus.COMPLETED, total_amount=40.0)
    TripFactory(status=TripStatus.PENDING, total_amount=60.0)

    body = client.get(f"{BASE}/analytics", headers=admin_headers).get_json()

    assert body["totalTrips"] == 2
    assert body["totalVehicles"] == 2
    assert body["totalRevenue"] == 40.0
    # admin + two customers, two drivers, two owners
    assert body["totalUsers"] == 7


def test_soft_deleted_user_loses_access(client, app, admin_headers):
    user = CustomerFactory()
    user_headers = bearer_for(app, user)

    response = client.delete(f"{BASE}/users/{user.id}", headers=admin_headers)

    assert response.get_json() == {"message": "User successfully soft-deleted"}
    denied = client.get("/api/v1/auth/me", headers=user_headers)
    assert denied.status_code == 401
    assert denied.get_json()["message"] == "User not found or deleted"
    again = client.delete(f"{BASE}/users/{user.id}", headers=admin_headers)
    assert again.status_code == 404


def test_users_listing_exposes_flags_not_passwords(client, admin_headers):
    CustomerFactory()
    users = client.get(f"{BASE}/users", headers=admin_headers).get_json()
    assert all("password" not in u and "isDeleted" in u for u in users)


def test_vehicle_listing_includes_deleted(client, admin_headers):
    VehicleFactory(is_deleted=True)
    VehicleFactory()

    vehicles = client.get(f"{BASE}/vehicles", headers=admin_headers).get_json()

    assert sorted(v["isDeleted"] for v in vehicles) == [False, True]
    assert all(set(v["owner"]) == {"_id", "name"} for v in vehicles)


def test_admin_removes_any_vehicle(client, admin_headers):
    vehicle = VehicleFactory()
    response = client.delete(f"{BASE}/vehicles/{vehicle.id}", headers=admin_headers)
    assert response.get_json() == {"message": "Vehicle removed and future trips cancelled"}


def test_trip_soft_delete(client, admin_headers):
    trip = TripFactory()

    response = client.delete(f"{BASE}/trips/{trip.id}", headers=admin_headers)

    assert response.get_json() == {"message": "Trip successfully soft-deleted"}
    trips = client.get(f"{BASE}/trips", headers=admin_headers).get_json()
    assert [t["isDeleted"] for t in trips] == [True]
    assert client.delete(f"{BASE}/trips/{trip.id}", headers=admin_headers).status_code == 404
