# tests/api/test_trips_api.py
from __future__ import annotations

from fleetbook.models.trip import TripStatus
from tests.factories.trip import TripFactory
from tests.factories.user import AdminFactory, CustomerFactory, DriverFactory
from tests.factories.vehicle import VehicleFactory
from tests.helpers.utils import bearer_for

BASE = "/api/v1/trips"


def _booking(vehicle, driver, **overrides):
    payload = {
        "vehicleId": vehicle.id,
        "driverId": driver.id,
        "startTime": "2030-05-01T09:00:00Z",
        "endTime": "2030-05-01T12:00:00Z",
        "totalAmount": 150,
    }
    payload.update(overrides)
    return payload


def test_book_creates_pending_trip(client, app):
    customer = CustomerFactory()
    driver = DriverFactory()
    vehicle = VehicleFactory(drivers=[driver])

    response = client.post(
        f"{BASE}/book", json=_booking(vehicle, driver), headers=bearer_for(app, customer)
    )

    assert response.status_code == 201
    body = response.get_json()
    assert body["status"] == "pending"
    assert body["customer"]["_id"] == customer.id
    assert body["driver"]["_id"] == driver.id
    assert body["vehicle"]["_id"] == vehicle.id
    assert body["totalAmount"] == 150.0


def test_book_rejects_inverted_window(client, app):
    driver = DriverFactory()
    vehicle = VehicleFactory()
    payload = _booking(vehicle, driver, endTime="2030-05-01T08:00:00Z")

    response = client.post(f"{BASE}/book", json=payload, headers=bearer_for(app, CustomerFactory()))

    assert response.status_code == 400
    assert response.get_json()["message"] == "End time must be after start time"


def test_book_is_customer_only(client, app):
    driver = DriverFactory()
    vehicle = VehicleFactory()
    response = client.post(
        f"{BASE}/book", json=_booking(vehicle, driver), headers=bearer_for(app, driver)
    )
    assert response.status_code == 403


def test_history_and_assigned_lists(client, app):
    trip = TripFactory()
    TripFactory()

    history = client.get(f"{BASE}/my-history", headers=bearer_for(app, trip.customer))
    assigned = client.get(f"{BASE}/assigned", headers=bearer_for(app, trip.driver))

    assert [t["_id"] for t in history.get_json()] == [trip.id]
    assert [t["_id"] for t in assigned.get_json()] == [trip.id]


def test_accept_confirms_and_sends_email(client, app, infra):
    trip = TripFactory()

    response = client.patch(f"{BASE}/{trip.id}/accept", headers=bearer_for(app, trip.driver))

    assert response.status_code == 200
    assert response.get_json()["status"] == "confirmed"
    sent = infra.notifier.sent
    assert [to for to, _, _ in sent] == [trip.customer.email]
    assert sent[0][1] == "Your Trip has been Confirmed!"


def test_accept_twice_fails(client, app):
    trip = TripFactory(status=TripStatus.CONFIRMED)
    response = client.patch(f"{BASE}/{trip.id}/accept", headers=bearer_for(app, trip.driver))
    assert response.status_code == 400
    assert response.get_json()["message"] == "Trip is not in a pending state"


def test_accept_by_another_driver_is_forbidden(client, app):
    trip = TripFactory()
    response = client.patch(f"{BASE}/{trip.id}/accept", headers=bearer_for(app, DriverFactory()))
    assert response.status_code == 403


def test_status_update_by_driver_and_admin(client, app):
    trip = TripFactory(status=TripStatus.CONFIRMED)

    ongoing = client.patch(
        f"{BASE}/{trip.id}/status", json={"status": "ongoing"}, headers=bearer_for(app, trip.driver)
    )
    done = client.patch(
        f"{BASE}/{trip.id}/status",
        json={"status": "completed"},
        headers=bearer_for(app, AdminFactory()),
    )

    assert ongoing.get_json()["status"] == "ongoing"
    assert done.get_json()["status"] == "completed"


def test_status_update_rejects_other_statuses(client, app):
    trip = TripFactory()
    response = client.patch(
        f"{BASE}/{trip.id}/status",
        json={"status": "cancelled"},
        headers=bearer_for(app, trip.driver),
    )
    assert response.status_code == 400
    assert response.get_json()["message"] == "Invalid status provided for this action"


def test_cancel_by_customer(client, app, infra):
    trip = TripFactory()

    response = client.patch(f"{BASE}/{trip.id}/cancel", headers=bearer_for(app, trip.customer))

    assert response.get_json() == {"message": "Trip successfully cancelled"}
    assert infra.notifier.sent[-1][1] == "Your Trip has been Cancelled"


def test_cancel_completed_trip_fails(client, app):
    trip = TripFactory(status=TripStatus.COMPLETED)
    response = client.patch(f"{BASE}/{trip.id}/cancel", headers=bearer_for(app, trip.customer))
    assert response.status_code == 400
    assert response.get_json()["message"] == "Cannot cancel a trip that is completed"


def test_cancel_by_stranger_is_forbidden(client, app):
    trip = TripFactory()
    response = client.patch(
        f"{BASE}/{trip.id}/cancel", headers=bearer_for(app, CustomerFactory())
    )
    assert response.status_code == 403
    assert response.get_json()["message"] == "Not authorized to cancel this trip"


def test_unknown_trip(client, app):
    response = client.patch(f"{BASE}/424242/accept", headers=bearer_for(app, DriverFactory()))
    assert response.status_code == 404
    assert response.get_json()["message"] == "Trip not found"
