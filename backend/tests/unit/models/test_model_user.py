# tests/unit/models/test_model_user.py
from __future__ import annotations

import pytest

from fleetbook.models.user import Role, User
from tests.factories.user import DriverFactory


def test_password_is_write_only_and_hashed():
    user = User(name="A", email="a@example.com", role=Role.CUSTOMER, password="pw123456")
    assert user.password_hash != "pw123456"
    assert user.verify_password("pw123456")
    with pytest.raises(AttributeError):
        _ = user.password


def test_role_cannot_change_once_set(app):
    driver = DriverFactory()  # committed, so attributes are expired
    driver.role = Role.DRIVER  # same value is fine
    with pytest.raises(ValueError, match="Role cannot be changed"):
        driver.role = Role.ADMIN


@pytest.mark.parametrize("email", ["", "no-at-sign", "a@nodot"])
def test_email_is_validated(email):
    with pytest.raises(ValueError):
        User(name="A", email=email, role=Role.CUSTOMER, password="pw")


def test_role_cannot_change_on_transient_user():
    user = User(name="A", email="a@example.com", role=Role.OWNER, password="pw")
    with pytest.raises(ValueError):
        user.role = "customer"
