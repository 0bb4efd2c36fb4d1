# tests/unit/services/test_policies.py
from __future__ import annotations

import pytest

from fleetbook.models.user import Role
from fleetbook.services._shared.policies.common import is_authorized, is_owner, is_owner_or_admin


@pytest.mark.parametrize(
    ("role", "required", "expected"),
    [
        (Role.OWNER, [Role.OWNER], True),
        (Role.ADMIN, [Role.OWNER, Role.ADMIN], True),
        (Role.DRIVER, [Role.OWNER], False),
        ("customer", ["customer"], True),
        ("superuser", [Role.ADMIN], False),
        (Role.ADMIN, [], False),
    ],
)
def test_is_authorized(role, required, expected):
    assert is_authorized(role, required) is expected


def test_is_owner_compares_ids_loosely():
    assert is_owner(actor_id=3, owner_id="3")
    assert not is_owner(actor_id=None, owner_id=3)


def test_admin_counts_as_owner():
    assert is_owner_or_admin(actor_id=1, actor_role=Role.ADMIN, owner_id=2)
    assert not is_owner_or_admin(actor_id=1, actor_role=Role.OWNER, owner_id=2)
