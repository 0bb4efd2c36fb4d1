from __future__ import annotations

from collections.abc import Iterable

from fleetbook.models.user import Role


def is_owner(*, actor_id, owner_id) -> bool:
    """Return True if the actor owns the resource."""
    return actor_id is not None and str(actor_id) == str(owner_id)


def is_authorized(role: Role | str, required_roles: Iterable[Role | str]) -> bool:
    """Return True when ``role`` is one of ``required_roles``.

    Unknown role strings never match.
    """
    try:
        actual = Role(role)
    except ValueError:
        return False
    return any(actual is Role(r) for r in required_roles)


def is_owner_or_admin(*, actor_id, actor_role: Role | str, owner_id) -> bool:
    return is_authorized(actor_role, [Role.ADMIN]) or is_owner(actor_id=actor_id, owner_id=owner_id)
