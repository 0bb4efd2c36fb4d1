"""Tests for the ``flask seed`` and ``flask admin`` commands."""

from __future__ import annotations

from sqlalchemy import func, select

from fleetbook.models.user import Role, User
from fleetbook.models.vehicle import Vehicle


def test_seed_run_is_idempotent(app, session, infra):
    runner = app.test_cli_runner()
    infra.cache.set(infra.cache_key, "[]", ttl_seconds=300)

    first = runner.invoke(args=["seed", "run"])
    second = runner.invoke(args=["seed", "run"])

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    assert "users: 0 created" in second.output
    users = session.scalar(select(func.count()).select_from(User))
    vehicles = session.scalar(select(func.count()).select_from(Vehicle))
    assert users and vehicles
    assert infra.cache.get(infra.cache_key) is None


def test_admin_create(app, session):
    runner = app.test_cli_runner()

    result = runner.invoke(
        args=["admin", "create", "--name", "Root", "--email", "Root@Example.com"],
        input="s3cret!\ns3cret!\n",
    )

    assert result.exit_code == 0, result.output
    admin = session.scalar(select(User).where(User.email == "root@example.com"))
    assert admin.role is Role.ADMIN
    assert admin.verify_password("s3cret!")


def test_admin_create_refuses_existing_email(app):
    runner = app.test_cli_runner()
    args = ["admin", "create", "--name", "A", "--email", "a@example.com", "--password", "pw1234"]

    assert runner.invoke(args=args).exit_code == 0
    duplicate = runner.invoke(args=args)

    assert duplicate.exit_code != 0
    assert "already exists" in duplicate.output
