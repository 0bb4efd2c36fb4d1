"""Admin account management. Admins cannot self-register over HTTP."""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from fleetbook.core.extensions import db
from fleetbook.models.user import Role, User
from fleetbook.repositories.user import UserRepository


@click.group("admin")
def admin_cli() -> None:
    """Administrative account commands."""


@admin_cli.command("create")
@click.option("--name", required=True)
@click.option("--email", required=True)
@click.password_option()
@with_appcontext
def create_command(name: str, email: str, password: str) -> None:
    """Create an admin account."""
    repo = UserRepository()
    if repo.exists_by_email(email):
        raise click.ClickException(f"A user with email {email} already exists.")
    user = repo.add(User(name=name, email=email, password=password, role=Role.ADMIN))
    db.session.commit()
    click.echo(f"Created admin {user.email} (id={user.id})")
