"""``flask seed``: demo users, vehicles and trips for local work."""

from __future__ import annotations

import logging
import os

import click
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from fleetbook.core.config import ENV_VAR
from fleetbook.core.extensions import db, get_infrastructure
from fleetbook.seeds import seed_data
from fleetbook.services.vehicles import AvailabilityCache

log = logging.getLogger(__name__)


def _print_summary(summary: dict[str, dict[str, int]]) -> None:
    if not summary:
        click.echo("Nothing seeded.")
        return
    for table in sorted(summary):
        counters = summary[table]
        click.echo(
            f"{table}: {counters.get('created', 0)} created, "
            f"{counters.get('existing', 0)} already present"
        )


def _seed(verbose: bool) -> None:
    try:
        summary = seed_data.run_all(db, verbose=verbose)
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc

    # seeded vehicles come with drivers, so a cached public listing is stale
    infra = get_infrastructure()
    outcome = AvailabilityCache(
        cache=infra.cache, key=infra.cache_key, ttl_seconds=infra.cache_ttl
    ).invalidate()
    if not outcome.ok:
        click.echo(f"Warning: public listing cache not cleared ({outcome.reason})", err=True)
    _print_summary(summary)


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log every seeded row.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Seed the database with demo data."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    logging.getLogger(seed_data.__name__).setLevel(logging.DEBUG if verbose else logging.INFO)


@seed_cli.command("run")
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context) -> None:
    """Insert demo data; rows that already exist are left alone."""
    _seed(ctx.obj["verbose"])


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Drop and recreate every table, then seed."""
    if os.getenv(ENV_VAR, "development").strip().lower() == "production":
        raise click.UsageError("'flask seed fresh' is disabled in production.")
    if not yes:
        click.confirm("All fleet data will be dropped. Continue?", abort=True)
    log.info("seed.fresh.reset_schema")
    db.session.remove()
    db.drop_all()
    db.create_all()
    _seed(ctx.obj["verbose"])
