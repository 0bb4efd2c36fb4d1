"""Pytest fixtures building an isolated app and database per test.

Each test gets a fresh application on an in-memory SQLite database and its
own fakeredis server, so the revocation registry, the listing cache and the
logging notifier start empty as well. The stores are the production Redis
adapters; only the server is fake.
"""

from __future__ import annotations

import os

import fakeredis
import pytest
from sqlalchemy.orm import scoped_session

from fleetbook.core.config import TestingConfig
from fleetbook.core.extensions import db as _db
from fleetbook.core.extensions import INFRA_KEY, get_infrastructure
from fleetbook.factory import create_app
from fleetbook.infra import build_infrastructure


@pytest.fixture()
def app():
    """Create a Flask application configured for testing.

    Yields
    ------
    flask.Flask
        Application with :class:`TestingConfig` applied, inside an app
        context with all tables created.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    os.environ.pop("REDIS_URL", None)
    app = create_app(TestingConfig)
    app.extensions[INFRA_KEY] = build_infrastructure(
        app.config, redis_client=fakeredis.FakeRedis(server=fakeredis.FakeServer())
    )
    app.logger.setLevel("WARNING")
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def db(app):
    """Database extension bound to the testing application."""
    return _db


@pytest.fixture()
def session(db) -> scoped_session:
    """Session used by the code under test within the test's app context."""
    return db.session


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def infra(app):
    """Infrastructure bundle of the test app (fakeredis stores, logging notifier)."""
    return get_infrastructure(app)


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to the app session ----------------------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper when the test uses the database."""
    from tests.factories import SQLAlchemySession

    if "app" not in request.fixturenames:
        yield
        return
    SQLAlchemySession.set(request.getfixturevalue("session"))
    yield
    SQLAlchemySession.set(None)
