"""Pytest fixtures building an isolated application per test.

Each test gets a fresh app bound to an in-memory SQLite database and a
``fakeredis`` revocation store, so neither rows nor markers leak between
cases.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from typing import Any

import fakeredis
import pytest
from flask import Flask

from sessionauth.core.config import TestingConfig
from sessionauth.core.extensions import db as _db
from sessionauth.factory import create_app


@pytest.fixture()
def redis_client() -> fakeredis.FakeRedis:
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


@pytest.fixture()
def make_app(redis_client) -> Callable[..., Flask]:
    """Return a builder creating apps from :class:`TestingConfig` or a subclass."""

    def _build(config: type[TestingConfig] = TestingConfig, **overrides: Any) -> Flask:
        # Ensure env-based config does not leak into tests
        os.environ.pop("DATABASE_URL", None)
        application = create_app(config, redis_client=overrides.pop("redis_client", redis_client))
        application.config.update(overrides)
        application.logger.setLevel("WARNING")
        return application

    return _build


@pytest.fixture()
def app(make_app) -> Generator[Flask, None, None]:
    """Create a Flask application with tables created inside an app context."""
    application = make_app()
    with application.app_context():
        _db.create_all()
        yield application
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def db(app):
    """Database extension bound to the testing application."""
    return _db


@pytest.fixture()
def session(db):
    """Request-scoped SQLAlchemy session used by the app under test."""
    return db.session


@pytest.fixture()
def client(app: Flask):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture()
def service(app):
    """Session service wired by the factory (fakeredis + JWT + scrypt)."""
    from sessionauth.api.deps import SESSION_SERVICE_KEY

    return app.extensions[SESSION_SERVICE_KEY]


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture()
def credentials(faker) -> dict[str, str]:
    """A fresh, unregistered ``{email, password}`` payload."""
    return {"email": faker.unique.email(), "password": faker.password(length=12)}


@pytest.fixture()
def signed_in(client, credentials) -> str:
    """Register ``credentials``, sign in and return the session token."""
    assert client.post("/signup", json=credentials).status_code == 200
    resp = client.post("/signin", json=credentials)
    assert resp.status_code == 200
    return resp.get_json()["token"]


@pytest.fixture()
def freeze_time() -> Callable[[Any], Any]:
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2024-01-01"):
    ...         ...
    """

    from freezegun import freeze_time as _freeze_time

    def _factory(target: Any = None) -> Any:
        return _freeze_time(target or "2024-01-01")

    return _factory


# -- Hook up Factory Boy to the app's SQLAlchemy session ---------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper when a test uses the database."""
    from tests.factories import SQLAlchemySession

    if "app" in request.fixturenames:
        SQLAlchemySession.set(request.getfixturevalue("session"))
    yield
    SQLAlchemySession.set(None)
