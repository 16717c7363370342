"""Pytest fixtures for the auth service.

The application is built once per test session from :class:`TestingConfig`.
Each test that touches the database gets a fresh in-memory SQLite schema
(``create_all``/``drop_all``), so committed rows never leak between cases.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any

import pytest

from blog_auth.core.config import TestingConfig
from blog_auth.core.extensions import db as _db
from blog_auth.factory import create_app
from blog_auth.infra.security import WerkzeugHasher
from blog_auth.services._shared.ports import (
    InMemorySessionStore,
    InMemoryUserDirectory,
)
from tests.helpers.auth import TEST_HASH_METHOD, make_identity


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    application = create_app(TestingConfig, instance_relative_config=False)
    application.logger.setLevel("WARNING")
    return application


@pytest.fixture()
def db(app):
    """Create the schema for one test inside an application context.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    with app.app_context():
        _db.create_all()
        try:
            yield _db
        finally:
            _db.session.remove()
            _db.drop_all()


@pytest.fixture()
def session(db):
    """Return the Flask-scoped session and wire Factory Boy to it."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(db.session)
    yield db.session
    SQLAlchemySession.set(None)


@pytest.fixture()
def client(app, session):
    """Return a Flask test client backed by a fresh schema."""
    return app.test_client()


@pytest.fixture()
def auth_service(app):
    """The :class:`AuthService` wired by the factory."""
    return app.extensions["auth_service"]


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- In-memory doubles ---------------------------------------------------------


@pytest.fixture()
def hasher() -> WerkzeugHasher:
    """Cheap hasher for unit tests."""
    return WerkzeugHasher(TEST_HASH_METHOD)


@pytest.fixture()
def memory_sessions() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture()
def directory(hasher) -> InMemoryUserDirectory:
    """Directory holding one active ``admin`` user (password ``admin123``)."""
    return InMemoryUserDirectory(
        [make_identity(hasher, username="admin", password="admin123", role="admin")]
    )


@pytest.fixture()
def freeze_time() -> Callable[[str | None], Any]:
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2024-01-01"):
    ...         ...
    """

    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None) -> Any:
        return _freeze_time(target or "2024-01-01")

    return _factory
