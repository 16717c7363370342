"""Tests for the component wiring performed by the app factory."""

from __future__ import annotations

import fakeredis
import pytest

from blog_auth.core.config import TestingConfig
from blog_auth.factory import create_app
from blog_auth.infra.redis import RedisSessionStore
from blog_auth.infra.sqlalchemy import SQLAlchemySessionStore
from blog_auth.infra.wiring import build_session_store
from blog_auth.services._shared.errors import ConfigurationError
from blog_auth.services.auth import AuthService


def _config(**overrides):
    return type("Cfg", (TestingConfig,), overrides)


def test_factory_stores_one_auth_service(app) -> None:
    service = app.extensions["auth_service"]

    assert isinstance(service, AuthService)
    assert isinstance(service.sessions, SQLAlchemySessionStore)
    assert app.config["JWT_SECRET_KEY"] == TestingConfig.JWT_ACCESS_SECRET


@pytest.mark.parametrize(
    "overrides",
    [
        {"JWT_ACCESS_SECRET": None},
        {"JWT_REFRESH_SECRET": ""},
        {"JWT_REFRESH_SECRET": TestingConfig.JWT_ACCESS_SECRET},
        {"JWT_ACCESS_EXPIRES": "fifteen minutes"},
        {"SESSION_STORE_BACKEND": "memcached"},
        {"SESSION_STORE_BACKEND": "redis", "REDIS_URL": None},
    ],
)
def test_misconfiguration_aborts_startup(overrides) -> None:
    with pytest.raises(ConfigurationError):
        create_app(_config(**overrides), instance_relative_config=False)


def test_redis_backend_uses_the_shared_client(app) -> None:
    app.config["SESSION_STORE_BACKEND"] = "redis"
    app.config["REDIS_URL"] = "redis://localhost:6379/0"
    app.extensions["redis_client"] = fakeredis.FakeRedis()
    try:
        store = build_session_store(app)
    finally:
        app.config["SESSION_STORE_BACKEND"] = "sqlalchemy"
        app.config["REDIS_URL"] = None
        app.extensions.pop("redis_client", None)

    assert isinstance(store, RedisSessionStore)
