"""Build the auth component graph from application configuration."""

from __future__ import annotations

import logging

from flask import Flask

from blog_auth.core.extensions import get_redis
from blog_auth.infra.jwt import PyJWTTokenProvider
from blog_auth.infra.redis import RedisSessionStore
from blog_auth.infra.security import WerkzeugHasher
from blog_auth.infra.sqlalchemy import SQLAlchemySessionStore, SQLAlchemyUserDirectory
from blog_auth.services._shared.errors import ConfigurationError
from blog_auth.services._shared.ports import SessionStore
from blog_auth.services.auth import AuthService, AuthTokenConfig
from blog_auth.services.auth.tokens import TokenIssuer

log = logging.getLogger(__name__)

SESSION_BACKENDS = ("sqlalchemy", "redis")


def build_session_store(app: Flask) -> SessionStore:
    """
    Select the session store named by ``SESSION_STORE_BACKEND``.

    :raises ConfigurationError: unknown backend, or ``redis`` without ``REDIS_URL``.
    """
    backend = str(app.config.get("SESSION_STORE_BACKEND", "sqlalchemy")).strip().lower()
    if backend == "sqlalchemy":
        return SQLAlchemySessionStore()
    if backend == "redis":
        if not app.config.get("REDIS_URL"):
            raise ConfigurationError("SESSION_STORE_BACKEND=redis requires REDIS_URL")
        return RedisSessionStore(get_redis(app))
    raise ConfigurationError(
        f"Unknown SESSION_STORE_BACKEND {backend!r}; expected one of {SESSION_BACKENDS}"
    )


def build_auth_service(app: Flask, *, sessions: SessionStore | None = None) -> AuthService:
    """
    Wire issuer, stores and hashers into one :class:`AuthService`.

    :param app: Configured application.
    :param sessions: Override the configured session store (tests).
    :raises ConfigurationError: on missing/identical secrets or a bad backend.
    """
    try:
        cfg = AuthTokenConfig.from_mapping(app.config)
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc

    issuer = TokenIssuer(
        provider=PyJWTTokenProvider(algorithm=app.config.get("JWT_ALGORITHM", "HS256")),
        cfg=cfg,
    )
    store = sessions if sessions is not None else build_session_store(app)
    service = AuthService(
        issuer=issuer,
        users=SQLAlchemyUserDirectory(),
        sessions=store,
        password_hasher=WerkzeugHasher(app.config.get("PASSWORD_HASH_METHOD", "scrypt")),
        token_hasher=WerkzeugHasher(app.config.get("SESSION_TOKEN_HASH_METHOD", "scrypt")),
        strict_rotation=cfg.strict_rotation,
    )
    log.info(
        "Auth service ready: backend=%s strict_rotation=%s",
        type(store).__name__,
        cfg.strict_rotation,
    )
    return service
