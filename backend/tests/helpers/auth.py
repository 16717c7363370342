"""Token and identity helpers shared across test modules."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from blog_auth.core.config import TestingConfig
from blog_auth.infra.jwt import PyJWTTokenProvider
from blog_auth.services._shared.ports import PasswordHasher, UserIdentity
from blog_auth.services.auth.dto import AuthTokenConfig
from blog_auth.services.auth.tokens import TokenIssuer

TEST_HASH_METHOD = "pbkdf2:sha256:1000"
ACCESS_SECRET = TestingConfig.JWT_ACCESS_SECRET
REFRESH_SECRET = TestingConfig.JWT_REFRESH_SECRET


def make_identity(
    hasher: PasswordHasher,
    *,
    username: str = "alice",
    password: str = "Passw0rd!",
    role: str = "author",
    is_active: bool = True,
    user_id: str | None = None,
) -> UserIdentity:
    """Build a :class:`UserIdentity` whose hash matches ``password``."""
    return UserIdentity(
        id=user_id or str(uuid4()),
        username=username,
        email=f"{username}@example.com",
        role=role,
        is_active=is_active,
        password_hash=hasher.hash(password),
    )


def make_issuer(**overrides: Any) -> TokenIssuer:
    """Issuer using the testing secrets; ``overrides`` patch the config."""
    values: dict[str, Any] = {
        "access_secret": ACCESS_SECRET,
        "refresh_secret": REFRESH_SECRET,
    }
    values.update(overrides)
    return TokenIssuer(provider=PyJWTTokenProvider(), cfg=AuthTokenConfig(**values))


def forge_token(
    *,
    secret: str,
    sub: str,
    token_type: str = "refresh",
    lifetime: timedelta = timedelta(days=7),
    **claims: Any,
) -> str:
    """Sign an arbitrary token outside the issuer (tampering scenarios)."""
    now = datetime.now(UTC)
    payload = {
        "sub": sub,
        "username": "ghost",
        "role": "author",
        "type": token_type,
        "jti": uuid4().hex,
        "iat": now,
        "exp": now + lifetime,
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(token: str) -> dict[str, str]:
    """Authorization header for ``token``."""
    return {"Authorization": f"Bearer {token}"}
