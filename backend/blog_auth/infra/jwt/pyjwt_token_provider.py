# blog_auth/infra/jwt/pyjwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from blog_auth.services._shared.ports import TokenProvider, TokenVerificationError


@dataclass(slots=True)
class PyJWTTokenProvider(TokenProvider):
    """
    HMAC JWS adapter on top of PyJWT.

    Unlike Flask-JWT-Extended, which signs with a single app-wide key, the
    secret is chosen per call so access and refresh tokens never share one.

    :param algorithm: HMAC algorithm (``HS256`` by default).
    :param leeway: Clock skew tolerated when checking ``exp``/``iat``.
    """

    algorithm: str = "HS256"
    leeway: timedelta = timedelta(seconds=0)

    def sign(self, claims: dict[str, Any], *, secret: str, ttl: timedelta) -> str:
        now = datetime.now(UTC)
        payload = {**claims, "iat": now, "exp": now + ttl}
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def verify(self, token: str, *, secret: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                leeway=self.leeway,
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.PyJWTError as exc:
            # Expired, tampered and malformed all collapse into one error
            raise TokenVerificationError(type(exc).__name__) from exc
