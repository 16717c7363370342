from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol


class TokenVerificationError(Exception):
    """Signature, expiry or structure check failed for a presented token."""


class TokenProvider(Protocol):
    """Port for signing and verifying compact JWS tokens with a given secret."""

    def sign(self, claims: dict[str, Any], *, secret: str, ttl: timedelta) -> str:
        """
        Sign ``claims`` adding ``iat``/``exp`` derived from ``ttl``.

        :returns: Compact serialized token.
        """

    def verify(self, token: str, *, secret: str) -> dict[str, Any]:
        """
        Verify signature and expiry of ``token`` against ``secret``.

        :returns: Decoded claims.
        :raises TokenVerificationError: on any failure.
        """
