"""Minting and verification of access/refresh token pairs."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import uuid4

from blog_auth.services._shared.errors import ConfigurationError
from blog_auth.services._shared.ports import (
    TokenProvider,
    TokenVerificationError,
    UserIdentity,
)
from blog_auth.services.auth.dto import AuthTokenConfig, IssuedTokens

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenIssuer:
    """
    Sign access and refresh tokens with distinct secrets and lifetimes.

    Parameters
    ----------
    provider : TokenProvider
        Signing primitive.
    cfg : AuthTokenConfig
        Secrets and lifetimes.

    Raises
    ------
    ConfigurationError
        If either secret is missing or both secrets are identical. Built once
        by the app factory, so this aborts startup.
    """

    def __init__(self, *, provider: TokenProvider, cfg: AuthTokenConfig) -> None:
        if not cfg.access_secret or not cfg.refresh_secret:
            raise ConfigurationError("JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must both be set")
        if cfg.access_secret == cfg.refresh_secret:
            raise ConfigurationError("JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must differ")
        self.provider = provider
        self.cfg = cfg

    def issue(self, identity: UserIdentity, *, now: datetime) -> IssuedTokens:
        """
        Mint a new pair for ``identity``.

        :param identity: Authenticated user.
        :param now: Issuance instant, used for the session record expiry.
        :returns: Signed tokens plus lifetimes.
        """
        access = self._sign(identity, ACCESS_TOKEN_TYPE)
        refresh = self._sign(identity, REFRESH_TOKEN_TYPE)
        return IssuedTokens(
            access_token=access,
            refresh_token=refresh,
            access_token_ttl=self.cfg.access_expires,
            refresh_expires_at=now + self.cfg.refresh_expires,
        )

    def verify_refresh(self, token: str) -> dict[str, Any]:
        """
        Verify ``token`` against the refresh secret.

        :returns: Decoded claims.
        :raises TokenVerificationError: bad signature, expired, malformed or
            not a refresh token.
        """
        claims = self.provider.verify(token, secret=self.cfg.refresh_secret or "")
        if claims.get("type") != REFRESH_TOKEN_TYPE or not claims.get("sub"):
            raise TokenVerificationError("Not a refresh token")
        return claims

    def _sign(self, identity: UserIdentity, token_type: str) -> str:
        if token_type == ACCESS_TOKEN_TYPE:
            secret, ttl = self.cfg.access_secret, self.cfg.access_expires
        else:
            secret, ttl = self.cfg.refresh_secret, self.cfg.refresh_expires
        claims = {**identity.claims, "type": token_type, "jti": uuid4().hex}
        return self.provider.sign(claims, secret=secret or "", ttl=ttl)
