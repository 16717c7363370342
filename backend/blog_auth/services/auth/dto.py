# blog_auth/services/auth/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from blog_auth.core.config import as_bool, parse_duration
from blog_auth.services._shared.ports.user_directory import UserProfile

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param username: Username, compared case-sensitively.
    :type username: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    refresh_token: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param user_id: Identity taken from a verified access token.
    :type user_id: str
    """

    user_id: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class IssuedTokens:
    """
    Freshly minted token pair, not yet backed by a session record.

    :param access_token: Encoded access JWT.
    :param refresh_token: Encoded refresh JWT.
    :param access_token_ttl: Access token lifetime.
    :param refresh_expires_at: Expiry stamped on the session record.
    """

    access_token: str = field(repr=False)
    refresh_token: str = field(repr=False)
    access_token_ttl: timedelta
    refresh_expires_at: datetime


@dataclass(frozen=True, slots=True)
class AuthSessionOut:
    """
    Result of a successful login or refresh.

    :param access_token: Encoded access JWT.
    :param access_token_expires_in: Access token lifetime in seconds.
    :param refresh_token: Encoded refresh JWT.
    :param user: Public profile of the authenticated user.
    :param session_id: Identifier of the session record backing ``refresh_token``.
    """

    access_token: str = field(repr=False)
    access_token_expires_in: int
    refresh_token: str = field(repr=False)
    user: UserProfile
    session_id: str


@dataclass(frozen=True, slots=True)
class RevocationOut:
    """
    Result of a logout.

    :param deleted_count: Session records removed, ``0`` included.
    """

    deleted_count: int


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_secret: Signing key for access tokens.
    :param refresh_secret: Signing key for refresh tokens.
    :param access_expires: Access token lifetime.
    :param refresh_expires: Refresh token and session record lifetime.
    :param strict_rotation: Reject the loser of a concurrent rotation.
    """

    access_secret: str | None = field(repr=False)
    refresh_secret: str | None = field(repr=False)
    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=7)
    strict_rotation: bool = True

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> AuthTokenConfig:
        """Build from a Flask ``app.config``-like mapping."""
        return cls(
            access_secret=config.get("JWT_ACCESS_SECRET"),
            refresh_secret=config.get("JWT_REFRESH_SECRET"),
            access_expires=parse_duration(config.get("JWT_ACCESS_EXPIRES", "15m")),
            refresh_expires=parse_duration(config.get("JWT_REFRESH_EXPIRES", "7d")),
            strict_rotation=as_bool(config.get("AUTH_STRICT_ROTATION"), True),
        )
