"""
blog_auth.services._shared.ports
================================

Collection of *ports* (hexagonal interfaces) that define the contracts the
auth components consume.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`: JWS signing/verification with an
    explicit secret, and :class:`~.TokenVerificationError`.

- :mod:`password_hasher`:
    Defines :class:`~.PasswordHasher`: salted hash + constant-time verify,
    used for both passwords and stored refresh tokens.

- :mod:`session_store`:
    Defines :class:`~.SessionStore` and :class:`~.SessionRecord`: persistence
    of hashed refresh-token sessions, plus :class:`~.InMemorySessionStore`.

- :mod:`user_directory`:
    Defines :class:`~.UserDirectory`, :class:`~.UserIdentity` and
    :class:`~.UserProfile`: read-only identity lookups.

Design Notes
------------
Concrete adapters (SQLAlchemy, Redis, PyJWT, werkzeug) live under
``blog_auth.infra``; in-memory doubles live next to their port so unit tests
need no infrastructure.
"""

from __future__ import annotations

from .password_hasher import PasswordHasher
from .session_store import InMemorySessionStore, SessionRecord, SessionStore, as_utc
from .token_provider import TokenProvider, TokenVerificationError
from .user_directory import (
    InMemoryUserDirectory,
    UserDirectory,
    UserIdentity,
    UserProfile,
)

__all__ = [
    "PasswordHasher",
    "TokenProvider",
    "TokenVerificationError",
    "SessionStore",
    "SessionRecord",
    "InMemorySessionStore",
    "as_utc",
    "UserDirectory",
    "UserIdentity",
    "UserProfile",
    "InMemoryUserDirectory",
]
