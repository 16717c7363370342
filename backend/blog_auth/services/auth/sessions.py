"""Opening a session: mint a pair, then persist the hash of its refresh token."""

from __future__ import annotations

from datetime import datetime

from blog_auth.services._shared.ports import (
    PasswordHasher,
    SessionRecord,
    SessionStore,
    UserIdentity,
)
from blog_auth.services.auth.dto import IssuedTokens
from blog_auth.services.auth.tokens import TokenIssuer


def open_session(
    *,
    identity: UserIdentity,
    issuer: TokenIssuer,
    sessions: SessionStore,
    hasher: PasswordHasher,
    now: datetime,
) -> tuple[IssuedTokens, SessionRecord]:
    """
    Issue tokens for ``identity`` and store the refresh token's hash.

    The record write is the last step: tokens are only handed back once they
    are revocable by logout.
    """
    tokens = issuer.issue(identity, now=now)
    record = sessions.insert(
        identity.id,
        hasher.hash(tokens.refresh_token),
        tokens.refresh_expires_at,
    )
    return tokens, record
