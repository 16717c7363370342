"""Refresh-token verification and rotate-on-use."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from blog_auth.services._shared.base import now_utc
from blog_auth.services._shared.errors import InvalidRefreshToken
from blog_auth.services._shared.ports import (
    PasswordHasher,
    SessionRecord,
    SessionStore,
    TokenVerificationError,
    UserDirectory,
    UserIdentity,
)
from blog_auth.services.auth.dto import IssuedTokens
from blog_auth.services.auth.sessions import open_session
from blog_auth.services.auth.tokens import TokenIssuer

log = logging.getLogger(__name__)

# Internal rejection reasons (logged, never returned to clients)
REASON_MISSING = "missing_token"
REASON_BAD_TOKEN = "invalid_signature_or_expired"
REASON_UNKNOWN_USER = "unknown_user"
REASON_NO_SESSION = "no_matching_session"
REASON_CONCURRENT = "concurrent_rotation"


@dataclass(frozen=True, slots=True)
class Rotation:
    """A completed rotation: the new pair, its record and the owner."""

    tokens: IssuedTokens
    record: SessionRecord
    identity: UserIdentity


class RefreshCoordinator:
    """
    Exchange a refresh token for a new pair, consuming the old session.

    Parameters
    ----------
    issuer : TokenIssuer
        Verifies the presented token and mints the new pair.
    users : UserDirectory
        Resolves the ``sub`` claim.
    sessions : SessionStore
        Holds hashed refresh tokens.
    hasher : PasswordHasher
        Constant-time comparison against stored hashes.
    strict : bool
        When ``True`` the matched record is deleted *before* issuing and a
        zero-row delete rejects the call, so a token is single-use even under
        concurrency. When ``False`` the old record is deleted after the new
        one is stored and racing callers may all succeed.

    Notes
    -----
    Every rejection raises :class:`InvalidRefreshToken`; only its ``reason``
    differs, and it only reaches the logs.
    """

    def __init__(
        self,
        *,
        issuer: TokenIssuer,
        users: UserDirectory,
        sessions: SessionStore,
        hasher: PasswordHasher,
        strict: bool = True,
    ) -> None:
        self.issuer = issuer
        self.users = users
        self.sessions = sessions
        self.hasher = hasher
        self.strict = strict

    def refresh(self, token: str) -> Rotation:
        """
        :param token: Raw refresh token presented by the client.
        :returns: The rotation outcome.
        :raises InvalidRefreshToken: on any rejection.
        :raises StorageError: when the session or identity store fails.
        """
        if not token:
            raise self._reject(REASON_MISSING)
        try:
            claims = self.issuer.verify_refresh(token)
        except TokenVerificationError:
            raise self._reject(REASON_BAD_TOKEN) from None

        user_id = str(claims["sub"])
        identity = self.users.get_by_id(user_id)
        if identity is None or not identity.is_active:
            raise self._reject(REASON_UNKNOWN_USER, user_id=user_id)

        matched = self._match(token, self.sessions.list_by_user(user_id))
        if matched is None:
            raise self._reject(REASON_NO_SESSION, user_id=user_id)

        if self.strict:
            if not self.sessions.delete(matched.id):
                raise self._reject(REASON_CONCURRENT, user_id=user_id)
            tokens, record = self._open(identity)
        else:
            tokens, record = self._open(identity)
            self.sessions.delete(matched.id)

        log.info(
            "Refresh token rotated",
            extra={"user_id": user_id, "session_id": record.id},
        )
        return Rotation(tokens=tokens, record=record, identity=identity)

    def _match(self, token: str, records: list[SessionRecord]) -> SessionRecord | None:
        now = now_utc()
        for record in records:
            if record.is_expired(now):
                continue
            if self.hasher.verify(token, record.token_hash):
                return record
        return None

    def _open(self, identity: UserIdentity) -> tuple[IssuedTokens, SessionRecord]:
        return open_session(
            identity=identity,
            issuer=self.issuer,
            sessions=self.sessions,
            hasher=self.hasher,
            now=now_utc(),
        )

    @staticmethod
    def _reject(reason: str, *, user_id: str | None = None) -> InvalidRefreshToken:
        log.warning(
            "Refresh token rejected",
            extra={"reason": reason, "user_id": user_id},
        )
        return InvalidRefreshToken(reason)
