# blog_auth/services/auth/service.py
from __future__ import annotations

from blog_auth.services._shared.base import BaseService
from blog_auth.services._shared.errors import NotFoundError
from blog_auth.services._shared.ports import (
    PasswordHasher,
    SessionRecord,
    SessionStore,
    UserDirectory,
    UserIdentity,
    UserProfile,
)
from blog_auth.services._shared.result import AuthResult
from blog_auth.services.auth.credentials import CredentialVerifier
from blog_auth.services.auth.dto import (
    AuthSessionOut,
    IssuedTokens,
    LoginIn,
    LogoutIn,
    RefreshIn,
    RevocationOut,
)
from blog_auth.services.auth.refresh import RefreshCoordinator
from blog_auth.services.auth.revocation import RevocationHandler
from blog_auth.services.auth.sessions import open_session
from blog_auth.services.auth.tokens import TokenIssuer


class AuthService(BaseService):
    """
    Authentication lifecycle service (login / refresh / logout).

    Orchestrates the credential verifier, token issuer, refresh coordinator
    and revocation handler over a :class:`SessionStore` and a
    :class:`UserDirectory`. Every operation returns an :class:`AuthResult`;
    callers branch on ``outcome`` or call ``unwrap()``.
    """

    def __init__(
        self,
        *,
        issuer: TokenIssuer,
        users: UserDirectory,
        sessions: SessionStore,
        password_hasher: PasswordHasher,
        token_hasher: PasswordHasher,
        strict_rotation: bool = True,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param issuer: Token issuer (already validated secrets).
        :param users: Identity lookups.
        :param sessions: Hashed refresh-token session store.
        :param password_hasher: Verifies stored password digests.
        :param token_hasher: Hashes refresh tokens before storage.
        :param strict_rotation: Single-use refresh tokens under concurrency.
        """
        super().__init__()
        self.issuer = issuer
        self.users = users
        self.sessions = sessions
        self.token_hasher = token_hasher
        self.credentials = CredentialVerifier(users=users, hasher=password_hasher)
        self.coordinator = RefreshCoordinator(
            issuer=issuer,
            users=users,
            sessions=sessions,
            hasher=token_hasher,
            strict=strict_rotation,
        )
        self.revocation = RevocationHandler(sessions=sessions)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> AuthResult[AuthSessionOut]:
        """
        Authenticate credentials and open a new session.

        :param dto: Login input.
        :returns: ``SUCCESS`` with tokens and profile, ``REJECTED`` with
            :class:`InvalidCredentials`, or ``ERROR`` with ``StorageError``.
        """
        return AuthResult.capture(lambda: self._login(dto))

    def _login(self, dto: LoginIn) -> AuthSessionOut:
        identity = self.credentials.verify(dto.username, dto.password)
        tokens, record = open_session(
            identity=identity,
            issuer=self.issuer,
            sessions=self.sessions,
            hasher=self.token_hasher,
            now=self.now_utc(),
        )
        self.log.info(
            "Login succeeded",
            extra={"user_id": identity.id, "session_id": record.id},
        )
        return self._session_out(tokens, record, identity)

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> AuthResult[AuthSessionOut]:
        """
        Rotate a refresh token.

        :param dto: Refresh input.
        :returns: ``SUCCESS`` with the new pair, ``REJECTED`` with
            :class:`InvalidRefreshToken`, or ``ERROR``.
        """

        def _run() -> AuthSessionOut:
            rotation = self.coordinator.refresh(dto.refresh_token)
            return self._session_out(rotation.tokens, rotation.record, rotation.identity)

        return AuthResult.capture(_run)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> AuthResult[RevocationOut]:
        """
        Revoke every session of ``dto.user_id``.

        :returns: Always ``SUCCESS`` unless the store fails.
        """
        return AuthResult.capture(lambda: self.revocation.revoke(dto.user_id))

    # ------------------------------------------------------------------ #
    # Profile
    # ------------------------------------------------------------------ #

    def profile(self, user_id: str) -> UserProfile:
        """
        Public profile of ``user_id``.

        :raises NotFoundError: if the user no longer exists.
        """
        identity = self.users.get_by_id(user_id)
        if identity is None:
            raise NotFoundError("User", user_id)
        return identity.to_profile()

    @staticmethod
    def _session_out(
        tokens: IssuedTokens, record: SessionRecord, identity: UserIdentity
    ) -> AuthSessionOut:
        return AuthSessionOut(
            access_token=tokens.access_token,
            access_token_expires_in=int(tokens.access_token_ttl.total_seconds()),
            refresh_token=tokens.refresh_token,
            user=identity.to_profile(),
            session_id=record.id,
        )
