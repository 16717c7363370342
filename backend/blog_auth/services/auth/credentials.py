"""Username/password verification against the identity store."""

from __future__ import annotations

import secrets

from blog_auth.services._shared.errors import InvalidCredentials
from blog_auth.services._shared.ports import PasswordHasher, UserDirectory, UserIdentity


class CredentialVerifier:
    """
    Validate a username/password pair.

    Unknown user, wrong password and inactive account all raise the same
    :class:`InvalidCredentials`. An unknown username still costs one hash
    verification against a throwaway digest so timing does not reveal which
    usernames exist.
    """

    def __init__(self, *, users: UserDirectory, hasher: PasswordHasher) -> None:
        self.users = users
        self.hasher = hasher
        self._dummy_hash = hasher.hash(secrets.token_urlsafe(16))

    def verify(self, username: str, password: str) -> UserIdentity:
        """
        :param username: Case-sensitive username.
        :param password: Raw password.
        :returns: The matching identity.
        :raises InvalidCredentials: on any mismatch.
        """
        user = self.users.get_by_username(username)
        if user is None:
            self.hasher.verify(password, self._dummy_hash)
            raise InvalidCredentials()
        if not self.hasher.verify(password, user.password_hash):
            raise InvalidCredentials()
        if not user.is_active:
            raise InvalidCredentials()
        return user
