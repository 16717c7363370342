from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class UserProfile:
    """Public view of a user: safe to serialize to clients."""

    id: str
    username: str
    email: str
    role: str
    is_active: bool


@dataclass(frozen=True, slots=True)
class UserIdentity:
    """
    What the auth core needs to know about a user.

    :ivar password_hash: Stored salted digest; never leaves the service layer.
    """

    id: str
    username: str
    email: str
    role: str
    is_active: bool
    password_hash: str

    @property
    def claims(self) -> dict[str, str]:
        """Identity claims shared by access and refresh tokens."""
        return {"sub": self.id, "username": self.username, "role": self.role}

    def to_profile(self) -> UserProfile:
        return UserProfile(
            id=self.id,
            username=self.username,
            email=self.email,
            role=self.role,
            is_active=self.is_active,
        )


class UserDirectory(Protocol):
    """Read-only lookup into the identity store."""

    def get_by_username(self, username: str) -> UserIdentity | None: ...

    def get_by_id(self, user_id: str) -> UserIdentity | None: ...


class InMemoryUserDirectory(UserDirectory):
    """Dictionary-backed directory used by unit tests."""

    def __init__(self, users: Iterable[UserIdentity] = ()) -> None:
        self._by_id: dict[str, UserIdentity] = {u.id: u for u in users}

    def add(self, user: UserIdentity) -> UserIdentity:
        self._by_id[user.id] = user
        return user

    def remove(self, user_id: str) -> None:
        self._by_id.pop(user_id, None)

    def get_by_username(self, username: str) -> UserIdentity | None:
        return next((u for u in self._by_id.values() if u.username == username), None)

    def get_by_id(self, user_id: str) -> UserIdentity | None:
        return self._by_id.get(user_id)
