"""User repository for identity lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select

from blog_auth.models.user import Role, User
from blog_auth.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It NEVER hashes passwords or issues tokens; callers pass an already
    hashed password to :meth:`create`.
    """

    model = User

    def get_by_username(self, username: str) -> User | None:
        """Fetch a user by username, case-sensitively as stored.

        :param username: Exact login handle.
        :returns: User instance or ``None`` when not found.
        """
        stmt = select(User).where(User.username == username)
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_username_or_email(self, username: str, email: str) -> bool:
        """Return ``True`` when either identifier is already taken."""
        stmt = select(User.id).where(
            or_(User.username == username, User.email == email.strip().lower())
        )
        return bool(self.session.execute(stmt).first())

    def create(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
        role: Role = Role.AUTHOR,
        is_active: bool = True,
    ) -> User:
        """Stage and flush a new user row.

        :param password_hash: Digest produced by the password hasher.
        :returns: Persisted user with its generated id.
        """
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            role=role,
            is_active=is_active,
        )
        return self.add(user)
