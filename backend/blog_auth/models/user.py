"""User model definition for the blog identity store."""

from __future__ import annotations

import enum

from sqlalchemy import Boolean, Enum, Index, String, UniqueConstraint, true
from sqlalchemy.orm import Mapped, mapped_column, validates

from blog_auth.core.extensions import db

from .base import ReprMixin, TimestampMixin, UUIDPKMixin


class Role(str, enum.Enum):
    """Enumerated account roles carried in token claims."""

    ADMIN = "admin"
    AUTHOR = "author"


class User(UUIDPKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Authentication identity.

    The auth core never mutates this row; it reads it through
    :class:`~blog_auth.infra.sqlalchemy.user_directory.SQLAlchemyUserDirectory`
    as a plain :class:`~blog_auth.services._shared.ports.UserIdentity` record.

    Fields
    ------
    username : str
        Login handle. Unique, compared case-sensitively.
    email : str
        Contact email. Stored normalized (lowercase, trimmed).
    password_hash : str
        Salted one-way hash produced by the configured password hasher.
    role : Role
        ``admin`` or ``author``.
    is_active : bool
        Inactive accounts cannot log in or refresh.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Role.AUTHOR,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
        Index("ix_users_username", "username"),
    )

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at the schema layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("username")
    def _validate_username(self, key: str, value: str) -> str:
        """
        Validate username. Case is preserved: lookups are case-sensitive.

        :raises ValueError: If username is missing or only whitespace.
        """
        if not isinstance(value, str):
            raise ValueError("Username is required.")
        v = value.strip()
        if not v:
            raise ValueError("Username is required.")
        return v
