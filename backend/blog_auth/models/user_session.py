"""Server-side record of an issued refresh token."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from blog_auth.core.extensions import db

from .base import ReprMixin, UUIDPKMixin


class UserSession(UUIDPKMixin, ReprMixin, db.Model):
    """
    One row per refresh token currently in circulation.

    ``token_hash`` holds a salted one-way hash of the refresh token; the raw
    token is never persisted. A user may own many rows (one per device).

    No ORM relationship to :class:`~blog_auth.models.user.User` is declared:
    sessions are always fetched through explicit repository queries.
    """

    __tablename__ = "user_sessions"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    token_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_user_sessions_user_id", "user_id"),
        Index("ix_user_sessions_expires_at", "expires_at"),
    )
