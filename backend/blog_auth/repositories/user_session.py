"""Repository for hashed refresh-token session rows."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.engine import CursorResult

from blog_auth.models.user_session import UserSession
from blog_auth.repositories.base import BaseRepository


class UserSessionRepository(BaseRepository[UserSession]):
    """Persistence-only repository for :class:`UserSession`.

    Every write is a single statement; row counts come from the driver's
    ``rowcount`` so callers can tell whether *their* statement removed a row.
    """

    model = UserSession

    def insert(
        self,
        *,
        user_id: str,
        token_hash: str,
        expires_at: datetime,
        created_at: datetime,
    ) -> UserSession:
        """Stage and flush a new session row (no deduplication)."""
        row = UserSession(
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
            created_at=created_at,
        )
        return self.add(row)

    def list_by_user(self, user_id: str) -> list[UserSession]:
        """Return every session row owned by ``user_id``."""
        stmt = select(UserSession).where(UserSession.user_id == user_id)
        return list(self.session.execute(stmt).scalars())

    def delete_by_id(self, session_id: str) -> int:
        """Delete one row by id; returns the number of rows removed (0 or 1)."""
        stmt = delete(UserSession).where(UserSession.id == session_id)
        return self._rowcount(self.session.execute(stmt))

    def delete_by_user(self, user_id: str) -> int:
        """Delete every row owned by ``user_id`` in one statement."""
        stmt = delete(UserSession).where(UserSession.user_id == user_id)
        return self._rowcount(self.session.execute(stmt))

    def delete_expired(self, now: datetime) -> int:
        """Delete rows whose ``expires_at`` is at or before ``now``."""
        stmt = delete(UserSession).where(UserSession.expires_at <= now)
        return self._rowcount(self.session.execute(stmt))

    @staticmethod
    def _rowcount(result: object) -> int:
        if isinstance(result, CursorResult):
            return max(0, int(result.rowcount))
        return 0
