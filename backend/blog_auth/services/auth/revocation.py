"""Logout: drop every session record of a user."""

from __future__ import annotations

import logging

from blog_auth.services._shared.ports import SessionStore
from blog_auth.services.auth.dto import RevocationOut

log = logging.getLogger(__name__)


class RevocationHandler:
    """Delete all sessions for a user. Idempotent; zero deletions is a success."""

    def __init__(self, *, sessions: SessionStore) -> None:
        self.sessions = sessions

    def revoke(self, user_id: str) -> RevocationOut:
        deleted = self.sessions.delete_all_by_user(user_id)
        log.info("Sessions revoked: count=%s", deleted, extra={"user_id": user_id})
        return RevocationOut(deleted_count=deleted)
