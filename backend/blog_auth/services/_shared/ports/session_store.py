from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (SQLite round-trips) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass(frozen=True, slots=True)
class SessionRecord:
    """
    Read-model for one issued refresh token.

    :ivar id: Session identifier.
    :ivar user_id: Owner user id.
    :ivar token_hash: Salted one-way hash of the refresh token.
    :ivar expires_at: Absolute expiration (UTC).
    :ivar created_at: Insertion time (UTC).
    """

    id: str
    user_id: str
    token_hash: str
    expires_at: datetime
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return as_utc(self.expires_at) <= as_utc(now)


class SessionStore(Protocol):
    """
    Persistence of hashed refresh-token sessions.

    Every operation MUST be a single atomic statement at the storage engine.
    Backend failures MUST surface as ``StorageError``.
    """

    def insert(self, user_id: str, token_hash: str, expires_at: datetime) -> SessionRecord:
        """Append a new record. No deduplication (multi-device is allowed)."""

    def list_by_user(self, user_id: str) -> list[SessionRecord]:
        """All records owned by ``user_id``, arbitrary order."""

    def delete(self, session_id: str) -> bool:
        """Conditional delete. ``True`` only when *this* call removed the record."""

    def delete_all_by_user(self, user_id: str) -> int:
        """Delete every record of ``user_id``. :returns: Count deleted, 0 included."""

    def delete_expired(self, now: datetime) -> int:
        """Housekeeping. :returns: Number of expired records removed."""


class InMemorySessionStore(SessionStore):
    """
    In-memory session store.

    .. note::
       Uses a threading lock to simulate statement-level atomicity in unit tests.
    """

    def __init__(self) -> None:
        self._by_id: dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def insert(self, user_id: str, token_hash: str, expires_at: datetime) -> SessionRecord:
        record = SessionRecord(
            id=str(uuid4()),
            user_id=user_id,
            token_hash=token_hash,
            expires_at=as_utc(expires_at),
            created_at=datetime.now(UTC),
        )
        with self._lock:
            self._by_id[record.id] = record
        return record

    def list_by_user(self, user_id: str) -> list[SessionRecord]:
        with self._lock:
            return [r for r in self._by_id.values() if r.user_id == user_id]

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._by_id.pop(session_id, None) is not None

    def delete_all_by_user(self, user_id: str) -> int:
        with self._lock:
            doomed = [sid for sid, r in self._by_id.items() if r.user_id == user_id]
            for sid in doomed:
                del self._by_id[sid]
            return len(doomed)

    def delete_expired(self, now: datetime) -> int:
        with self._lock:
            doomed = [sid for sid, r in self._by_id.items() if r.is_expired(now)]
            for sid in doomed:
                del self._by_id[sid]
            return len(doomed)

    def __len__(self) -> int:
        return len(self._by_id)
