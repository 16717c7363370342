# blog_auth/infra/sqlalchemy/session_store.py
from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from blog_auth.models.user_session import UserSession
from blog_auth.services._shared.base import now_utc
from blog_auth.services._shared.errors import StorageError
from blog_auth.services._shared.ports import SessionRecord, SessionStore, as_utc
from blog_auth.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


def to_record(row: UserSession) -> SessionRecord:
    """Copy a mapped row into a detached, tz-aware record."""
    return SessionRecord(
        id=row.id,
        user_id=row.user_id,
        token_hash=row.token_hash,
        expires_at=as_utc(row.expires_at),
        created_at=as_utc(row.created_at),
    )


class SQLAlchemySessionStore(SessionStore):
    """
    Relational session store over ``user_sessions``.

    Each call runs in its own Unit of Work and commits before returning, so
    every operation is one statement in one transaction.

    :param uow_factory: Builds read-write units of work.
    :param ro_uow_factory: Builds read-only units of work.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], SQLAlchemyUnitOfWork] = SQLAlchemyUnitOfWork,
        ro_uow_factory: Callable[
            [], SQLAlchemyReadOnlyUnitOfWork
        ] = SQLAlchemyReadOnlyUnitOfWork,
    ) -> None:
        self._rw = uow_factory
        self._ro = ro_uow_factory

    def insert(self, user_id: str, token_hash: str, expires_at: datetime) -> SessionRecord:
        try:
            with self._rw() as uow:
                row = uow.sessions.insert(
                    user_id=user_id,
                    token_hash=token_hash,
                    expires_at=as_utc(expires_at),
                    created_at=now_utc(),
                )
                record = to_record(row)
        except SQLAlchemyError as exc:
            raise StorageError("Could not persist session") from exc
        return record

    def list_by_user(self, user_id: str) -> list[SessionRecord]:
        try:
            with self._ro() as uow:
                return [to_record(row) for row in uow.sessions.list_by_user(user_id)]
        except SQLAlchemyError as exc:
            raise StorageError("Could not list sessions") from exc

    def delete(self, session_id: str) -> bool:
        try:
            with self._rw() as uow:
                removed = uow.sessions.delete_by_id(session_id)
        except SQLAlchemyError as exc:
            raise StorageError("Could not delete session") from exc
        return removed == 1

    def delete_all_by_user(self, user_id: str) -> int:
        try:
            with self._rw() as uow:
                return uow.sessions.delete_by_user(user_id)
        except SQLAlchemyError as exc:
            raise StorageError("Could not revoke sessions") from exc

    def delete_expired(self, now: datetime) -> int:
        try:
            with self._rw() as uow:
                return uow.sessions.delete_expired(as_utc(now))
        except SQLAlchemyError as exc:
            raise StorageError("Could not prune sessions") from exc
