# blog_auth/infra/sqlalchemy/user_directory.py
from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError

from blog_auth.models.user import User
from blog_auth.services._shared.errors import StorageError
from blog_auth.services._shared.ports import UserDirectory, UserIdentity
from blog_auth.uow import SQLAlchemyReadOnlyUnitOfWork


def to_identity(user: User) -> UserIdentity:
    return UserIdentity(
        id=user.id,
        username=user.username,
        email=user.email,
        role=user.role.value,
        is_active=bool(user.is_active),
        password_hash=user.password_hash,
    )


class SQLAlchemyUserDirectory(UserDirectory):
    """Read-only identity lookups against the ``users`` table."""

    def __init__(
        self,
        *,
        ro_uow_factory: Callable[
            [], SQLAlchemyReadOnlyUnitOfWork
        ] = SQLAlchemyReadOnlyUnitOfWork,
    ) -> None:
        self._ro = ro_uow_factory

    def get_by_username(self, username: str) -> UserIdentity | None:
        try:
            with self._ro() as uow:
                user = uow.users.get_by_username(username)
                return to_identity(user) if user is not None else None
        except SQLAlchemyError as exc:
            raise StorageError("Could not load user") from exc

    def get_by_id(self, user_id: str) -> UserIdentity | None:
        try:
            with self._ro() as uow:
                user = uow.users.get(user_id)
                return to_identity(user) if user is not None else None
        except SQLAlchemyError as exc:
            raise StorageError("Could not load user") from exc
