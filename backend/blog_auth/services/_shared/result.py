"""Tagged outcome returned by every :class:`AuthService` operation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from blog_auth.services._shared.errors import AuthError, StorageError

T = TypeVar("T")


class AuthOutcome(str, Enum):
    """Result of an authentication call."""

    SUCCESS = "success"
    REJECTED = "rejected"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class AuthResult(Generic[T]):
    """
    Outcome of an auth operation: a value *or* the error that replaced it.

    :ivar outcome: Which branch the call ended in.
    :ivar value: Payload on ``SUCCESS``; ``None`` otherwise.
    :ivar error: :class:`AuthError` on ``REJECTED``, :class:`StorageError`
        on ``ERROR``; ``None`` on success.
    """

    outcome: AuthOutcome
    value: T | None = None
    error: Exception | None = None

    @classmethod
    def success(cls, value: T) -> AuthResult[T]:
        return cls(outcome=AuthOutcome.SUCCESS, value=value)

    @classmethod
    def rejected(cls, error: AuthError) -> AuthResult[T]:
        return cls(outcome=AuthOutcome.REJECTED, error=error)

    @classmethod
    def failed(cls, error: StorageError) -> AuthResult[T]:
        return cls(outcome=AuthOutcome.ERROR, error=error)

    @classmethod
    def capture(cls, fn: Callable[[], T]) -> AuthResult[T]:
        """
        Run ``fn`` and fold the expected failures into a result.

        Only :class:`AuthError` and :class:`StorageError` are captured; any
        other exception is a bug and propagates.
        """
        try:
            return cls.success(fn())
        except AuthError as exc:
            return cls.rejected(exc)
        except StorageError as exc:
            return cls.failed(exc)

    @property
    def ok(self) -> bool:
        return self.outcome is AuthOutcome.SUCCESS

    def unwrap(self) -> T:
        """
        Return the value or re-raise the carried error.

        :raises AuthError: on ``REJECTED``.
        :raises StorageError: on ``ERROR``.
        """
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
