# blog_auth/services/_shared/base.py
from __future__ import annotations

import logging
from datetime import UTC, datetime

from blog_auth.core import errors as api_errors
from blog_auth.services._shared.errors import (
    ConflictError,
    InvalidCredentials,
    InvalidRefreshToken,
    NotFoundError,
    ServiceError,
    StorageError,
)


def now_utc() -> datetime:
    """Timezone-aware current time. Patched by freezegun in tests."""
    return datetime.now(UTC)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide the shared clock and a module logger.
    * Centralize the domain → HTTP error translation.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services never touch the global session; storage goes through ports.
    """

    def __init__(self) -> None:
        self.log = logging.getLogger(type(self).__module__)

    @staticmethod
    def now_utc() -> datetime:
        return now_utc()

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised.
        :rtype: Exception
        """
        if isinstance(exc, InvalidCredentials):
            # → 401 Unauthorized
            return api_errors.Unauthorized(str(exc))

        if isinstance(exc, InvalidRefreshToken):
            # → 403 Forbidden, same body for every internal reason
            return api_errors.Forbidden(str(exc))

        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))

        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc))

        if isinstance(exc, StorageError):
            # → 503, storage details stay in the logs
            return api_errors.ServiceUnavailable()

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(
                message=str(exc),
                status_code=400,
                code="bad_request",
            )

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
