"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask, HTTP or
SQLAlchemy. They are the stable contract between storage adapters, the auth
components and the API layer.

The translation to HTTP responses (RFC 7807) is handled by
``blog_auth/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from adapters or domain logic.
    - The API layer translates them to ``APIError`` through BaseService.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


# --------------------------------------------------------------------------- #
# Authentication
# --------------------------------------------------------------------------- #


class AuthError(ServiceError):
    """Base class for authentication rejections that reach the client."""

    public_message = "Authentication failed"

    def __str__(self) -> str:
        return self.public_message


class InvalidCredentials(AuthError):
    """Unknown user, wrong password or inactive account. Indistinguishable."""

    public_message = "Invalid credentials"


class InvalidRefreshToken(AuthError):
    """
    Refresh token rejected.

    The ``reason`` explains *why* for server-side logs only; ``str()`` always
    yields the same public message so the response cannot act as an oracle.

    :param reason: Internal rejection code (e.g. ``"no_matching_session"``).
    :type reason: str
    """

    public_message = "Invalid refresh token"

    def __init__(self, reason: str = "invalid") -> None:
        super().__init__(self.public_message)
        self.reason = reason


class ConfigurationError(Exception):
    """Fatal misconfiguration detected while wiring the application."""


class StorageError(ServiceError):
    """
    The session or identity backend could not serve the request.

    The original driver exception is chained as ``__cause__`` and is never
    exposed to clients.
    """

    def __init__(self, message: str = "Storage backend unavailable") -> None:
        super().__init__(message)
