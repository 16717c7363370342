"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    AuthSessionSchema,
    LoginSchema,
    RefreshSchema,
    RevocationSchema,
    UserProfileSchema,
)

__all__ = [
    "AuthSessionSchema",
    "LoginSchema",
    "RefreshSchema",
    "RevocationSchema",
    "UserProfileSchema",
]
