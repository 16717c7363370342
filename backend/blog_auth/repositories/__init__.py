"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from blog_auth.repositories.base import BaseRepository
from blog_auth.repositories.user import UserRepository
from blog_auth.repositories.user_session import UserSessionRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "UserSessionRepository",
]
