from .session_store import SQLAlchemySessionStore
from .user_directory import SQLAlchemyUserDirectory

__all__ = ["SQLAlchemySessionStore", "SQLAlchemyUserDirectory"]
