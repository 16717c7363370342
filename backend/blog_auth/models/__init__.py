from blog_auth.models.user import Role, User
from blog_auth.models.user_session import UserSession

__all__ = [
    "Role",
    "User",
    "UserSession",
]
