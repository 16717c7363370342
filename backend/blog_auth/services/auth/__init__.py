from .dto import AuthSessionOut, AuthTokenConfig, LoginIn, LogoutIn, RefreshIn, RevocationOut
from .service import AuthService

__all__ = [
    "AuthService",
    "AuthTokenConfig",
    "AuthSessionOut",
    "LoginIn",
    "LogoutIn",
    "RefreshIn",
    "RevocationOut",
]
