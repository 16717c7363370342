"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Load .env in development (no-op when missing)
load_dotenv()

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_DURATION_UNITS: Final[Mapping[str, str]] = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})


def as_bool(value: Any, default: bool = False) -> bool:
    """Coerce a config value to ``bool``; strings follow :func:`env_bool`."""
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    return as_bool(os.getenv(name), default)


def env_float(name: str, default: float) -> float:
    """Parse a float from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return float(val)


def parse_duration(value: str | int | timedelta) -> timedelta:
    """Convert a compact duration such as ``"15m"`` or ``"7d"`` to a timedelta.

    Parameters
    ----------
    value: str | int | timedelta
        ``<int><unit>`` where unit is one of ``s``, ``m``, ``h``, ``d``. A bare
        integer (or an ``int``) is read as seconds. A ``timedelta`` is returned
        unchanged.

    Returns
    -------
    datetime.timedelta
        Parsed duration.

    Raises
    ------
    ValueError
        If the string does not match the expected syntax.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int):
        return timedelta(seconds=value)
    match = _DURATION_RE.match(value)
    if match is None:
        raise ValueError(f"Invalid duration {value!r}; expected e.g. '15m', '7d', '3600'.")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_ACCESS_SECRET: str | None
        Signing key for access tokens. No default: the factory refuses to
        start without it.
    JWT_REFRESH_SECRET: str | None
        Signing key for refresh tokens. Must differ from the access secret.
    JWT_ACCESS_EXPIRES: str
        Access token lifetime (``"15m"`` by default).
    JWT_REFRESH_EXPIRES: str
        Refresh token and session record lifetime (``"7d"`` by default).
    JWT_ALGORITHM: str
        HMAC algorithm used for both token kinds.
    PASSWORD_HASH_METHOD: str
        ``werkzeug.security`` method string for password hashes.
    SESSION_TOKEN_HASH_METHOD: str
        ``werkzeug.security`` method string for stored refresh-token hashes.
    AUTH_STRICT_ROTATION: bool
        When ``True`` a refresh token is single-use even under concurrency.
    SESSION_STORE_BACKEND: str
        ``"sqlalchemy"`` (default) or ``"redis"``.
    REDIS_URL: str | None
        Connection URL used when the Redis backend is selected.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    APP_ENV = "development"
    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_ACCESS_SECRET = os.getenv("JWT_ACCESS_SECRET")
    JWT_REFRESH_SECRET = os.getenv("JWT_REFRESH_SECRET")
    JWT_ACCESS_EXPIRES = os.getenv("JWT_ACCESS_EXPIRES", "15m")
    JWT_REFRESH_EXPIRES = os.getenv("JWT_REFRESH_EXPIRES", "7d")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

    # Flask-JWT-Extended only guards access tokens
    JWT_TOKEN_LOCATION = ["headers"]

    # Hashing
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")
    SESSION_TOKEN_HASH_METHOD = os.getenv("SESSION_TOKEN_HASH_METHOD", "pbkdf2:sha256:100000")

    # Sessions
    AUTH_STRICT_ROTATION = env_bool("AUTH_STRICT_ROTATION", True)
    SESSION_STORE_BACKEND = os.getenv("SESSION_STORE_BACKEND", "sqlalchemy")
    REDIS_URL = os.getenv("REDIS_URL")
    REDIS_SOCKET_TIMEOUT = env_float("REDIS_SOCKET_TIMEOUT", 2.0)

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    SQLALCHEMY_ENGINE_OPTIONS: dict[str, Any] = {"pool_pre_ping": True}

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    APP_ENV = "development"
    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Cheap hash cost factors keep the suite fast.
    """

    APP_ENV = "testing"
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ENGINE_OPTIONS: dict[str, Any] = {}
    JWT_ACCESS_SECRET = os.getenv("JWT_ACCESS_SECRET", "test-access-secret-0123456789abcdef")
    JWT_REFRESH_SECRET = os.getenv("JWT_REFRESH_SECRET", "test-refresh-secret-0123456789abcdef")
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    SESSION_TOKEN_HASH_METHOD = "pbkdf2:sha256:1000"
    SESSION_STORE_BACKEND = "sqlalchemy"
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

    APP_ENV = "production"
    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    SQLALCHEMY_ENGINE_OPTIONS: dict[str, Any] = {
        "pool_pre_ping": True,
        "pool_timeout": 10,
    }


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
