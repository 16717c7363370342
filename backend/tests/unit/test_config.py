"""Unit tests for configuration helpers."""

from __future__ import annotations

from datetime import timedelta

import pytest

from blog_auth.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    get_config,
    parse_duration,
)
from blog_auth.services.auth.dto import AuthTokenConfig


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("15m", timedelta(minutes=15)),
        ("7d", timedelta(days=7)),
        ("2h", timedelta(hours=2)),
        ("30s", timedelta(seconds=30)),
        ("3600", timedelta(seconds=3600)),
        (" 10M ", timedelta(minutes=10)),
        (90, timedelta(seconds=90)),
    ],
)
def test_parse_duration_accepts_compact_forms(raw, expected) -> None:
    assert parse_duration(raw) == expected


def test_parse_duration_passes_timedelta_through() -> None:
    value = timedelta(minutes=5)
    assert parse_duration(value) is value


@pytest.mark.parametrize("raw", ["", "15 minutes", "-5m", "1w", "m15"])
def test_parse_duration_rejects_garbage(raw) -> None:
    with pytest.raises(ValueError, match="Invalid duration"):
        parse_duration(raw)


def test_get_config_follows_app_env(monkeypatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")
    assert get_config() is ProductionConfig

    monkeypatch.setenv("APP_ENV", "Testing")
    assert get_config() is TestingConfig

    monkeypatch.setenv("APP_ENV", "unknown")
    assert get_config() is DevelopmentConfig


def test_env_bool(monkeypatch) -> None:
    monkeypatch.setenv("FLAG_UNDER_TEST", "yes")
    assert env_bool("FLAG_UNDER_TEST") is True

    monkeypatch.setenv("FLAG_UNDER_TEST", "0")
    assert env_bool("FLAG_UNDER_TEST", True) is False

    monkeypatch.delenv("FLAG_UNDER_TEST")
    assert env_bool("FLAG_UNDER_TEST", True) is True


def test_auth_token_config_defaults_and_redacted_repr() -> None:
    cfg = AuthTokenConfig.from_mapping(
        {"JWT_ACCESS_SECRET": "a" * 32, "JWT_REFRESH_SECRET": "b" * 32}
    )

    assert cfg.access_expires == timedelta(minutes=15)
    assert cfg.refresh_expires == timedelta(days=7)
    assert cfg.strict_rotation is True
    assert "a" * 32 not in repr(cfg)


def test_auth_token_config_parses_configured_lifetimes() -> None:
    cfg = AuthTokenConfig.from_mapping(
        {
            "JWT_ACCESS_SECRET": "a" * 32,
            "JWT_REFRESH_SECRET": "b" * 32,
            "JWT_ACCESS_EXPIRES": "5m",
            "JWT_REFRESH_EXPIRES": "1d",
            "AUTH_STRICT_ROTATION": False,
        }
    )

    assert cfg.access_expires == timedelta(minutes=5)
    assert cfg.refresh_expires == timedelta(days=1)
    assert cfg.strict_rotation is False


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("false", False), ("0", False), ("off", False), ("true", True), ("Yes", True), (None, True)],
)
def test_auth_token_config_parses_string_rotation_flag(raw, expected) -> None:
    cfg = AuthTokenConfig.from_mapping(
        {
            "JWT_ACCESS_SECRET": "a" * 32,
            "JWT_REFRESH_SECRET": "b" * 32,
            "AUTH_STRICT_ROTATION": raw,
        }
    )

    assert cfg.strict_rotation is expected
