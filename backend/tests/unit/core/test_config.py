"""Unit tests for environment-driven configuration helpers."""

from __future__ import annotations

import pytest
from commerce_auth.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    get_config,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("Yes", True), (" on ", True), ("0", False), ("nope", False)],
)
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("FLAG_UNDER_TEST", raw)
    assert env_bool("FLAG_UNDER_TEST") is expected


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("FLAG_UNDER_TEST", raising=False)
    assert env_bool("FLAG_UNDER_TEST", True) is True


def test_env_int(monkeypatch):
    monkeypatch.setenv("INT_UNDER_TEST", "42")
    assert env_int("INT_UNDER_TEST", 7) == 42
    monkeypatch.setenv("INT_UNDER_TEST", "  ")
    assert env_int("INT_UNDER_TEST", 7) == 7
    monkeypatch.delenv("INT_UNDER_TEST")
    assert env_int("INT_UNDER_TEST", 7) == 7


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("testing", TestingConfig),
        ("PRODUCTION", ProductionConfig),
        ("development", DevelopmentConfig),
        ("staging", DevelopmentConfig),
    ],
)
def test_get_config(monkeypatch, name, expected):
    monkeypatch.setenv("APP_ENV", name)
    assert get_config() is expected


def test_auth_defaults():
    assert TestingConfig.ACCESS_TOKEN_TTL_SECONDS == 3600
    assert TestingConfig.REFRESH_TOKEN_TTL_SECONDS == 7 * 24 * 3600
    assert TestingConfig.LOGIN_RATE_LIMIT_MAX_ATTEMPTS == 5
    assert TestingConfig.LOGIN_RATE_LIMIT_WINDOW_MINUTES == 15
    assert TestingConfig.JWT_ALGORITHM == "RS256"
    assert TestingConfig.REDIS_URL is None
