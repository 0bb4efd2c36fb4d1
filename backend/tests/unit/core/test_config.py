"""Tests for environment-driven configuration selection."""

from __future__ import annotations

import pytest

from fleetbook.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    get_config,
)
from fleetbook.infra import build_token_provider


@pytest.mark.parametrize(
    ("value", "expected"),
    [("production", ProductionConfig), ("Testing", TestingConfig), ("bogus", DevelopmentConfig)],
)
def test_get_config_reads_app_env(monkeypatch, value, expected):
    monkeypatch.setenv("APP_ENV", value)
    assert get_config() is expected


def test_env_bool(monkeypatch):
    monkeypatch.setenv("FLAG", "Yes")
    assert env_bool("FLAG") is True
    monkeypatch.setenv("FLAG", "0")
    assert env_bool("FLAG", True) is False
    monkeypatch.delenv("FLAG")
    assert env_bool("FLAG", True) is True


def test_shared_jwt_secret_is_refused():
    config = {"JWT_ACCESS_SECRET": "same", "JWT_REFRESH_SECRET": "same"}
    with pytest.raises(RuntimeError):
        build_token_provider(config)
