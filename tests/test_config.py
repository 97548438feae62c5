from __future__ import annotations

import logging

import pytest

from mchammer import ConfigurationError, Settings, VersionRegistry, get_settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "MCHAMMER_ENV",
        "MCHAMMER_LOG_LEVEL",
        "MCHAMMER_COUNTER_START",
        "MCHAMMER_SHARE_FIXED_DEFAULTS",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.environment == "development"
    assert settings.log_level_value == logging.WARNING
    assert settings.counter_start == 1
    assert settings.share_fixed_defaults is True


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MCHAMMER_ENV", "test")
    monkeypatch.setenv("MCHAMMER_LOG_LEVEL", "debug")
    monkeypatch.setenv("MCHAMMER_COUNTER_START", "100")
    monkeypatch.setenv("MCHAMMER_SHARE_FIXED_DEFAULTS", "no")

    settings = Settings.from_env()

    assert settings.environment == "test"
    assert settings.log_level_value == logging.DEBUG
    assert settings.counter_start == 100
    assert settings.share_fixed_defaults is False


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("MCHAMMER_COUNTER_START", "many"),
        ("MCHAMMER_COUNTER_START", "-1"),
        ("MCHAMMER_LOG_LEVEL", "chatty"),
    ],
)
def test_invalid_settings(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError):
        Settings.from_env()


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MCHAMMER_ENV", "cached")

    assert get_settings() is get_settings()
    assert get_settings().environment == "cached"


def test_registry_from_settings() -> None:
    counters = VersionRegistry.from_settings(Settings(counter_start=50))

    tag = counters.next_tag()
    assert tag == 50
    assert counters.next_identity(tag) == 50
