"""Lightweight engine configuration loader."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from .exceptions import ConfigurationError


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ConfigurationError(msg) from exc


@dataclass(frozen=True)
class Settings:
    """Immutable configuration sourced from environment variables."""

    environment: str = "development"
    log_level: str = "WARNING"
    counter_start: int = 1
    share_fixed_defaults: bool = True

    def __post_init__(self) -> None:
        if self.counter_start < 0:
            msg = f"counter_start must be >= 0, got {self.counter_start}"
            raise ConfigurationError(msg)
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            msg = f"Unknown log level {self.log_level!r}"
            raise ConfigurationError(msg)

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            environment=os.getenv("MCHAMMER_ENV", cls.environment),
            log_level=os.getenv("MCHAMMER_LOG_LEVEL", cls.log_level),
            counter_start=_env_int("MCHAMMER_COUNTER_START", cls.counter_start),
            share_fixed_defaults=_env_bool("MCHAMMER_SHARE_FIXED_DEFAULTS", True),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the settings resolved at first use."""

    return Settings.from_env()


__all__ = ["Settings", "get_settings"]
