"""Shared CLI dependency helpers."""

from __future__ import annotations

import logging
from importlib import import_module
from typing import Any

from mchammer.config import Settings, get_settings


def configure_logging(settings: Settings, *, verbose: bool = False) -> None:
    """Attach a stderr handler at the configured level (DEBUG when verbose)."""

    level = logging.DEBUG if verbose else settings.log_level_value
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("mchammer").setLevel(level)


def load_target(target: str) -> Any:
    """Import ``package.module:attribute`` and return the attribute."""

    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        msg = f"Target {target!r} must look like 'package.module:attribute'"
        raise ValueError(msg)
    module = import_module(module_name)
    value: Any = module
    for part in attribute.split("."):
        value = getattr(value, part)
    return value


def reset_settings() -> None:
    """Clear the cached settings (useful for tests)."""

    get_settings.cache_clear()
