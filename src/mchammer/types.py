"""Shared type aliases and sentinels for the model engine."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, Final


class _Unset(Enum):
    """Marker for a property that was not supplied."""

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset.UNSET

DefaultProvider = Callable[..., Any]
FieldMap = Mapping[str, Any]
MethodMap = Mapping[str, Callable[..., Any]]

VERSION_FIELDS: Final = ("_id", "_version")


def is_absent(value: object) -> bool:
    """Return True for values that stand for "nothing" (``None`` or ``UNSET``)."""

    return value is None or value is UNSET


__all__ = [
    "UNSET",
    "VERSION_FIELDS",
    "DefaultProvider",
    "FieldMap",
    "MethodMap",
    "is_absent",
]
