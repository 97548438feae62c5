"""Structural equality for model values."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterable, Mapping
from typing import Any

from .types import is_absent


class Comparable(ABC):
    """Values that know how to compare themselves structurally.

    Model instances implement this. Other classes can opt in with
    ``Comparable.register`` as long as they provide ``equals``.
    """

    @abstractmethod
    def equals(self, other: Any, only: Iterable[str] | str | None = None) -> bool: ...


def values_equal(a: Any, b: Any) -> bool:
    """Recursively compare two field values."""

    if a is b:
        return True

    if is_absent(a) or is_absent(b):
        return is_absent(a) and is_absent(b)

    if type(a) is not type(b):
        return False

    if isinstance(a, Comparable):
        return a.equals(b)
    if isinstance(b, Comparable):
        return b.equals(a)

    if isinstance(a, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(values_equal(x, y) for x, y in zip(a, b, strict=True))

    if isinstance(a, Mapping):
        if a.keys() != b.keys():
            return False
        return all(values_equal(a[key], b[key]) for key in a)

    return bool(a == b)


def structural_key(value: Any) -> Hashable:
    """Hashable stand-in for ``value`` that agrees with ``values_equal``.

    Values that ``values_equal`` treats as equal always produce equal keys.
    Unhashable leaves and comparables without a hash of their own collapse to
    their type.
    """

    if is_absent(value):
        return None
    if isinstance(value, (list, tuple)):
        return type(value), tuple(structural_key(item) for item in value)
    if isinstance(value, Mapping):
        return type(value), frozenset((key, structural_key(item)) for key, item in value.items())
    if isinstance(value, Comparable) and type(value).__hash__ in (None, object.__hash__):
        return type(value)
    try:
        hash(value)
    except TypeError:
        return type(value)
    return value


def fields_equal(a: Any, b: Any, names: Iterable[str]) -> bool:
    """Compare the named attributes of two objects with ``values_equal``."""

    return all(values_equal(getattr(a, name), getattr(b, name)) for name in names)


__all__ = ["Comparable", "fields_equal", "structural_key", "values_equal"]
