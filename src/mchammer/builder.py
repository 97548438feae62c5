"""Field resolution and version stamping for new instances."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .exceptions import ModelDefinitionError, UnknownPropertyError
from .types import UNSET

# (avoid circular import)
if TYPE_CHECKING:
    from .model import Model


def lookup(source: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an object, returning UNSET when missing."""

    if source is None:
        return UNSET
    if isinstance(source, Mapping):
        return source.get(name, UNSET)
    return getattr(source, name, UNSET)


def check_properties(model: type[Model], props: Mapping[str, Any]) -> None:
    """Reject any supplied key the model does not declare."""

    for key in props:
        if key in model.default_fields:
            continue
        if model.versioned and key == "_id":
            continue
        raise UnknownPropertyError(key)


def resolve_fields(
    model: type[Model],
    props: Mapping[str, Any],
    backup: Any = None,
) -> dict[str, Any]:
    """Resolve every declared field: explicit value, then backup, then default."""

    check_properties(model, props)
    resolved: dict[str, Any] = {}
    for name in model.field_names:
        value = props.get(name, UNSET)
        if value is UNSET:
            value = lookup(backup, name)
        if value is UNSET:
            provider = model.default_fields[name]
            if name in model.contextual_defaults:
                value = provider(MappingProxyType(resolved))
            else:
                value = provider()
        resolved[name] = value
    return resolved


def stamp_version(model: type[Model], props: Mapping[str, Any], backup: Any = None) -> tuple[Any, int]:
    """Return the ``(_id, _version)`` pair for a new instance of a versioned model."""

    registry = model.version_registry
    tag = model.version
    if registry is None or tag is None:
        msg = f"{model.__name__} is not a versioned model"
        raise ModelDefinitionError(msg)
    identity = props.get("_id", UNSET)
    if identity is UNSET:
        identity = lookup(backup, "_id")
    if identity is UNSET or identity is None:
        identity = registry.next_identity(tag)
    return identity, registry.next_version(tag)


__all__ = ["check_properties", "lookup", "resolve_fields", "stamp_version"]
