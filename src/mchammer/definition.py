"""Validated input records for model definitions and default providers."""

from __future__ import annotations

import copy
import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .types import DefaultProvider

ENGINE_ATTRIBUTES = frozenset(
    {
        "contextual_defaults",
        "default_fields",
        "define",
        "equals",
        "extend",
        "field_names",
        "fields",
        "is_instance",
        "method_names",
        "methods",
        "mutable_copy",
        "parent",
        "update",
        "version",
        "version_registry",
        "versioned",
    }
)
RESERVED_NAMES = ENGINE_ATTRIBUTES | frozenset(dir(BaseModel))


@dataclass(frozen=True, slots=True)
class FixedDefault:
    """Zero-argument provider wrapping a non-callable default value.

    The same object is returned to every instance unless ``copy_per_instance``
    is set, in which case each call returns a deep copy.
    """

    value: Any
    copy_per_instance: bool = False

    def __call__(self) -> Any:
        if self.copy_per_instance:
            return copy.deepcopy(self.value)
        return self.value


def as_default_provider(value: Any, *, share: bool = True) -> DefaultProvider:
    """Return ``value`` itself when callable, otherwise wrap it in a FixedDefault."""

    if callable(value):
        return value
    return FixedDefault(value, copy_per_instance=not share)


def takes_resolved_fields(provider: DefaultProvider) -> bool:
    """True when the provider declares exactly one required positional parameter."""

    if isinstance(provider, FixedDefault):
        return False
    try:
        signature = inspect.signature(provider)
    except (TypeError, ValueError):
        return False
    positional = [
        param
        for param in signature.parameters.values()
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    required = [param for param in positional if param.default is inspect.Parameter.empty]
    return len(required) == 1


def _check_member_name(kind: str, name: str) -> None:
    if not name.isidentifier():
        msg = f"{kind} name {name!r} is not a valid identifier"
        raise ValueError(msg)
    if name.startswith("_"):
        msg = f"{kind} name {name!r} must not start with an underscore"
        raise ValueError(msg)
    if name in RESERVED_NAMES:
        msg = f"{kind} name {name!r} is reserved by the model engine"
        raise ValueError(msg)


class ModelDefinition(BaseModel):
    """Everything needed to generate a model type."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    name: Annotated[str, Field(min_length=1)] = "AnonymousModel"
    field_defaults: dict[str, Any] = Field(default_factory=dict)
    method_table: dict[str, Callable[..., Any]] = Field(default_factory=dict)
    versioned: bool = False

    @field_validator("name")
    @classmethod
    def ensure_identifier(cls, value: str) -> str:
        if not value.isidentifier():
            msg = f"Model name {value!r} is not a valid identifier"
            raise ValueError(msg)
        return value

    @field_validator("field_defaults")
    @classmethod
    def ensure_field_names(cls, value: dict[str, Any]) -> dict[str, Any]:
        for name in value:
            _check_member_name("Field", name)
        return value

    @field_validator("method_table")
    @classmethod
    def ensure_method_names(cls, value: dict[str, Callable[..., Any]]) -> dict[str, Callable[..., Any]]:
        for name in value:
            _check_member_name("Method", name)
        return value

    @model_validator(mode="after")
    def ensure_disjoint(self) -> ModelDefinition:
        clashes = sorted(set(self.field_defaults) & set(self.method_table))
        if clashes:
            msg = "Names declared as both field and method: " + ", ".join(clashes)
            raise ValueError(msg)
        return self

    def default_providers(self, *, share_fixed: bool = True) -> dict[str, DefaultProvider]:
        return {
            name: as_default_provider(value, share=share_fixed)
            for name, value in self.field_defaults.items()
        }


__all__ = [
    "ENGINE_ATTRIBUTES",
    "RESERVED_NAMES",
    "FixedDefault",
    "ModelDefinition",
    "as_default_provider",
    "takes_resolved_fields",
]
