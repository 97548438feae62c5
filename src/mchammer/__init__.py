"""Immutable, structurally comparable record types."""

from .config import Settings, get_settings
from .definition import FixedDefault, ModelDefinition
from .equality import Comparable, values_equal
from .exceptions import (
    ConfigurationError,
    ModelDefinitionError,
    ModelError,
    ReadOnlyAssignmentError,
    ReadOnlyPropertyError,
    UnknownFieldError,
    UnknownPropertyError,
)
from .model import Model, VersionedModel, define, extend, is_instance, lineage, mutable_copy
from .registry import TagUsage, VersionRegistry, registry
from .types import UNSET

__all__ = [
    "UNSET",
    "Comparable",
    "ConfigurationError",
    "FixedDefault",
    "Model",
    "ModelDefinition",
    "ModelDefinitionError",
    "ModelError",
    "ReadOnlyAssignmentError",
    "ReadOnlyPropertyError",
    "Settings",
    "TagUsage",
    "UnknownFieldError",
    "UnknownPropertyError",
    "VersionRegistry",
    "VersionedModel",
    "define",
    "extend",
    "get_settings",
    "is_instance",
    "lineage",
    "mutable_copy",
    "registry",
    "values_equal",
]
