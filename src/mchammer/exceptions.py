"""Errors raised by the model engine."""

from __future__ import annotations


class ModelError(RuntimeError):
    """Base class for model engine failures."""


class ModelDefinitionError(ModelError):
    """Raised when a model definition or extension is invalid."""


class UnknownPropertyError(ModelError, TypeError):
    """Raised when an instance is constructed with an undeclared property."""

    def __init__(self, name: str) -> None:
        super().__init__(f'Unknown property "{name}"')
        self.name = name


class UnknownFieldError(ModelError, ValueError):
    """Raised when an equality check names a field the model does not declare."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown field '{name}'")
        self.name = name


class ReadOnlyPropertyError(ModelError, TypeError):
    """Raised when code attempts to write to or delete a frozen attribute."""

    def __init__(self, name: str, owner: str) -> None:
        super().__init__(f"Cannot assign to read only property '{name}' of {owner}")
        self.name = name
        self.owner = owner


ReadOnlyAssignmentError = ReadOnlyPropertyError


class ConfigurationError(ModelError, ValueError):
    """Raised when environment settings cannot be parsed."""


__all__ = [
    "ConfigurationError",
    "ModelDefinitionError",
    "ModelError",
    "ReadOnlyAssignmentError",
    "ReadOnlyPropertyError",
    "UnknownFieldError",
    "UnknownPropertyError",
]
