"""Immutable, structurally comparable model types."""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError, create_model

from .builder import resolve_fields, stamp_version
from .config import get_settings
from .definition import ModelDefinition, takes_resolved_fields
from .equality import Comparable, fields_equal, structural_key
from .exceptions import ModelDefinitionError, ReadOnlyPropertyError, UnknownFieldError
from .registry import VersionRegistry, registry as default_registry
from .types import VERSION_FIELDS, DefaultProvider, FieldMap, MethodMap

logger = logging.getLogger(__name__)


class Model(BaseModel, Comparable):
    """Root of every model type.

    Types are produced by :func:`define` and :func:`extend`; each one is a frozen
    pydantic model whose fields accept any value. Instances are built from a
    property mapping (or keywords) plus an optional backup supplying fallback
    values, and can never be changed afterwards. ``update`` derives a new
    instance instead.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
        protected_namespaces=(),
    )

    field_names: ClassVar[tuple[str, ...]] = ()
    default_fields: ClassVar[Mapping[str, DefaultProvider]] = MappingProxyType({})
    contextual_defaults: ClassVar[frozenset[str]] = frozenset()
    method_names: ClassVar[tuple[str, ...]] = ()
    methods: ClassVar[Mapping[str, Callable[..., Any]]] = MappingProxyType({})
    parent: ClassVar[type[Model] | None] = None
    versioned: ClassVar[bool] = False
    version: ClassVar[int | None] = None
    version_registry: ClassVar[VersionRegistry | None] = None

    def __init__(self, props: FieldMap | None = None, backup: Any = None, /, **fields: Any) -> None:
        model = type(self)
        supplied = {**(props or {}), **fields}
        values = resolve_fields(model, supplied, backup)
        stamp = stamp_version(model, supplied, backup) if model.versioned else None
        super().__init__(**values)
        if stamp is not None:
            identity, version = stamp
            BaseModel.__setattr__(self, "_id", identity)
            BaseModel.__setattr__(self, "_version", version)

    def __setattr__(self, name: str, value: Any) -> None:
        raise ReadOnlyPropertyError(name, type(self).__name__)

    def __delattr__(self, name: str) -> None:
        raise ReadOnlyPropertyError(name, type(self).__name__)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Comparable):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((type(self), *(structural_key(getattr(self, name)) for name in self.field_names)))

    def update(self, props: FieldMap | None = None, /, **fields: Any) -> Model:
        """Return a new instance with ``props`` applied on top of this one."""

        return type(self)(props, self, **fields)

    def model_copy(self, *, update: Mapping[str, Any] | None = None, deep: bool = False) -> Model:
        """Copy through the builder so versioned copies get a fresh ``_version``."""

        source = copy.deepcopy(self) if deep else self
        return source.update(update or {})

    @classmethod
    def model_construct(cls, _fields_set: set[str] | None = None, **values: Any) -> Model:
        return cls(values)

    def equals(self, other: Any, only: Iterable[str] | str | None = None) -> bool:
        """Structural equality, optionally restricted to the fields in ``only``.

        Without ``only`` the other value must be of exactly the same type, and
        version metadata is ignored. With ``only`` any model carrying the named
        fields can be compared.
        """
        names = self._comparison_names(only)
        if self is other:
            return True
        if names is None:
            if type(other) is not type(self):
                return False
            return fields_equal(self, other, self.field_names)
        if not isinstance(other, Model):
            return False
        if not all(other._declares(name) for name in names):
            return False
        return fields_equal(self, other, names)

    def _declares(self, name: str) -> bool:
        return name in self.field_names or (self.versioned and name in VERSION_FIELDS)

    def _comparison_names(self, only: Iterable[str] | str | None) -> tuple[str, ...] | None:
        if only is None:
            return None
        names = (only,) if isinstance(only, str) else tuple(only)
        for name in names:
            if not self._declares(name):
                raise UnknownFieldError(name)
        return names

    @staticmethod
    def define(
        fields: FieldMap | None = None,
        methods: MethodMap | None = None,
        **options: Any,
    ) -> type[Model]:
        return define(fields, methods, **options)

    @staticmethod
    def extend(
        parent: type[Model],
        fields: FieldMap | None = None,
        methods: MethodMap | None = None,
        **options: Any,
    ) -> type[Model]:
        return extend(parent, fields, methods, **options)

    @staticmethod
    def is_instance(instance: Any, model: type[Model]) -> bool:
        return is_instance(instance, model)

    @staticmethod
    def mutable_copy(instance: Model) -> dict[str, Any]:
        return mutable_copy(instance)


class VersionedModel(Model):
    """Base for versioned types; instances carry ``_id`` and ``_version``."""

    _id: Any = PrivateAttr(default=None)
    _version: int | None = PrivateAttr(default=None)

    def __repr_args__(self) -> Iterable[tuple[str | None, Any]]:
        yield from super().__repr_args__()
        yield "_id", self._id
        yield "_version", self._version


def _validate_definition(**values: Any) -> ModelDefinition:
    try:
        return ModelDefinition(**values)
    except ValidationError as exc:
        raise ModelDefinitionError(str(exc)) from exc


def _build(
    definition: ModelDefinition,
    *,
    parent: type[Model],
    registry: VersionRegistry | None,
    share_fixed_defaults: bool | None,
) -> type[Model]:
    if share_fixed_defaults is None:
        share_fixed_defaults = get_settings().share_fixed_defaults
    providers = definition.default_providers(share_fixed=share_fixed_defaults)
    base = VersionedModel if definition.versioned else Model
    model = create_model(
        definition.name,
        __base__=base,
        **{name: (Any, ...) for name in providers},
    )
    for name, method in definition.method_table.items():
        setattr(model, name, method)

    model.field_names = tuple(providers)
    model.default_fields = MappingProxyType(providers)
    model.contextual_defaults = frozenset(
        name for name, provider in providers.items() if takes_resolved_fields(provider)
    )
    model.method_names = tuple(definition.method_table)
    model.methods = MappingProxyType(dict(definition.method_table))
    model.parent = parent
    model.versioned = definition.versioned
    if definition.versioned:
        model.version_registry = registry or default_registry
        model.version = model.version_registry.next_tag()

    logger.debug(
        "Defined model %s (parent=%s, fields=%s, methods=%s, version=%s)",
        definition.name,
        parent.__name__,
        model.field_names,
        model.method_names,
        model.version,
    )
    return model


def define(
    fields: FieldMap | None = None,
    methods: MethodMap | None = None,
    *,
    name: str = "AnonymousModel",
    versioned: bool = False,
    registry: VersionRegistry | None = None,
    share_fixed_defaults: bool | None = None,
) -> type[Model]:
    """Create a new model type.

    ``fields`` maps each field name to its default. Callables (including
    classes such as ``list``) are invoked on every construction that does not
    supply the field; a callable with one required positional parameter receives
    a read-only view of the fields resolved so far. Any other value is returned
    as-is, so the same object is shared by every instance unless
    ``share_fixed_defaults`` is false.

    ``methods`` maps method names to plain functions taking the instance as
    ``self``.
    """

    definition = _validate_definition(
        name=name,
        field_defaults=dict(fields or {}),
        method_table=dict(methods or {}),
        versioned=versioned,
    )
    return _build(
        definition,
        parent=Model,
        registry=registry,
        share_fixed_defaults=share_fixed_defaults,
    )


def extend(
    parent: type[Model],
    fields: FieldMap | None = None,
    methods: MethodMap | None = None,
    *,
    name: str | None = None,
    share_fixed_defaults: bool | None = None,
) -> type[Model]:
    """Create a model type that inherits the fields and methods of ``parent``.

    Parent entries come first and keep their position when overridden. The new
    type is versioned when the parent is, with a version tag of its own.
    """

    if not (isinstance(parent, type) and issubclass(parent, Model)):
        msg = f"Cannot extend {parent!r}: not a model type"
        raise ModelDefinitionError(msg)
    definition = _validate_definition(
        name=name or f"Extended{parent.__name__}",
        field_defaults={**parent.default_fields, **(fields or {})},
        method_table={**parent.methods, **(methods or {})},
        versioned=parent.versioned,
    )
    return _build(
        definition,
        parent=parent,
        registry=parent.version_registry,
        share_fixed_defaults=share_fixed_defaults,
    )


def is_instance(instance: Any, model: type[Model]) -> bool:
    """True when ``model`` is the instance's own type or one of its ancestors."""

    if not isinstance(instance, Model):
        return False
    current: type[Model] | None = type(instance)
    while current is not None:
        if current is model:
            return True
        current = current.parent
    return False


def mutable_copy(instance: Model) -> dict[str, Any]:
    """Plain dict of the declared fields; values are shared, not copied."""

    return {name: getattr(instance, name) for name in instance.field_names}


def lineage(model: type[Model]) -> tuple[type[Model], ...]:
    """The model followed by each of its ancestors, ending with :class:`Model`."""

    chain: list[type[Model]] = []
    current: type[Model] | None = model
    while current is not None:
        chain.append(current)
        current = current.parent
    return tuple(chain)


__all__ = [
    "Model",
    "VersionedModel",
    "define",
    "extend",
    "is_instance",
    "lineage",
    "mutable_copy",
]
