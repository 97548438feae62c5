from __future__ import annotations

import pytest
from pydantic import ValidationError

from mchammer import FixedDefault, ModelDefinition, ModelDefinitionError, define, extend
from mchammer.definition import as_default_provider, takes_resolved_fields


@pytest.mark.parametrize(
    "field_name",
    ["_hidden", "update", "equals", "field_names", "fields", "model_dump", "not-valid", "1st"],
)
def test_rejects_invalid_field_names(field_name: str) -> None:
    with pytest.raises(ModelDefinitionError):
        define({field_name: 1})


def test_rejects_invalid_method_names() -> None:
    with pytest.raises(ModelDefinitionError):
        define(methods={"equals": lambda self, other: True})


def test_rejects_non_callable_methods() -> None:
    with pytest.raises(ModelDefinitionError):
        define(methods={"stuff": 3})


def test_rejects_names_used_for_fields_and_methods() -> None:
    with pytest.raises(ModelDefinitionError, match="both field and method"):
        define({"stuff": 1}, {"stuff": lambda self: 2})


def test_rejects_invalid_model_names() -> None:
    with pytest.raises(ModelDefinitionError):
        define({"a": 1}, name="not a name")


def test_extend_requires_a_model_type() -> None:
    with pytest.raises(ModelDefinitionError, match="not a model type"):
        extend(dict, {"a": 1})


def test_definition_record_is_frozen() -> None:
    definition = ModelDefinition(name="Foo", field_defaults={"a": 1})

    assert definition.versioned is False
    with pytest.raises(ValidationError):
        definition.name = "Bar"  # type: ignore[misc]


def test_fixed_defaults_wrap_values() -> None:
    marker = object()
    provider = as_default_provider(marker)

    assert isinstance(provider, FixedDefault)
    assert provider() is marker
    assert as_default_provider(list) is list


def test_copying_fixed_defaults() -> None:
    provider = as_default_provider({"a": [1]}, share=False)

    assert provider() == {"a": [1]}
    assert provider() is not provider()


def test_provider_arity_detection() -> None:
    assert not takes_resolved_fields(lambda: 1)
    assert takes_resolved_fields(lambda resolved: 1)
    assert not takes_resolved_fields(lambda resolved=None: 1)
    assert not takes_resolved_fields(list)
    assert not takes_resolved_fields(dict)
    assert not takes_resolved_fields(FixedDefault(1))


def test_contextual_defaults_are_recorded_on_the_type() -> None:
    Foo = define({"a": 1, "b": lambda resolved: resolved["a"]})

    assert Foo.contextual_defaults == frozenset({"b"})
