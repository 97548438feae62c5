from __future__ import annotations

import sys
import types

import pytest
from typer.testing import CliRunner

from mchammer import VersionRegistry, define, extend
from mchammer.cli.app import app


@pytest.fixture
def sample_module(monkeypatch: pytest.MonkeyPatch) -> types.ModuleType:
    module = types.ModuleType("sample_models")
    module.Order = define(
        {"qty": 1, "tags": list},
        {"total": lambda self: self.qty},
        name="Order",
    )
    module.RushOrder = extend(module.Order, {"priority": "high"}, name="RushOrder")
    module.Account = define(
        {"balance": 0},
        versioned=True,
        registry=VersionRegistry(),
        name="Account",
    )
    module.not_a_model = 3
    monkeypatch.setitem(sys.modules, "sample_models", module)
    return module


def test_cli_show_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MCHAMMER_ENV", "test")
    runner = CliRunner()

    result = runner.invoke(app, ["show-settings"])

    assert result.exit_code == 0
    assert "Environment:\ttest" in result.stdout
    assert "Counter start:\t" in result.stdout


def test_cli_verbose_flag() -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["--verbose", "show-settings"])

    assert result.exit_code == 0


def test_cli_describe_model(sample_module: types.ModuleType) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["describe", "sample_models:Order"])

    assert result.exit_code == 0
    assert "Model: Order" in result.stdout
    assert "qty = 1" in result.stdout
    assert "tags = <generated by list>" in result.stdout
    assert "Methods: total" in result.stdout
    assert "Versioned: no" in result.stdout
    assert "Lineage: Order -> Model" in result.stdout


def test_cli_describe_extension(sample_module: types.ModuleType) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["describe", "sample_models:RushOrder"])

    assert result.exit_code == 0
    assert "priority = 'high'" in result.stdout
    assert "Lineage: RushOrder -> Order -> Model" in result.stdout


def test_cli_describe_versioned_model(sample_module: types.ModuleType) -> None:
    sample_module.Account().update(balance=5)
    runner = CliRunner()

    result = runner.invoke(app, ["describe", "sample_models:Account"])

    assert result.exit_code == 0
    assert "Versioned: yes" in result.stdout
    assert "1 identities, 2 versions issued" in result.stdout


@pytest.mark.parametrize(
    "target",
    ["sample_models:not_a_model", "sample_models:Missing", "no_such_module_here:Foo", "no-colon"],
)
def test_cli_describe_rejects_bad_targets(sample_module: types.ModuleType, target: str) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["describe", target])

    assert result.exit_code == 1
    assert target in result.output
