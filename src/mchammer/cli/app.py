"""Typer CLI for inspecting model types."""

from __future__ import annotations

import typer

from mchammer.definition import FixedDefault
from mchammer.model import Model, lineage
from mchammer.registry import registry

from .deps import configure_logging, get_settings, load_target

app = typer.Typer(help="mchammer model inspection utilities")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    configure_logging(get_settings(), verbose=verbose)


def _describe_default(provider: object) -> str:
    if isinstance(provider, FixedDefault):
        suffix = " (copied per instance)" if provider.copy_per_instance else ""
        return repr(provider.value) + suffix
    name = getattr(provider, "__qualname__", None) or type(provider).__name__
    return f"<generated by {name}>"


@app.command("show-settings")
def show_settings() -> None:
    """Print the resolved settings."""

    settings = get_settings()
    typer.echo("Environment:\t" + settings.environment)
    typer.echo("Log level:\t" + settings.log_level.upper())
    typer.echo(f"Counter start:\t{settings.counter_start}")
    typer.echo(f"Share fixed defaults:\t{settings.share_fixed_defaults}")


@app.command("describe")
def describe(target: str) -> None:
    """Describe the model type found at package.module:attribute."""

    try:
        model = load_target(target)
    except (ImportError, AttributeError, ValueError) as exc:
        typer.echo(f"Unable to load {target}: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if not (isinstance(model, type) and issubclass(model, Model)):
        typer.echo(f"{target} is not a model type", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Model: {model.__name__}")
    if model.field_names:
        typer.echo("Fields:")
        for name in model.field_names:
            typer.echo(f"  {name} = {_describe_default(model.default_fields[name])}")
    else:
        typer.echo("Fields: (none)")
    typer.echo("Methods: " + (", ".join(model.method_names) if model.method_names else "(none)"))
    if model.versioned and model.version is not None:
        usage = (model.version_registry or registry).describe(model.version)
        typer.echo(
            f"Versioned: yes (tag {usage.tag}, {usage.identities} identities, "
            f"{usage.versions} versions issued)"
        )
    else:
        typer.echo("Versioned: no")
    typer.echo("Lineage: " + " -> ".join(item.__name__ for item in lineage(model)))
