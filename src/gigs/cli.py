# src/gigs/cli.py
"""GIGS Command Line Interface.

Entry point for the gigs CLI tool.
"""

import json
import math
from pathlib import Path

import typer
from pydantic import ValidationError

from gigs import __version__
from gigs.contracts.enums import Capability
from gigs.contracts.errors import FormatError
from gigs.core.config import GigsSettings, load_settings
from gigs.core.logging import configure_logging
from gigs.core.tabular import load_table, regroup
from gigs.plugins import CapabilityRegistry, FactoryScope

app = typer.Typer(
    name="gigs",
    help="GIGS: Geospatial Integrity of Geoscience Software conformance tools.",
    no_args_is_help=True,
)

COLUMN_TYPES: dict[str, type] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"gigs version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """GIGS: Geospatial Integrity of Geoscience Software conformance tools."""
    pass


def _parse_types(spec: str) -> list[type]:
    names = [name.strip() for name in spec.split(",")]
    unknown = [name for name in names if name not in COLUMN_TYPES]
    if unknown:
        typer.echo(f"Error: Unknown column type(s): {', '.join(unknown)}", err=True)
        typer.echo(f"Valid types: {', '.join(COLUMN_TYPES)}", err=True)
        raise typer.Exit(1)
    return [COLUMN_TYPES[name] for name in names]


def _json_cell(value: object) -> object:
    # NULL doubles load as NaN, which JSON cannot represent
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def _load_settings_or_exit(settings: str | None) -> GigsSettings:
    try:
        return load_settings(Path(settings) if settings is not None else None)
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None


@app.command()
def table(
    path: Path = typer.Argument(..., help="Dataset file to load."),
    types: str = typer.Option(
        ...,
        "--types",
        "-t",
        help="Comma-separated column types (str, int, float, bool).",
    ),
    pattern: list[str] | None = typer.Option(
        None,
        "--pattern",
        "-p",
        help="Regroup rows whose names differ by this regular expression (repeatable).",
    ),
    code_column: int = typer.Option(0, "--code-column", help="Column of codes when regrouping."),
    name_column: int = typer.Option(1, "--name-column", help="Column of names when regrouping."),
    constant: list[int] | None = typer.Option(
        None,
        "--constant",
        "-c",
        help="Column that must be equal across a regrouped run (repeatable).",
    ),
) -> None:
    """Load a dataset file and print its rows as JSON lines."""
    column_types = _parse_types(types)
    try:
        data = load_table(path, column_types)
    except FormatError as e:
        typer.echo(f"Format error: {e}", err=True)
        raise typer.Exit(1) from None
    except OSError as e:
        typer.echo(f"Error: Cannot read {path}: {e}", err=True)
        raise typer.Exit(1) from None

    if pattern:
        regroup(data, code_column, constant or [], name_column, *pattern)

    for row in data.rows:
        cells = [_json_cell(value) for value in row]
        typer.echo(json.dumps(cells, ensure_ascii=False, allow_nan=False))


@app.command()
def factories(
    authority: str | None = typer.Option(
        None,
        "--authority",
        "-a",
        help="Target authority (default: from settings, else EPSG).",
    ),
    capability: list[str] | None = typer.Option(
        None,
        "--capability",
        "-c",
        help="Only list this capability, e.g. datum_authority_factory (repeatable).",
    ),
    settings: str | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
) -> None:
    """List the factories that would be bound for a conformance run."""
    try:
        wanted = {Capability.from_tag(tag) for tag in capability or []}
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        typer.echo(f"Valid capabilities: {', '.join(c.tag for c in Capability)}", err=True)
        raise typer.Exit(1) from None

    config = _load_settings_or_exit(settings)
    configure_logging(config.log_level, config.log_format)
    target = authority if authority is not None else config.authority

    scope = FactoryScope.from_entry_points(config.entry_point_group)
    with CapabilityRegistry.discover(scope, target) as registry:
        bindings = [b for b in registry.bindings() if not wanted or b.capability in wanted]
        if not bindings:
            typer.echo(f"No factories found in entry-point group {config.entry_point_group}.")
            return
        typer.echo(f"Factories for authority {target}:")
        for binding in bindings:
            declared = f" ({binding.authority})" if binding.authority else ""
            typer.echo(f"  {binding.capability.tag:40} {binding.implementation}{declared}")


if __name__ == "__main__":
    app()
