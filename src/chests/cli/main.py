"""Typer CLI for chest of drawers design."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from chests.application import ChestReport, GenerateChestCommand
from chests.application.config import (
    ChestConfiguration,
    ConfigError,
    chest_to_config,
    config_to_chest,
    config_to_stock_sheets,
    load_config,
)
from chests.cli.commands import display_load_error, validate_command
from chests.domain import Unit, create_default_config
from chests.domain.services import convert_config_units
from chests.infrastructure import (
    CutDiagramRenderer,
    CutListFormatter,
    JsonExporter,
    PlanFormatter,
)

app = typer.Typer(
    name="chests",
    help="Design a chest of drawers and optimize its cut list against stock sheets.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log calculation details to stderr"),
    ] = False,
) -> None:
    """Design a chest of drawers and optimize its cut list."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _load(config_file: Path) -> ChestConfiguration:
    try:
        return load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)


def _generate(
    config: ChestConfiguration,
    kerf: float | None = None,
    allow_rotation: bool | None = None,
    optimize: bool = True,
) -> ChestReport:
    chest = config_to_chest(config)
    report = GenerateChestCommand().execute(
        chest,
        config_to_stock_sheets(config, chest),
        kerf=kerf if kerf is not None else config.stock.kerf,
        allow_rotation=config.stock.allow_rotation if allow_rotation is None else allow_rotation,
        optimize=optimize,
    )
    if not report.is_valid:
        for error in report.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)
    return report


@app.command()
def plan(
    config_file: Annotated[Path, typer.Argument(help="Path to JSON configuration file")],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = "text",
) -> None:
    """Show carcass and drawer box dimensions with warnings."""
    if output_format not in ("text", "json"):
        typer.echo(f"Unknown format: {output_format}. Use 'text' or 'json'.", err=True)
        raise typer.Exit(code=1)

    report = _generate(_load(config_file), optimize=output_format == "json")
    if output_format == "json":
        typer.echo(JsonExporter().export(report))
    else:
        typer.echo(PlanFormatter().format(report))


@app.command()
def cutlist(
    config_file: Annotated[Path, typer.Argument(help="Path to JSON configuration file")],
) -> None:
    """Display the aggregated cut list, grouped by material thickness."""
    report = _generate(_load(config_file), optimize=False)
    typer.echo(CutListFormatter().format(report.cut_list, report.config.unit))


@app.command()
def optimize(
    config_file: Annotated[Path, typer.Argument(help="Path to JSON configuration file")],
    no_rotation: Annotated[
        bool,
        typer.Option("--no-rotation", help="Do not rotate pieces on the sheet"),
    ] = False,
    kerf: Annotated[
        float | None,
        typer.Option("--kerf", "-k", min=0.0, help="Saw kerf width (overrides the configuration)"),
    ] = None,
    width: Annotated[
        int,
        typer.Option("--width", "-w", min=20, help="Diagram width in characters"),
    ] = 80,
    summary: Annotated[
        bool,
        typer.Option("--summary", help="Show only the waste summary"),
    ] = False,
) -> None:
    """Pack the cut list onto stock sheets and show the layouts."""
    report = _generate(
        _load(config_file),
        kerf=kerf,
        allow_rotation=False if no_rotation else None,
    )
    packing = report.packing_result
    if packing is None:
        typer.echo("Error: no packing result", err=True)
        raise typer.Exit(code=1)

    renderer = CutDiagramRenderer()
    if summary:
        typer.echo(renderer.render_waste_summary(packing))
    else:
        typer.echo(renderer.render_all_ascii(packing, width=width))


@app.command(name="default-config")
def default_config(
    name: Annotated[str, typer.Option("--name", "-n", help="Chest name")] = "Untitled Chest",
    unit: Annotated[
        Unit,
        typer.Option("--unit", "-u", help="Unit for every length in the file"),
    ] = Unit.INCHES,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write to this file instead of stdout"),
    ] = None,
) -> None:
    """Print the default chest configuration as JSON."""
    chest = convert_config_units(create_default_config(name), unit)
    content = chest_to_config(chest).model_dump_json(indent=2, exclude_none=True)

    if output_file is None:
        typer.echo(content)
        return

    output_file.write_text(content + "\n", encoding="utf-8")
    typer.echo(f"Wrote {output_file}")


if __name__ == "__main__":
    app()
