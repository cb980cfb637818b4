"""Validate command for checking configuration files.

This module provides the `validate` command that checks a JSON configuration
file for errors and reports design warnings: drawer warnings, constraint
violations, unused column height and pieces too large for their stock.
"""

from pathlib import Path
from typing import Annotated

import typer

from chests.application import ChestReport, GenerateChestCommand
from chests.application.config import (
    ConfigError,
    config_to_chest,
    config_to_stock_sheets,
    load_config,
)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file to validate"),
    ],
) -> None:
    """Validate a chest configuration file.

    Exit codes:
        0 - Configuration is valid with no warnings
        1 - Configuration has errors (cannot be used)
        2 - Configuration is valid but has warnings

    Example:
        chests validate my-chest.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    chest = config_to_chest(config)
    report = GenerateChestCommand().execute(
        chest,
        config_to_stock_sheets(config, chest),
        kerf=config.stock.kerf,
        allow_rotation=config.stock.allow_rotation,
    )

    warnings = collect_warnings(report)
    if warnings:
        typer.echo("Warnings:")
        for warning in warnings:
            typer.echo(f"  {warning}")
        typer.echo()
        typer.echo(f"Validation passed with {len(warnings)} warning(s)")
        raise typer.Exit(code=2)

    typer.echo("Validation passed. Configuration is valid.")


def collect_warnings(report: ChestReport) -> list[str]:
    """Human-readable design warnings for a generated chest."""
    unit = report.config.unit.value
    warnings: list[str] = []

    for violation in report.carcass.constraint_violations:
        warnings.append(
            f"carcass.{violation.dimension}: {violation.actual:.3f} {unit} exceeds "
            f"maximum {violation.max:.3f} {unit}"
        )
    for box, warning in report.drawer_warnings:
        warnings.append(f"{box.row_id} ({warning.type.value}): {warning.message}")
    for column_id, space in report.dead_space.items():
        warnings.append(f"{column_id}: {space:.3f} {unit} of unused height")
    if report.rails_recommended and not report.config.horizontal_rails.enabled:
        warnings.append("horizontal_rails: recommended for a chest of this size")
    if report.packing_result is not None:
        for piece in report.packing_result.unplaced:
            # Non-positive pieces are already flagged as negative-dimension.
            if piece.width <= 0 or piece.height <= 0:
                continue
            warnings.append(
                f"{piece.id}: {piece.width:.3f} x {piece.height:.3f} {unit} "
                f"does not fit on the {piece.thickness.id} stock sheet"
            )
    return warnings


def display_load_error(error: ConfigError) -> None:
    """Display a configuration loading error on stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            typer.echo(f"    Line {detail.line}, Column {detail.column}: {detail.message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            typer.echo(f"  {detail.path}: {detail.message}", err=True)
            if detail.location:
                typer.echo(f"    In: {detail.location}", err=True)
            if detail.value is not None:
                typer.echo(f"    Value: {detail.value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo(err=True)
    typer.echo("Validation failed.", err=True)
