"""Compare CLI command wiring."""

from __future__ import annotations

from pathlib import Path

import typer

from normal_reference.analysis.compare import mass_comparison
from normal_reference.data.loader import load_sample
from normal_reference.utils.logging import get_logger

log = get_logger(__name__, component="cli_compare")


def compare(
    x_file: Path = typer.Argument(..., help="Sample file for x"),
    y_file: Path = typer.Argument(..., help="Sample file for y"),
    column: str | None = typer.Option(None, help="CSV column used for both files"),
    log_scale: bool = typer.Option(False, "--log/--no-log", help="Drop zeros and compare log means"),
    label_x: str | None = typer.Option(None, "--label-x", help="Label for x (defaults to file stem)"),
    label_y: str | None = typer.Option(None, "--label-y", help="Label for y (defaults to file stem)"),
) -> None:
    """Print how much of x's posterior-mean density lies beyond y's mean."""
    x = load_sample(x_file, column=column)
    y = load_sample(y_file, column=column)
    labels = (label_x or x_file.stem, label_y or y_file.stem)
    result = mass_comparison(x, y, labels, log_scale=log_scale)
    typer.echo(result.report)
