"""Propagate CLI command wiring."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Callable, List

import typer

from normal_reference.cli.validation import validate_propagate_inputs
from normal_reference.config.loader import load_config_with_precedence
from normal_reference.data.loader import load_sample
from normal_reference.exceptions import ConfigValidationError
from normal_reference.mc.propagate import run_propagation
from normal_reference.schema.run_config import DEFAULT_ITERATIONS, PropagationConfig
from normal_reference.utils.logging import get_logger

log = get_logger(__name__, component="cli_propagate")


def op_sum(*values: float) -> float:
    return math.fsum(values)


def op_product(*values: float) -> float:
    return math.prod(values)


def op_difference(a: float, b: float) -> float:
    return a - b


def op_ratio(a: float, b: float) -> float:
    return a / b


# name -> (function, required number of samples or None for any)
OPERATIONS: dict[str, tuple[Callable[..., float], int | None]] = {
    "sum": (op_sum, None),
    "product": (op_product, None),
    "difference": (op_difference, 2),
    "ratio": (op_ratio, 2),
}


def propagate(
    files: List[Path] = typer.Argument(..., help="One sample file per function argument, in order"),
    op: str | None = typer.Option(None, help="sum, product, difference or ratio"),
    config: Path | None = typer.Option(None, "--config", help="Optional YAML/JSON config path"),
    column: str | None = typer.Option(None, help="CSV column used for every file"),
    iterations: int | None = typer.Option(None, help="Monte Carlo iterations"),
    lower: float | None = typer.Option(None, help="Lower summary quantile"),
    upper: float | None = typer.Option(None, help="Upper summary quantile"),
    seed: int | None = typer.Option(None, help="Random seed"),
    max_workers: int | None = typer.Option(None, "--max-workers", help="Process-pool size"),
) -> None:
    """Propagate posterior-mean uncertainty through OP and print the summary as JSON."""
    defaults = {
        "op": "sum",
        "iterations": DEFAULT_ITERATIONS,
        "lower": 0.025,
        "upper": 0.975,
        "seed": None,
        "max_workers": None,
    }
    cli_values = {
        "op": op,
        "iterations": iterations,
        "lower": lower,
        "upper": upper,
        "seed": seed,
        "max_workers": max_workers,
    }
    casters = {
        "op": lambda v: str(v).lower(),
        "iterations": lambda v: int(float(v)),
        "lower": float,
        "upper": float,
        "seed": int,
        "max_workers": int,
    }
    cfg = load_config_with_precedence(
        config_path=config,
        cli_values=cli_values,
        defaults=defaults,
        casters=casters,
    )

    if cfg["op"] not in OPERATIONS:
        raise ConfigValidationError(f"op must be one of {sorted(OPERATIONS)}")
    func, arity = OPERATIONS[cfg["op"]]
    validate_propagate_inputs(
        files,
        op=cfg["op"],
        arity=arity,
        iterations=cfg["iterations"],
        max_workers=cfg["max_workers"],
    )

    run_config = PropagationConfig(
        lower=cfg["lower"],
        upper=cfg["upper"],
        iterations=cfg["iterations"],
        summary=True,
        seed=cfg["seed"],
        max_workers=cfg["max_workers"],
    )
    samples = [load_sample(path, column=column) for path in files]
    low, mean, high = run_propagation(func, samples, run_config)
    typer.echo(
        json.dumps(
            {
                "op": cfg["op"],
                "iterations": run_config.iterations,
                "lower": {"quantile": run_config.lower, "value": low},
                "mean": mean,
                "upper": {"quantile": run_config.upper, "value": high},
            },
            indent=2,
        )
    )
