"""Fit CLI command wiring."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from normal_reference.data.loader import load_sample
from normal_reference.distributions.factory import PosteriorFamily, fit_posterior, get_family
from normal_reference.utils.logging import get_logger

log = get_logger(__name__, component="cli_fit")


def fit(
    sample_file: Path = typer.Argument(..., help="CSV or whitespace-separated sample file"),
    column: str | None = typer.Option(None, help="CSV column (defaults to first numeric column)"),
    family: str = typer.Option("marginal_t", help="marginal_t, normal_gamma or normal_inverse_gamma"),
    predictive: bool = typer.Option(False, "--predictive/--no-predictive", help="Posterior predictive (marginal_t only)"),
    confidence: float = typer.Option(0.95, help="Credible interval mass for marginal_t"),
) -> None:
    """Fit a reference posterior and print its parameters as JSON."""
    resolved = get_family(family)
    sample = load_sample(sample_file, column=column)
    posterior = fit_posterior(resolved, sample, predictive=predictive)
    log.info("Fitted posterior", extra={"family": resolved.value, "n_samples": int(sample.size)})

    if resolved is PosteriorFamily.MARGINAL_T:
        df, loc, scale = posterior.params()
        payload = {
            "family": resolved.value,
            "predictive": predictive,
            "df": df,
            "loc": loc,
            "scale": scale,
            "interval": list(posterior.interval(confidence)),
        }
    elif resolved is PosteriorFamily.NORMAL_GAMMA:
        mu, n, shape, rate = posterior.params()
        payload = {"family": resolved.value, "mu": mu, "n": n, "shape": shape, "rate": rate}
    else:
        mu, v, shape, scale = posterior.params()
        payload = {"family": resolved.value, "mu": mu, "v": v, "shape": shape, "scale": scale}
    typer.echo(json.dumps(payload, indent=2))
