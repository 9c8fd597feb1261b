"""Posterior mass comparison between two samples' marginal mean distributions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import numpy as np

from normal_reference.distributions.fitters import fit_marginal_t
from normal_reference.distributions.marginal_t import MarginalTDistribution
from normal_reference.exceptions import DomainError
from normal_reference.utils.logging import get_logger

log = get_logger(__name__, component="analysis.compare")

Direction = Literal["above", "below"]
Labels = tuple[str, str]


@dataclass(frozen=True)
class MassComparison:
    """Outcome of comparing x's posterior-mean distribution against y's posterior mean."""

    label_x: str
    label_y: str
    mean_x: float
    mean_y: float
    direction: Direction
    fraction: float

    @property
    def percent(self) -> float:
        return 100.0 * self.fraction

    @property
    def report(self) -> str:
        return (
            f"{self.percent:.2f}% of {self.label_x}'s marginal posterior mean density "
            f"lies {self.direction} {self.label_y}'s mean."
        )

    def __str__(self) -> str:
        return self.report


def _compare_distributions(x_dist: MarginalTDistribution, y_dist: MarginalTDistribution, labels: Labels) -> MassComparison:
    mean_x, mean_y = x_dist.mean(), y_dist.mean()
    # report the tail on the side x sits relative to y
    if mean_x > mean_y:
        direction: Direction = "above"
        fraction = float(x_dist.ccdf(mean_y))
    else:
        direction = "below"
        fraction = float(x_dist.cdf(mean_y))

    comparison = MassComparison(
        label_x=labels[0],
        label_y=labels[1],
        mean_x=mean_x,
        mean_y=mean_y,
        direction=direction,
        fraction=fraction,
    )
    log.info(comparison.report, extra={"direction": direction, "fraction": fraction})
    return comparison


def mass_comparison(x, y, labels: Labels = ("x", "y"), *, log_scale: bool = False) -> MassComparison:
    """Compare x's posterior-mean distribution against y's posterior mean.

    With ``log_scale`` both samples are zero-filtered and log-transformed first.
    """
    if log_scale:
        x = log_transform_nonzero(x, name=labels[0])
        y = log_transform_nonzero(y, name=labels[1])
    return _compare_distributions(fit_marginal_t(x), fit_marginal_t(y), labels)


def compare_means(x, y, labels: Labels = ("x", "y")) -> str:
    """Report the share of x's posterior-mean density beyond y's posterior mean."""
    return mass_comparison(x, y, labels).report


def log_transform_nonzero(sample, name: str = "sample") -> np.ndarray:
    """Drop exact zeros, then take natural logs of what remains."""
    values = np.asarray(sample, dtype=float)
    values = values[values != 0]
    if (values < 0).any():
        raise DomainError(f"{name} contains negative values; log transform is undefined")
    return np.log(values)


def compare_log_means(x, y, labels: Labels = ("x", "y")) -> str:
    """As :func:`compare_means`, on the logs of the non-zero elements of each sample."""
    return mass_comparison(x, y, labels, log_scale=True).report


__all__ = ["MassComparison", "mass_comparison", "compare_means", "compare_log_means", "log_transform_nonzero"]
