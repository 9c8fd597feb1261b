"""Direct fitters for the posterior marginal mean (PMM) and posterior predictive (PPM)."""

from __future__ import annotations

import math

import numpy as np

from normal_reference.distributions.marginal_t import MarginalTDistribution
from normal_reference.distributions.validation import validate_sample
from normal_reference.utils.logging import get_logger

log = get_logger(__name__, component="fitters")


def sufficient_statistics(sample) -> tuple[int, float, float]:
    """Return ``(n, mean, ssr)`` of a validated sample."""
    values = validate_sample(sample)
    n = values.size
    mu = float(np.mean(values))
    ssr = float(np.sum((values - mu) ** 2))
    return n, mu, ssr


def fit_pmm(sample) -> MarginalTDistribution:
    """Marginal posterior of the mean; equals the sampling distribution of the sample mean."""
    n, mu, ssr = sufficient_statistics(sample)
    scale = math.sqrt(ssr / (n * (n - 1)))
    log.debug("Fitted posterior marginal mean", extra={"family": "pmm", "n_samples": n})
    return MarginalTDistribution(n - 1, mu, scale)


def fit_ppm(sample) -> MarginalTDistribution:
    """Posterior predictive distribution of one new observation."""
    n, mu, ssr = sufficient_statistics(sample)
    alpha_n = (n - 1) / 2
    beta_n = ssr / 2
    scale = math.sqrt(beta_n * (n + 1) / (alpha_n * n))
    log.debug("Fitted posterior predictive", extra={"family": "ppm", "n_samples": n})
    return MarginalTDistribution(2 * alpha_n, mu, scale)


def fit_marginal_t(sample, predictive: bool = False) -> MarginalTDistribution:
    """Fit a :class:`MarginalTDistribution` to ``sample`` under the reference prior.

    With ``predictive=False`` (default) return the marginal posterior of the
    mean; with ``predictive=True`` return the posterior predictive for one new
    observation, which is always at least as wide.

    Raises:
        InsufficientDataError: fewer than two observations.
        DomainError: non-finite values, or a constant sample (zero scale).
    """
    return fit_ppm(sample) if predictive else fit_pmm(sample)


__all__ = ["fit_marginal_t", "fit_pmm", "fit_ppm", "sufficient_statistics"]
