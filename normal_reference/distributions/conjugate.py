"""Normal-Gamma and Normal-Inverse-Gamma posteriors under the reference prior."""

from __future__ import annotations

import math
from dataclasses import dataclass

from scipy import stats

from normal_reference.distributions.fitters import sufficient_statistics
from normal_reference.distributions.marginal_t import MarginalTDistribution
from normal_reference.utils.logging import get_logger

log = get_logger(__name__, component="conjugate")


@dataclass(frozen=True, slots=True)
class NormalGammaPosterior:
    """Posterior on (mean, precision): location ``mu``, pseudo-count ``n``, Gamma ``shape`` and ``rate``."""

    mu: float
    n: float
    shape: float
    rate: float

    def params(self) -> tuple[float, float, float, float]:
        return self.mu, self.n, self.shape, self.rate

    def marginals(self):
        """Return ``(marginal of the mean, Gamma marginal of the precision)``."""
        m_t = MarginalTDistribution(
            2 * self.shape,
            self.mu,
            math.sqrt(self.rate / (self.shape * self.n)),
        )
        m_gamma = stats.gamma(self.shape, scale=1.0 / self.rate)
        return m_t, m_gamma


@dataclass(frozen=True, slots=True)
class NormalInverseGammaPosterior:
    """Posterior on (mean, variance): location ``mu``, variance factor ``v``, Inverse-Gamma ``shape`` and ``scale``."""

    mu: float
    v: float
    shape: float
    scale: float

    def params(self) -> tuple[float, float, float, float]:
        return self.mu, self.v, self.shape, self.scale

    def marginals(self):
        """Return ``(marginal of the mean, Inverse-Gamma marginal of the variance)``."""
        m_t = MarginalTDistribution(
            2 * self.shape,
            self.mu,
            math.sqrt(self.scale * self.v / self.shape),
        )
        m_invgamma = stats.invgamma(self.shape, scale=self.scale)
        return m_t, m_invgamma


def fit_normal_gamma(sample) -> NormalGammaPosterior:
    """Posterior Normal-Gamma on the mean and precision of ``sample``."""
    n, mu, ssr = sufficient_statistics(sample)
    alpha = (n - 1) / 2
    beta = ssr / 2
    log.debug("Fitted Normal-Gamma posterior", extra={"family": "normal_gamma", "n_samples": n})
    return NormalGammaPosterior(mu, float(n), alpha, beta)


def fit_normal_inverse_gamma(sample) -> NormalInverseGammaPosterior:
    """Posterior Normal-Inverse-Gamma on the mean and variance of ``sample``."""
    n, mu, ssr = sufficient_statistics(sample)
    v_n = 1 / n
    a_n = n / 2 - 0.5
    # sum(x^2) - mu^2/V_n written in centred form
    b_n = 0.5 * ssr
    log.debug(
        "Fitted Normal-Inverse-Gamma posterior",
        extra={"family": "normal_inverse_gamma", "n_samples": n},
    )
    return NormalInverseGammaPosterior(mu, v_n, a_n, b_n)


__all__ = [
    "NormalGammaPosterior",
    "NormalInverseGammaPosterior",
    "fit_normal_gamma",
    "fit_normal_inverse_gamma",
]
