"""Shifted and scaled Student-t distribution.

``MarginalTDistribution(df, loc, scale)`` is the marginal posterior of the mean
of a Normal model under the reference Normal-Gamma prior, and also the
posterior predictive of one new observation. All probability functions are the
standard Student-t ones after the change of variable ``y = (x - loc) / scale``.

Reference: Kevin P. Murphy, Conjugate Bayesian Analysis of the Gaussian
Distribution, 2007.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.random import PCG64, Generator
from scipy import stats

from normal_reference.distributions.validation import enforce_finite, validate_params_bounds


class MarginalTDistribution:
    """Student-t with ``df`` degrees of freedom, shifted by ``loc`` and scaled by ``scale``.

    ``scale`` is the location-scale parameter of the underlying Student-t. It
    equals the standard deviation only in the limit of large ``df``; see
    :meth:`variance` for the actual second moment.
    """

    __slots__ = ("_t", "_df", "_loc", "_scale")

    def __init__(self, df: float, loc: float = 0.0, scale: float = 1.0) -> None:
        df, loc, scale = float(df), float(loc), float(scale)
        enforce_finite({"df": df, "loc": loc, "scale": scale})
        validate_params_bounds(
            {"df": df, "scale": scale},
            {"df": (0.0, math.inf), "scale": (0.0, math.inf)},
        )
        self._df = df
        self._loc = loc
        self._scale = scale
        self._t = stats.t(df)

    @classmethod
    def fit(cls, sample, predictive: bool = False) -> "MarginalTDistribution":
        from normal_reference.distributions.fitters import fit_marginal_t

        return fit_marginal_t(sample, predictive=predictive)

    @property
    def df(self) -> float:
        return self._df

    @property
    def loc(self) -> float:
        return self._loc

    @property
    def scale(self) -> float:
        return self._scale

    def params(self) -> tuple[float, float, float]:
        return self._df, self._loc, self._scale

    def dof(self) -> float:
        return self._df

    def mean(self) -> float:
        return self._loc

    def median(self) -> float:
        return self._loc

    def mode(self) -> float:
        return self._loc

    def std(self) -> float:
        """Return the scale parameter."""
        return self._scale

    def variance(self) -> float:
        """Second central moment: finite for df > 2, infinite for 1 < df <= 2, undefined otherwise."""
        if self._df > 2:
            return self._scale**2 * self._df / (self._df - 2)
        if self._df > 1:
            return math.inf
        return math.nan

    def sample(self, size=None, *, rng: Generator | None = None, seed: int | None = None):
        """Draw ``loc + scale * t`` from ``rng`` (or a generator built from ``seed``).

        Returns a float when ``size`` is None, otherwise an array of that shape.
        """
        if rng is None:
            rng = Generator(PCG64(seed)) if seed is not None else np.random.default_rng()
        draws = self._loc + self._scale * rng.standard_t(self._df, size=size)
        return float(draws) if size is None else draws

    def quantile(self, p):
        return self._loc + self._scale * self._t.ppf(p)

    def interval(self, confidence: float = 0.95) -> tuple[float, float]:
        """Central credible interval holding ``confidence`` of the mass."""
        tail = (1.0 - confidence) / 2.0
        return float(self.quantile(tail)), float(self.quantile(1.0 - tail))

    def _standardize(self, x):
        return (np.asarray(x, dtype=float) - self._loc) / self._scale

    def pdf(self, x):
        return self._t.pdf(self._standardize(x)) / self._scale

    def logpdf(self, x):
        return self._t.logpdf(self._standardize(x)) - math.log(self._scale)

    def cdf(self, x):
        return self._t.cdf(self._standardize(x))

    def ccdf(self, x):
        return self._t.sf(self._standardize(x))

    def __reduce__(self):
        return self.__class__, self.params()

    parameters = params
    stddev = std
    density = pdf

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MarginalTDistribution):
            return NotImplemented
        return self.params() == other.params()

    def __hash__(self) -> int:
        return hash(("MarginalTDistribution",) + self.params())

    def __repr__(self) -> str:
        return f"MarginalTDistribution(df={self._df!r}, loc={self._loc!r}, scale={self._scale!r})"


__all__ = ["MarginalTDistribution"]
