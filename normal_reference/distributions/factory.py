"""Fit dispatch keyed by posterior family."""

from __future__ import annotations

from enum import Enum

from normal_reference.distributions.conjugate import fit_normal_gamma, fit_normal_inverse_gamma
from normal_reference.distributions.fitters import fit_marginal_t
from normal_reference.exceptions import ConfigValidationError


class PosteriorFamily(str, Enum):
    NORMAL_GAMMA = "normal_gamma"
    NORMAL_INVERSE_GAMMA = "normal_inverse_gamma"
    MARGINAL_T = "marginal_t"


_ALIASES = {
    "normal_gamma": PosteriorFamily.NORMAL_GAMMA,
    "normal-gamma": PosteriorFamily.NORMAL_GAMMA,
    "ng": PosteriorFamily.NORMAL_GAMMA,
    "normal_inverse_gamma": PosteriorFamily.NORMAL_INVERSE_GAMMA,
    "normal-inverse-gamma": PosteriorFamily.NORMAL_INVERSE_GAMMA,
    "nig": PosteriorFamily.NORMAL_INVERSE_GAMMA,
    "marginal_t": PosteriorFamily.MARGINAL_T,
    "marginal-t": PosteriorFamily.MARGINAL_T,
    "t": PosteriorFamily.MARGINAL_T,
}


def get_family(name: str | PosteriorFamily) -> PosteriorFamily:
    if isinstance(name, PosteriorFamily):
        return name
    try:
        return _ALIASES[name.lower()]
    except KeyError:
        raise ConfigValidationError(f"Unknown posterior family: {name}") from None


def fit_posterior(family: str | PosteriorFamily, sample, *, predictive: bool = False):
    """Fit ``sample`` with the fitter registered for ``family``.

    ``predictive`` only applies to the marginal-t family and is rejected for
    the conjugate families.
    """
    family = get_family(family)
    if predictive and family is not PosteriorFamily.MARGINAL_T:
        raise ConfigValidationError(f"predictive fits are only available for marginal_t, not {family.value}")
    if family is PosteriorFamily.NORMAL_GAMMA:
        return fit_normal_gamma(sample)
    if family is PosteriorFamily.NORMAL_INVERSE_GAMMA:
        return fit_normal_inverse_gamma(sample)
    return fit_marginal_t(sample, predictive=predictive)


__all__ = ["PosteriorFamily", "fit_posterior", "get_family"]
