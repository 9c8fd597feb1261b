"""Posterior distributions and their fitters."""

from __future__ import annotations

from .conjugate import NormalGammaPosterior, NormalInverseGammaPosterior, fit_normal_gamma, fit_normal_inverse_gamma
from .factory import PosteriorFamily, fit_posterior
from .fitters import fit_marginal_t
from .marginal_t import MarginalTDistribution

__all__ = [
    "MarginalTDistribution",
    "NormalGammaPosterior",
    "NormalInverseGammaPosterior",
    "PosteriorFamily",
    "fit_marginal_t",
    "fit_normal_gamma",
    "fit_normal_inverse_gamma",
    "fit_posterior",
]
