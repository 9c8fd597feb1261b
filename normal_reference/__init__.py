"""Reference-prior conjugate inference for Normal samples."""

from normal_reference.analysis.compare import MassComparison, compare_log_means, compare_means, mass_comparison
from normal_reference.distributions.conjugate import (
    NormalGammaPosterior,
    NormalInverseGammaPosterior,
    fit_normal_gamma,
    fit_normal_inverse_gamma,
)
from normal_reference.distributions.factory import PosteriorFamily, fit_posterior
from normal_reference.distributions.fitters import fit_marginal_t
from normal_reference.distributions.marginal_t import MarginalTDistribution
from normal_reference.exceptions import (
    ConfigValidationError,
    DomainError,
    InsufficientDataError,
    NormalReferenceError,
    PropagationError,
)
from normal_reference.mc.propagate import monte_carlo_propagate

__version__ = "0.1.0"

__all__ = [
    "ConfigValidationError",
    "DomainError",
    "InsufficientDataError",
    "MarginalTDistribution",
    "MassComparison",
    "NormalGammaPosterior",
    "NormalInverseGammaPosterior",
    "NormalReferenceError",
    "PosteriorFamily",
    "PropagationError",
    "compare_log_means",
    "compare_means",
    "fit_marginal_t",
    "fit_normal_gamma",
    "fit_normal_inverse_gamma",
    "fit_posterior",
    "mass_comparison",
    "monte_carlo_propagate",
]
