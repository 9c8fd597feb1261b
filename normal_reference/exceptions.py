"""Project-wide exception types."""

from __future__ import annotations


class NormalReferenceError(Exception):
    """Base exception for all package errors."""


class DomainError(NormalReferenceError, ValueError):
    """Raised when a distribution parameter or sample value is outside its domain."""


class InsufficientDataError(NormalReferenceError, ValueError):
    """Raised when a sample is too short to estimate a variance."""


class PropagationError(NormalReferenceError):
    """Raised when the user function fails during a Monte Carlo run.

    The failing iteration index is kept on ``iteration``. The original
    exception is kept on ``cause`` and chained as ``__cause__``; ``cause``
    survives pickling so worker-process failures can be re-chained.
    """

    def __init__(self, message: str, iteration: int, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.iteration = iteration
        self.cause = cause

    def __reduce__(self):
        return self.__class__, (self.args[0], self.iteration, self.cause)


class DataSourceError(NormalReferenceError):
    """Raised when a sample file cannot be read or parsed."""


class ResourceLimitError(NormalReferenceError):
    """Raised when a run would exceed configured resource limits."""


class ConfigError(NormalReferenceError):
    """Raised when configuration is missing or malformed."""


class ConfigValidationError(ConfigError):
    """Raised when validation fails for supplied configuration."""
