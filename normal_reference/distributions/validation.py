"""Validation helpers for samples and distribution parameters."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from normal_reference.exceptions import DomainError, InsufficientDataError

MIN_SAMPLES = 2


def validate_sample(sample: Iterable[float], min_samples: int = MIN_SAMPLES, name: str = "sample") -> np.ndarray:
    """Coerce ``sample`` to a 1-D float array and check it can support a variance estimate."""
    try:
        values = np.asarray(sample, dtype=float)
    except (TypeError, ValueError) as exc:
        raise DomainError(f"{name} must be a sequence of real numbers") from exc

    if values.ndim != 1:
        raise DomainError(f"{name} must be one-dimensional, got shape {values.shape}")
    if values.size < min_samples:
        raise InsufficientDataError(f"{name} needs at least {min_samples} observations, got {values.size}")
    if not np.isfinite(values).all():
        raise DomainError(f"{name} contains non-finite values")
    return values


def validate_params_bounds(params: dict, bounds: dict) -> None:
    """Check each named parameter lies in its open ``(lower, upper)`` interval."""
    for key, (lower, upper) in bounds.items():
        if key not in params:
            raise DomainError(f"Missing parameter {key}")
        val = params[key]
        if not lower < val < upper:
            raise DomainError(f"Parameter {key} out of bounds: {val}")


def enforce_finite(values: dict) -> None:
    for key, val in values.items():
        if val is None or not np.isfinite(val):
            raise DomainError(f"Non-finite parameter {key}: {val}")
