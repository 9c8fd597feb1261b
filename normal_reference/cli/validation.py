"""CLI validation helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from normal_reference.exceptions import ConfigValidationError


def require_positive(name: str, value: int | float) -> None:
    if value <= 0:
        raise ConfigValidationError(f"{name} must be > 0")


def validate_propagate_inputs(
    files: Sequence[Path],
    *,
    op: str,
    arity: int | None,
    iterations: int,
    max_workers: int | None = None,
) -> None:
    if not files:
        raise ConfigValidationError("at least one sample file is required")
    if arity is not None and len(files) != arity:
        raise ConfigValidationError(f"operation '{op}' takes exactly {arity} samples, got {len(files)}")
    require_positive("iterations", iterations)
    if max_workers is not None:
        require_positive("max_workers", max_workers)
