"""Resource estimation utilities."""

from __future__ import annotations

import os

from normal_reference.exceptions import ResourceLimitError
from normal_reference.utils.logging import get_logger

log = get_logger(__name__, component="resources")

MAX_WORKERS_CAP = 8


def estimate_footprint_gb(iterations: int, n_arguments: int) -> float:
    """Estimate memory for the draw matrix plus results, float64 with 10% overhead."""
    return iterations * (n_arguments + 1) * 8 * 1.1 / 1e9


def preflight_footprint(iterations: int, n_arguments: int, total_ram_gb: float | None = None) -> float:
    """Return the estimated footprint, raising when it exceeds half the RAM budget.

    Thresholds: <25% RAM -> silent, >=25% -> warning, >=50% -> abort.
    """

    estimated_gb = estimate_footprint_gb(iterations, n_arguments)
    if total_ram_gb is None:
        return estimated_gb

    if estimated_gb >= 0.5 * total_ram_gb:
        raise ResourceLimitError(
            f"Estimated footprint {estimated_gb:.3f} GB exceeds 50% of RAM ({total_ram_gb:.3f} GB)."
        )
    if estimated_gb >= 0.25 * total_ram_gb:
        log.warning(
            "Result footprint above 25% of RAM",
            extra={"estimated_gb": estimated_gb, "ram_gb": total_ram_gb},
        )
    return estimated_gb


def clamp_workers(max_workers: int | None) -> int:
    cpu_count = os.cpu_count() or 1
    if max_workers is None:
        return 1
    return max(1, min(max_workers, MAX_WORKERS_CAP, cpu_count))
