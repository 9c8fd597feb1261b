"""Monte Carlo propagation configuration schema and validation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from normal_reference.exceptions import ConfigValidationError

DEFAULT_ITERATIONS = 1_000_000


@dataclass(slots=True)
class PropagationConfig:
    lower: float = 0.025
    upper: float = 0.975
    iterations: int = DEFAULT_ITERATIONS
    summary: bool = False
    seed: Optional[int] = None
    max_workers: Optional[int] = None
    vectorized: bool = False
    total_ram_gb: Optional[float] = None
    time_budget_seconds: Optional[float] = None

    def __post_init__(self) -> None:
        if (
            not math.isfinite(self.iterations)
            or int(self.iterations) != self.iterations
            or self.iterations <= 0
        ):
            raise ConfigValidationError("iterations must be a positive integer")
        self.iterations = int(self.iterations)
        if not 0.0 <= self.lower < self.upper <= 1.0:
            raise ConfigValidationError("quantile bounds must satisfy 0 <= lower < upper <= 1")
        if self.max_workers is not None and self.max_workers <= 0:
            raise ConfigValidationError("max_workers must be positive when set")
        if self.total_ram_gb is not None and self.total_ram_gb <= 0:
            raise ConfigValidationError("total_ram_gb must be positive when set")
        if self.time_budget_seconds is not None and self.time_budget_seconds <= 0:
            raise ConfigValidationError("time_budget_seconds must be positive when set")

    @classmethod
    def from_dict(cls, data: dict) -> "PropagationConfig":
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigValidationError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> dict:
        return {
            "lower": self.lower,
            "upper": self.upper,
            "iterations": self.iterations,
            "summary": self.summary,
            "seed": self.seed,
            "max_workers": self.max_workers,
            "vectorized": self.vectorized,
            "total_ram_gb": self.total_ram_gb,
            "time_budget_seconds": self.time_budget_seconds,
        }
