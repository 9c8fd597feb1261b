"""Wall and CPU timing for Monte Carlo runs against optional time budgets."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from normal_reference.utils.logging import get_logger

log = get_logger(__name__, component="profiling")


@dataclass
class Timing:
    """Elapsed seconds for a named segment; filled in when the block exits."""

    segment: str
    wall_seconds: float = 0.0
    cpu_seconds: float = 0.0

    def as_extra(self) -> dict:
        return {"segment": self.segment, "wall_seconds": self.wall_seconds, "cpu_seconds": self.cpu_seconds}


@contextmanager
def track_time(name: str, *, warn_budget: float | None = None, error_budget: float | None = None) -> Iterator[Timing]:
    timing = Timing(name)
    wall_start, cpu_start = time.perf_counter(), time.process_time()
    try:
        yield timing
    finally:
        timing.wall_seconds = round(time.perf_counter() - wall_start, 4)
        timing.cpu_seconds = round(time.process_time() - cpu_start, 4)
        if error_budget is not None and timing.wall_seconds >= error_budget:
            log.error("Error time budget exceeded", extra=timing.as_extra())
        elif warn_budget is not None and timing.wall_seconds >= warn_budget:
            log.warning("Warning time budget exceeded", extra=timing.as_extra())
        else:
            log.info("Segment timing", extra=timing.as_extra())
