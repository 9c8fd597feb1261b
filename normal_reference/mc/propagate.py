"""Monte Carlo propagation of posterior-mean uncertainty through a user function.

Each sample is fitted with its posterior marginal mean distribution. Every
iteration draws one value per distribution and evaluates ``func`` on the
draws in argument order. Sequential execution is the reference behaviour; the
process-pool path splits iterations into contiguous chunks with independent
random streams and concatenates them in order.
"""

from __future__ import annotations

import pickle
from concurrent.futures import ProcessPoolExecutor
from typing import Callable, Sequence

import numpy as np
from numpy.random import Generator

from normal_reference.distributions.fitters import fit_marginal_t
from normal_reference.distributions.marginal_t import MarginalTDistribution
from normal_reference.exceptions import ConfigValidationError, PropagationError
from normal_reference.schema.run_config import DEFAULT_ITERATIONS, PropagationConfig
from normal_reference.utils.logging import get_logger
from normal_reference.utils.profiling import track_time
from normal_reference.utils.resources import clamp_workers, preflight_footprint

log = get_logger(__name__, component="mc.propagate")

Summary = tuple[float, float, float]


def draw_matrix(dists: Sequence[MarginalTDistribution], iterations: int, rng: Generator) -> np.ndarray:
    """Return an ``(iterations, len(dists))`` matrix; column j holds draws from ``dists[j]``."""
    draws = np.empty((iterations, len(dists)), dtype=float)
    for j, dist in enumerate(dists):
        draws[:, j] = dist.sample(size=iterations, rng=rng)
    return draws


def _evaluate(func: Callable[..., float], draws: np.ndarray, offset: int) -> np.ndarray:
    results = np.empty(draws.shape[0], dtype=float)
    for i, row in enumerate(draws.tolist()):
        try:
            results[i] = func(*row)
        except Exception as exc:
            raise PropagationError(
                f"function failed at iteration {offset + i}: {exc!r}", offset + i, exc
            ) from exc
    return results


def _evaluate_vectorized(func: Callable[..., np.ndarray], draws: np.ndarray, offset: int) -> np.ndarray:
    try:
        results = np.asarray(func(*draws.T), dtype=float)
    except Exception as exc:
        raise PropagationError(
            f"vectorized function failed in chunk at {offset}: {exc!r}", offset, exc
        ) from exc
    if results.shape != (draws.shape[0],):
        raise PropagationError(
            f"vectorized function returned shape {results.shape}, expected ({draws.shape[0]},)", offset
        )
    return results


def _run_chunk(
    func: Callable,
    dists: Sequence[MarginalTDistribution],
    iterations: int,
    rng: Generator,
    offset: int,
    vectorized: bool,
) -> np.ndarray:
    draws = draw_matrix(dists, iterations, rng)
    if vectorized:
        return _evaluate_vectorized(func, draws, offset)
    return _evaluate(func, draws, offset)


def _chunk_generators(n_chunks: int, rng: Generator | None, seed: int | None) -> list[Generator]:
    if rng is not None:
        return list(rng.spawn(n_chunks))
    return [np.random.default_rng(child) for child in np.random.SeedSequence(seed).spawn(n_chunks)]


def _ensure_picklable(func: Callable) -> None:
    try:
        pickle.dumps(func)
    except (pickle.PicklingError, AttributeError, TypeError) as exc:
        raise ConfigValidationError(
            f"func must be picklable to run with max_workers > 1 (use a module-level function): {exc}"
        ) from exc


def _run_pool(
    func: Callable,
    dists: Sequence[MarginalTDistribution],
    config: PropagationConfig,
    workers: int,
    rng: Generator | None,
) -> np.ndarray:
    _ensure_picklable(func)
    sizes = [len(part) for part in np.array_split(np.arange(config.iterations), workers)]
    offsets = np.cumsum([0] + sizes[:-1]).tolist()
    generators = _chunk_generators(workers, rng, config.seed)
    with ProcessPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(_run_chunk, func, dists, size, gen, offset, config.vectorized)
            for size, gen, offset in zip(sizes, generators, offsets)
        ]
        chunks = []
        for future in futures:
            try:
                chunks.append(future.result())
            except PropagationError as exc:
                for pending in futures:
                    pending.cancel()
                raise exc from exc.cause
    return np.concatenate(chunks)


def summarize(results: np.ndarray, lower: float = 0.025, upper: float = 0.975) -> Summary:
    """Return ``(quantile at lower, mean, quantile at upper)`` of the iterates."""
    return (
        float(np.quantile(results, lower)),
        float(np.mean(results)),
        float(np.quantile(results, upper)),
    )


def run_propagation(
    func: Callable,
    samples: Sequence,
    config: PropagationConfig,
    rng: Generator | None = None,
) -> np.ndarray | Summary:
    """Run the engine with a validated :class:`PropagationConfig`."""
    samples = list(samples)
    if not samples:
        raise ConfigValidationError("at least one sample is required")
    dists = [fit_marginal_t(sample) for sample in samples]
    preflight_footprint(config.iterations, len(dists), config.total_ram_gb)

    workers = min(clamp_workers(config.max_workers), config.iterations)
    log.info(
        "Starting Monte Carlo propagation",
        extra={"iterations": config.iterations, "n_samples": len(dists), "max_workers": workers},
    )

    with track_time("monte_carlo_propagate", warn_budget=config.time_budget_seconds) as timing:
        if workers == 1:
            if rng is None:
                rng = np.random.default_rng(config.seed)
            results = _run_chunk(func, dists, config.iterations, rng, 0, config.vectorized)
        else:
            results = _run_pool(func, dists, config, workers, rng)
    log.info(
        "Finished Monte Carlo propagation",
        extra={"iterations": config.iterations, "wall_seconds": timing.wall_seconds},
    )

    if config.summary:
        return summarize(results, config.lower, config.upper)
    return results


def monte_carlo_propagate(
    func: Callable,
    samples: Sequence,
    lower: float = 0.025,
    upper: float = 0.975,
    iterations: int = DEFAULT_ITERATIONS,
    summary: bool = False,
    *,
    rng: Generator | None = None,
    seed: int | None = None,
    max_workers: int | None = None,
    vectorized: bool = False,
    total_ram_gb: float | None = None,
    time_budget_seconds: float | None = None,
) -> np.ndarray | Summary:
    """Propagate the posterior-mean uncertainty of ``samples`` through ``func``.

    Args:
        func: Called as ``func(*draws)`` with one draw per sample, in order.
            With ``vectorized=True`` it is called once with one array per
            sample and must return an array of length ``iterations``.
        samples: One data sample per positional argument of ``func``.
        lower: Lower quantile reported when ``summary`` is true.
        upper: Upper quantile reported when ``summary`` is true.
        iterations: Number of Monte Carlo iterations.
        summary: Return ``(lower quantile, mean, upper quantile)`` instead of
            the full array of iterates.
        rng: Generator to draw from; takes precedence over ``seed``.
        seed: Seed for a fresh generator when ``rng`` is not given.
        max_workers: Process-pool size; ``None`` or 1 runs sequentially.
        vectorized: Evaluate ``func`` on whole columns of draws.
        total_ram_gb: RAM budget for the preflight footprint check.
        time_budget_seconds: Log a warning when the run takes longer.

    Returns:
        Array of ``iterations`` results, or the summary triple.

    Raises:
        PropagationError: ``func`` raised; carries the failing ``iteration``.
        ConfigValidationError: invalid bounds, iteration count or empty ``samples``,
            or a ``func`` that cannot be pickled for a process-pool run.
    """
    config = PropagationConfig(
        lower=lower,
        upper=upper,
        iterations=iterations,
        summary=summary,
        seed=seed,
        max_workers=max_workers,
        vectorized=vectorized,
        total_ram_gb=total_ram_gb,
        time_budget_seconds=time_budget_seconds,
    )
    return run_propagation(func, samples, config, rng=rng)


__all__ = ["monte_carlo_propagate", "run_propagation", "summarize", "draw_matrix"]
