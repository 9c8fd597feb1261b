import operator
import pickle

import numpy as np
import pytest

from normal_reference.distributions.fitters import fit_marginal_t
from normal_reference.exceptions import ConfigValidationError, PropagationError, ResourceLimitError
from normal_reference.mc.propagate import _chunk_generators, draw_matrix, monte_carlo_propagate, summarize
from normal_reference.utils import resources

SAMPLE = [1.0, 2.0, 3.0, 4.0, 5.0]


def identity(x):
    return x


def test_identity_summary_mean_matches_posterior_mean():
    iterations = 100_000
    low, mean, high = monte_carlo_propagate(identity, [SAMPLE], iterations=iterations, summary=True, seed=0)
    dist = fit_marginal_t(SAMPLE)
    # df=4, scale^2=0.5 -> variance 1.0
    standard_error = np.sqrt(dist.variance() / iterations)
    assert abs(mean - dist.mean()) < 4 * standard_error
    assert low < mean < high
    assert low == pytest.approx(dist.quantile(0.025), abs=0.06)
    assert high == pytest.approx(dist.quantile(0.975), abs=0.06)


def test_full_results_have_iteration_length():
    results = monte_carlo_propagate(identity, [SAMPLE], iterations=1_000, seed=1)
    assert isinstance(results, np.ndarray)
    assert results.shape == (1_000,)
    assert np.isfinite(results).all()


def test_float_iteration_count_accepted():
    results = monte_carlo_propagate(identity, [SAMPLE], iterations=1e3, seed=1)
    assert results.shape == (1_000,)


def test_seeded_runs_are_reproducible():
    a = monte_carlo_propagate(operator.mul, [SAMPLE, [2.0, 2.5, 3.0]], iterations=500, seed=123)
    b = monte_carlo_propagate(operator.mul, [SAMPLE, [2.0, 2.5, 3.0]], iterations=500, seed=123)
    assert np.array_equal(a, b)


def test_injected_generator_is_used():
    a = monte_carlo_propagate(identity, [SAMPLE], iterations=200, rng=np.random.default_rng(8))
    b = monte_carlo_propagate(identity, [SAMPLE], iterations=200, rng=np.random.default_rng(8))
    c = monte_carlo_propagate(identity, [SAMPLE], iterations=200, rng=np.random.default_rng(9))
    assert np.array_equal(a, b)
    assert not np.array_equal(a, c)


def test_argument_order_is_preserved():
    high = [99.0, 100.0, 101.0]
    low = [-1.0, 0.0, 1.0]
    _, mean, _ = monte_carlo_propagate(operator.sub, [high, low], iterations=5_000, summary=True, seed=2)
    assert mean == pytest.approx(100.0, abs=1.0)


def test_each_iteration_draws_from_every_distribution():
    x, y = [1.0, 2.0, 3.0], [10.0, 11.0, 12.0]
    results = monte_carlo_propagate(operator.add, [x, y], iterations=50, rng=np.random.default_rng(4))
    dists = [fit_marginal_t(x), fit_marginal_t(y)]
    draws = draw_matrix(dists, 50, np.random.default_rng(4))
    assert np.allclose(results, draws[:, 0] + draws[:, 1])


def test_vectorized_matches_sequential():
    samples = [SAMPLE, [0.5, 0.7, 0.9, 1.1]]
    seq = monte_carlo_propagate(operator.truediv, samples, iterations=2_000, seed=5)
    vec = monte_carlo_propagate(np.divide, samples, iterations=2_000, seed=5, vectorized=True)
    assert np.allclose(seq, vec)


def test_vectorized_wrong_shape_raises():
    with pytest.raises(PropagationError):
        monte_carlo_propagate(np.sum, [SAMPLE], iterations=100, seed=5, vectorized=True)


def test_function_failure_reports_iteration():
    calls = {"n": 0}

    def flaky(x):
        calls["n"] += 1
        if calls["n"] == 5:
            raise ZeroDivisionError("boom")
        return x

    with pytest.raises(PropagationError) as excinfo:
        monte_carlo_propagate(flaky, [SAMPLE], iterations=100, seed=0)
    assert excinfo.value.iteration == 4
    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)
    assert calls["n"] == 5


def test_non_scalar_result_is_propagation_error():
    with pytest.raises(PropagationError):
        monte_carlo_propagate(lambda x: [x, x], [SAMPLE], iterations=10, seed=0)


class FailOn:
    """Raise on one exact draw; picklable so it can run in worker processes."""

    def __init__(self, value):
        self.value = value

    def __call__(self, x):
        if x == self.value:
            raise ZeroDivisionError("boom")
        return x


def explode(x):
    raise ZeroDivisionError("boom")


@pytest.fixture
def four_cpus(monkeypatch):
    monkeypatch.setattr(resources.os, "cpu_count", lambda: 4)


def _expected_chunks(samples, iterations, workers, seed):
    dists = [fit_marginal_t(sample) for sample in samples]
    sizes = [len(part) for part in np.array_split(np.arange(iterations), workers)]
    generators = _chunk_generators(workers, None, seed)
    return [draw_matrix(dists, size, gen) for size, gen in zip(sizes, generators)]


def test_parallel_chunks_concatenate_in_order(four_cpus):
    samples = [SAMPLE, [2.0, 2.5, 3.0, 2.2, 2.8]]
    a = monte_carlo_propagate(operator.add, samples, iterations=3_001, seed=21, max_workers=2)
    b = monte_carlo_propagate(operator.add, samples, iterations=3_001, seed=21, max_workers=2)
    assert a.shape == (3_001,)
    assert np.array_equal(a, b)
    chunks = _expected_chunks(samples, 3_001, 2, 21)
    expected = np.concatenate([chunk[:, 0] + chunk[:, 1] for chunk in chunks])
    assert np.allclose(a, expected)


def test_parallel_failure_reports_global_iteration(four_cpus):
    first, second = _expected_chunks([SAMPLE], 400, 2, 3)
    target = second[7, 0]
    with pytest.raises(PropagationError) as excinfo:
        monte_carlo_propagate(FailOn(target), [SAMPLE], iterations=400, seed=3, max_workers=2)
    assert excinfo.value.iteration == first.shape[0] + 7
    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)


def test_parallel_failure_keeps_original_cause(four_cpus):
    with pytest.raises(PropagationError) as excinfo:
        monte_carlo_propagate(explode, [SAMPLE], iterations=100, seed=0, max_workers=2)
    assert excinfo.value.iteration == 0
    assert isinstance(excinfo.value.cause, ZeroDivisionError)
    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)


def test_parallel_rejects_unpicklable_function(four_cpus):
    with pytest.raises(ConfigValidationError):
        monte_carlo_propagate(lambda x: x, [SAMPLE], iterations=100, seed=0, max_workers=2)


def test_propagation_error_pickles_with_cause():
    err = PropagationError("failed", 12, ZeroDivisionError("boom"))
    restored = pickle.loads(pickle.dumps(err))
    assert restored.iteration == 12
    assert isinstance(restored.cause, ZeroDivisionError)
    assert str(restored) == "failed"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"lower": 0.9, "upper": 0.1},
        {"lower": -0.1},
        {"upper": 1.5},
        {"iterations": 0},
        {"iterations": 2.5},
        {"max_workers": 0},
    ],
)
def test_invalid_configuration_rejected(kwargs):
    with pytest.raises(ConfigValidationError):
        monte_carlo_propagate(identity, [SAMPLE], **kwargs)


def test_empty_samples_rejected():
    with pytest.raises(ConfigValidationError):
        monte_carlo_propagate(identity, [], iterations=10)


def test_preflight_rejects_oversized_runs():
    with pytest.raises(ResourceLimitError):
        monte_carlo_propagate(identity, [SAMPLE], iterations=1_000_000, total_ram_gb=0.001)


def test_summarize():
    values = np.arange(101, dtype=float)
    assert summarize(values, 0.1, 0.9) == pytest.approx((10.0, 50.0, 90.0))
