import math

import numpy as np
import pytest
from scipy import stats

from normal_reference.distributions.fitters import fit_marginal_t, fit_pmm, fit_ppm, sufficient_statistics
from normal_reference.distributions.marginal_t import MarginalTDistribution
from normal_reference.exceptions import DomainError, InsufficientDataError

SAMPLE = [1.0, 2.0, 3.0, 4.0, 5.0]


def test_sufficient_statistics():
    n, mu, ssr = sufficient_statistics(SAMPLE)
    assert (n, mu, ssr) == (5, 3.0, 10.0)


def test_pmm_parameters():
    dist = fit_marginal_t(SAMPLE)
    df, loc, scale = dist.params()
    assert df == 4.0
    assert loc == 3.0
    assert scale == pytest.approx(math.sqrt(0.5))


def test_ppm_parameters():
    dist = fit_marginal_t(SAMPLE, predictive=True)
    df, loc, scale = dist.params()
    assert df == 4.0
    assert loc == 3.0
    assert scale == pytest.approx(math.sqrt(3.0))


def test_predictive_is_wider_than_marginal_mean():
    assert fit_marginal_t(SAMPLE, predictive=True).parameters()[2] > fit_marginal_t(SAMPLE).parameters()[2]
    rng = np.random.default_rng(11)
    for _ in range(20):
        x = rng.normal(size=rng.integers(2, 40))
        assert fit_ppm(x).scale >= fit_pmm(x).scale


def test_location_equals_sample_mean():
    rng = np.random.default_rng(5)
    for size in [2, 3, 17, 250]:
        x = rng.lognormal(size=size)
        assert fit_marginal_t(x).mean() == np.mean(x)


def test_pmm_scale_is_standard_error():
    x = np.random.default_rng(2).normal(10, 3, size=30)
    assert fit_marginal_t(x).std() == pytest.approx(stats.sem(x))


def test_classmethod_fit_matches_function():
    assert MarginalTDistribution.fit(SAMPLE) == fit_marginal_t(SAMPLE)
    assert MarginalTDistribution.fit(SAMPLE, predictive=True) == fit_marginal_t(SAMPLE, predictive=True)


@pytest.mark.parametrize("sample", [[], [4.2]])
def test_short_samples_raise_insufficient_data(sample):
    with pytest.raises(InsufficientDataError):
        fit_marginal_t(sample)
    with pytest.raises(InsufficientDataError):
        fit_marginal_t(sample, predictive=True)


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), -float("inf")])
def test_non_finite_values_raise_domain_error(bad):
    with pytest.raises(DomainError):
        fit_marginal_t([1.0, bad, 3.0])


def test_two_dimensional_input_rejected():
    with pytest.raises(DomainError):
        fit_marginal_t([[1.0, 2.0], [3.0, 4.0]])


def test_constant_sample_has_no_scale():
    with pytest.raises(DomainError):
        fit_marginal_t([2.0, 2.0, 2.0])
