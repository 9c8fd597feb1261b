import pytest

from normal_reference.exceptions import ConfigValidationError
from normal_reference.schema.run_config import DEFAULT_ITERATIONS, PropagationConfig


def test_defaults_are_valid():
    cfg = PropagationConfig()
    assert cfg.iterations == DEFAULT_ITERATIONS
    assert (cfg.lower, cfg.upper) == (0.025, 0.975)
    assert cfg.summary is False


def test_float_iterations_normalized_to_int():
    cfg = PropagationConfig(iterations=1e4)
    assert cfg.iterations == 10_000
    assert isinstance(cfg.iterations, int)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"iterations": -5},
        {"iterations": float("inf")},
        {"iterations": float("nan")},
        {"lower": 0.5, "upper": 0.5},
        {"upper": 1.01},
        {"max_workers": -1},
        {"total_ram_gb": 0},
        {"time_budget_seconds": -1.0},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ConfigValidationError):
        PropagationConfig(**kwargs)


def test_dict_round_trip():
    cfg = PropagationConfig(lower=0.05, upper=0.95, iterations=100, seed=7, max_workers=2)
    assert PropagationConfig.from_dict(cfg.to_dict()) == cfg


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ConfigValidationError):
        PropagationConfig.from_dict({"iterations": 10, "paths": 3})
