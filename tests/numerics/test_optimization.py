import logging

import numpy as np
import pytest

from hydrofreq.config import OptimizerSettings
from hydrofreq.numerics.optimization import maximize, maximize_scalar


def rosenbrock(x):
    return -((1.0 - x[0]) ** 2 + 100.0 * (x[1] - x[0] ** 2) ** 2)


def test_maximize_finds_interior_optimum():
    result = maximize(rosenbrock, [0.5, 0.5], [-5.0, -5.0], [5.0, 5.0])
    assert result.converged
    np.testing.assert_allclose(result.values, [1.0, 1.0], atol=1e-4)
    assert result.objective == pytest.approx(0.0, abs=1e-8)


def test_maximize_respects_bounds():
    f = lambda x: -(x[0] - 10.0) ** 2
    result = maximize(f, [1.0], [0.0], [2.0])
    assert 0.0 <= result.values[0] <= 2.0
    assert result.values[0] == pytest.approx(2.0, abs=1e-6)


def test_maximize_moves_off_infeasible_region():
    f = lambda x: -np.inf if x[0] < 0.5 else -(x[0] - 1.0) ** 2
    result = maximize(f, [0.6], [0.0], [3.0])
    assert result.values[0] == pytest.approx(1.0, abs=1e-5)


def test_maximize_warns_when_capped(caplog):
    with caplog.at_level(logging.WARNING, logger="hydrofreq.numerics.optimization"):
        result = maximize(rosenbrock, [-1.0, 2.0], [-5.0, -5.0], [5.0, 5.0],
                          OptimizerSettings(max_iterations=5))
    assert not result.converged
    assert "did not converge" in caplog.text
    assert np.all(np.isfinite(result.values))


def test_maximize_scalar():
    assert maximize_scalar(lambda x: -(x - 2.5) ** 2, 0.0, 10.0) == pytest.approx(2.5, abs=1e-6)
