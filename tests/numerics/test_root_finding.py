import numpy as np
import pytest

from hydrofreq.config import SolverSettings
from hydrofreq.exceptions import ConvergenceError
from hydrofreq.numerics.root_finding import bisection, brent, expand_bracket, newton_raphson, solve_bracketed


def cubic(x):
    return x ** 3 - 2.0 * x - 5.0


CUBIC_ROOT = 2.0945514815423265


@pytest.mark.parametrize("solver", [bisection, brent])
def test_bracketed_solvers_find_root(solver):
    assert solver(cubic, 2.0, 3.0) == pytest.approx(CUBIC_ROOT, abs=1e-9)


@pytest.mark.parametrize("solver", [bisection, brent])
def test_bracketed_solvers_require_sign_change(solver):
    with pytest.raises(ConvergenceError):
        solver(cubic, 3.0, 4.0)


def test_brent_rejects_non_finite_end():
    with pytest.raises(ConvergenceError):
        brent(lambda x: np.log(x), -1.0, 2.0)


def test_newton_raphson():
    root = newton_raphson(cubic, lambda x: 3.0 * x ** 2 - 2.0, 2.0)
    assert root == pytest.approx(CUBIC_ROOT, abs=1e-9)


def test_newton_raphson_reports_failure():
    settings = SolverSettings(max_iterations=3)
    with pytest.raises(ConvergenceError):
        newton_raphson(lambda x: x ** 2 + 1.0, lambda x: 2.0 * x, 0.5, settings)


def test_expand_bracket_grows_until_sign_change():
    lower, upper = expand_bracket(lambda x: x - 100.0, 0.0, 1.0)
    assert lower <= 100.0 <= upper


def test_expand_bracket_respects_limits():
    lower, upper = expand_bracket(lambda x: x - 0.5, 0.9, 0.95, minimum=0.0, maximum=1.0)
    assert 0.0 <= lower <= 0.5 <= upper <= 1.0


def test_expand_bracket_gives_up():
    with pytest.raises(ConvergenceError):
        expand_bracket(lambda x: x * x + 1.0, -1.0, 1.0, SolverSettings(bracket_expansions=5))


def test_solve_bracketed():
    assert solve_bracketed(lambda x: np.exp(x) - 50.0, 0.0, 1.0) == pytest.approx(np.log(50.0), abs=1e-9)


@pytest.mark.parametrize("lower, upper, minimum", [(16.0, 32.0, 0.0), (-5.0, -1.0, -np.inf)])
def test_expand_bracket_moves_off_a_flat_stretch(lower, upper, minimum):
    target = 8.0

    # a CDF minus p that is clipped to a constant beyond the root on either side
    def f(x):
        return float(np.clip(x / 10.0, 0.0, 1.0)) - target / 10.0

    lo, hi = expand_bracket(f, lower, upper, minimum=minimum)
    assert lo <= target <= hi
    assert solve_bracketed(f, lower, upper, minimum=minimum) == pytest.approx(target, abs=1e-8)
