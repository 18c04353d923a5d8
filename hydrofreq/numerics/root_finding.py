"""Scalar root finders used by estimators and numerical inverse CDFs.

All finders take a :class:`~hydrofreq.config.SolverSettings` and raise
:class:`~hydrofreq.exceptions.ConvergenceError` instead of returning a
silently wrong value.
"""
from __future__ import annotations

import logging
from typing import Callable, Tuple

import numpy as np
from scipy import optimize

from ..config import DEFAULT_SOLVER, SolverSettings
from ..exceptions import ConvergenceError

__all__ = ["bisection", "brent", "newton_raphson", "expand_bracket", "solve_bracketed"]

log = logging.getLogger(__name__)

ScalarFunction = Callable[[float], float]


def _check_sign_change(f_lo: float, f_hi: float, lower: float, upper: float) -> None:
    if not (np.isfinite(f_lo) and np.isfinite(f_hi)):
        raise ConvergenceError(f"function is not finite at the bracket [{lower}, {upper}].")
    if np.sign(f_lo) == np.sign(f_hi) and f_lo != 0.0 and f_hi != 0.0:
        raise ConvergenceError(f"root is not bracketed by [{lower}, {upper}].")


def bisection(f: ScalarFunction, lower: float, upper: float,
              settings: SolverSettings | None = None) -> float:
    """Root of `f` in [lower, upper] by interval halving."""
    settings = settings or DEFAULT_SOLVER
    _check_sign_change(f(lower), f(upper), lower, upper)
    try:
        return float(optimize.bisect(f, lower, upper, xtol=settings.tolerance,
                                     maxiter=settings.max_iterations))
    except RuntimeError as err:
        raise ConvergenceError(str(err)) from err


def brent(f: ScalarFunction, lower: float, upper: float,
          settings: SolverSettings | None = None) -> float:
    """Root of `f` in [lower, upper] by Brent's method."""
    settings = settings or DEFAULT_SOLVER
    _check_sign_change(f(lower), f(upper), lower, upper)
    try:
        return float(optimize.brentq(f, lower, upper, xtol=settings.tolerance,
                                     maxiter=settings.max_iterations))
    except RuntimeError as err:
        raise ConvergenceError(str(err)) from err


def newton_raphson(f: ScalarFunction, df: ScalarFunction, initial: float,
                   settings: SolverSettings | None = None) -> float:
    """Root of `f` by Newton–Raphson iteration from `initial`."""
    settings = settings or DEFAULT_SOLVER
    try:
        root = optimize.newton(f, initial, fprime=df, tol=settings.tolerance,
                               maxiter=settings.max_iterations)
    except (RuntimeError, ZeroDivisionError) as err:
        raise ConvergenceError(str(err)) from err
    if not np.isfinite(root):
        raise ConvergenceError("Newton-Raphson iteration diverged.")
    return float(root)


def expand_bracket(f: ScalarFunction, lower: float, upper: float,
                   settings: SolverSettings | None = None, *,
                   minimum: float = -np.inf, maximum: float = np.inf) -> Tuple[float, float]:
    """Grow [lower, upper] geometrically until `f` changes sign.

    The ends never move past `minimum` and `maximum`, which is how callers
    keep the search inside a distribution's support.

    Raises:
        ConvergenceError: If no sign change is found within
            ``settings.bracket_expansions`` steps.
    """
    settings = settings or DEFAULT_SOLVER
    if lower > upper:
        lower, upper = upper, lower
    if lower == upper:
        width = max(abs(lower) * 1e-3, 1e-3)
        lower, upper = lower - width, upper + width
    lower, upper = max(lower, minimum), min(upper, maximum)
    f_lo, f_hi = f(lower), f(upper)
    for _ in range(settings.bracket_expansions):
        if np.isfinite(f_lo) and np.isfinite(f_hi) and np.sign(f_lo) != np.sign(f_hi):
            return lower, upper
        if f_lo == 0.0 or f_hi == 0.0:
            return lower, upper
        width = upper - lower
        if np.isfinite(f_lo) and np.isfinite(f_hi) and f_lo == f_hi:
            # flat over the bracket (a saturated CDF); f is taken as increasing
            grow_lower = f_lo > 0.0
        else:
            grow_lower = np.isfinite(f_lo) and np.isfinite(f_hi) and abs(f_lo) < abs(f_hi)
        if lower <= minimum:
            grow_lower = False
        elif upper >= maximum:
            grow_lower = True
        if grow_lower:
            lower = max(lower - 1.6 * width, minimum)
            f_lo = f(lower)
        else:
            upper = min(upper + 1.6 * width, maximum)
            f_hi = f(upper)
    raise ConvergenceError(f"could not bracket a root; last bracket [{lower}, {upper}].")


def solve_bracketed(f: ScalarFunction, lower: float, upper: float,
                    settings: SolverSettings | None = None, *,
                    minimum: float = -np.inf, maximum: float = np.inf) -> float:
    """Expand [lower, upper] until it brackets a root, then apply Brent's method."""
    lower, upper = expand_bracket(f, lower, upper, settings, minimum=minimum, maximum=maximum)
    log.debug("bracket found: [%g, %g]", lower, upper)
    return brent(f, lower, upper, settings)
