"""Bounded Nelder–Mead maximization used by maximum likelihood estimation."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np
from numpy.typing import NDArray
from scipy import optimize

from ..config import DEFAULT_OPTIMIZER, OptimizerSettings

__all__ = ["OptimizationResult", "maximize", "maximize_scalar"]

log = logging.getLogger(__name__)

# Finite stand-in for -inf so the simplex can move away from infeasible vertices.
_PENALTY = -1e300


@dataclass
class OptimizationResult:
    values: NDArray[np.floating]
    objective: float
    converged: bool
    iterations: int


def maximize(f: Callable[[NDArray], float], initial: NDArray, lower: NDArray, upper: NDArray,
             settings: OptimizerSettings | None = None) -> OptimizationResult:
    """Maximize `f` inside the box [lower, upper] starting from `initial`.

    Non-finite objective values are replaced by a large finite penalty. When
    the iteration cap is reached the best point found is still returned, with
    ``converged=False`` and a logged warning.
    """
    settings = settings or DEFAULT_OPTIMIZER
    lower = np.asarray(lower, dtype=float)
    upper = np.asarray(upper, dtype=float)
    x0 = np.clip(np.asarray(initial, dtype=float), lower, upper)
    # Search in units of the starting values so the tolerances act relatively.
    scale = np.where(np.abs(x0) > 0.0, np.abs(x0), 1.0)

    def negative(y):
        value = f(y * scale)
        if not np.isfinite(value):
            return -_PENALTY
        return -value

    result = optimize.minimize(
        negative,
        x0 / scale,
        method="Nelder-Mead",
        bounds=list(zip(lower / scale, upper / scale)),
        options={
            "maxiter": settings.max_iterations,
            "maxfev": 2 * settings.max_iterations,
            "xatol": settings.x_tolerance,
            "fatol": settings.f_tolerance,
            "adaptive": x0.size > 2,
        },
    )
    if not result.success:
        log.warning("Nelder-Mead did not converge (%s); returning best point found.", result.message)
    else:
        log.debug("Nelder-Mead converged in %d iterations, objective %g", result.nit, -result.fun)
    return OptimizationResult(
        values=np.clip(np.asarray(result.x, dtype=float) * scale, lower, upper),
        objective=float(-result.fun),
        converged=bool(result.success),
        iterations=int(result.nit),
    )


def maximize_scalar(f: Callable[[float], float], lower: float, upper: float,
                    settings: OptimizerSettings | None = None) -> float:
    """Location of the maximum of a unimodal scalar function on [lower, upper]."""
    settings = settings or DEFAULT_OPTIMIZER

    def negative(x):
        value = f(x)
        return -value if np.isfinite(value) else -_PENALTY

    result = optimize.minimize_scalar(
        negative,
        bounds=(lower, upper),
        method="bounded",
        options={"xatol": settings.x_tolerance * max(abs(lower), abs(upper), 1.0),
                 "maxiter": settings.max_iterations},
    )
    return float(result.x)
