"""Central finite differences.

The step for coordinate x is ``h = ε^(1/3) · max(|x|, 1)``, the usual
compromise between truncation and round-off error for a central difference.
"""
from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.typing import NDArray

__all__ = ["step_size", "derivative", "gradient", "jacobian", "hessian"]

_CBRT_EPS = np.finfo(float).eps ** (1.0 / 3.0)


def step_size(x: float) -> float:
    return _CBRT_EPS * max(abs(float(x)), 1.0)


def derivative(f: Callable[[float], float], x: float, h: float | None = None) -> float:
    """df/dx at `x` by a central difference."""
    h = step_size(x) if h is None else h
    return (f(x + h) - f(x - h)) / (2.0 * h)


def gradient(f: Callable[[NDArray], float], x: NDArray) -> NDArray[np.floating]:
    """Gradient of a scalar function of a parameter vector."""
    x = np.asarray(x, dtype=float)
    g = np.empty_like(x)
    for i in range(x.size):
        h = step_size(x[i])
        up, down = x.copy(), x.copy()
        up[i] += h
        down[i] -= h
        g[i] = (f(up) - f(down)) / (2.0 * h)
    return g


def jacobian(f: Callable[[NDArray], NDArray], x: NDArray) -> NDArray[np.floating]:
    """Jacobian J[i, j] = ∂f_i/∂x_j of a vector function."""
    x = np.asarray(x, dtype=float)
    columns = []
    for j in range(x.size):
        h = step_size(x[j])
        up, down = x.copy(), x.copy()
        up[j] += h
        down[j] -= h
        columns.append((np.asarray(f(up), dtype=float) - np.asarray(f(down), dtype=float)) / (2.0 * h))
    return np.column_stack(columns)


def hessian(f: Callable[[NDArray], float], x: NDArray) -> NDArray[np.floating]:
    """Symmetric matrix of second partial derivatives of a scalar function."""
    x = np.asarray(x, dtype=float)
    k = x.size
    H = np.empty((k, k))
    # A slightly larger step keeps the second difference above round-off.
    steps = np.array([np.finfo(float).eps ** 0.25 * max(abs(v), 1.0) for v in x])
    f0 = f(x)
    for i in range(k):
        ei = np.zeros(k)
        ei[i] = steps[i]
        H[i, i] = (f(x + ei) - 2.0 * f0 + f(x - ei)) / steps[i] ** 2
        for j in range(i + 1, k):
            ej = np.zeros(k)
            ej[j] = steps[j]
            H[i, j] = (f(x + ei + ej) - f(x + ei - ej) - f(x - ei + ej) + f(x - ei - ej)) / (4.0 * steps[i] * steps[j])
            H[j, i] = H[i, j]
    return H
