"""Quadrature helpers built on :mod:`scipy.integrate`."""
from __future__ import annotations

from functools import lru_cache
from typing import Callable, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray
from scipy import integrate as si

from ..config import DEFAULT_INTEGRATION, IntegrationSettings

__all__ = ["integrate", "unit_gauss_legendre"]


def integrate(f: Callable[[float], float], lower: float, upper: float,
              settings: IntegrationSettings | None = None,
              points: Sequence[float] | None = None) -> float:
    """Adaptive quadrature of `f` over [lower, upper].

    Args:
        f: Scalar integrand.
        lower: Lower limit; may be -inf.
        upper: Upper limit; may be +inf.
        settings: Subdivision limit. Defaults to ``DEFAULT_INTEGRATION``.
        points: Optional interior break points (for example, component modes
            of a mixture). Ignored for infinite limits, which QUADPACK does
            not combine with break points.

    Returns:
        The integral estimate.
    """
    settings = settings or DEFAULT_INTEGRATION
    if lower == upper:
        return 0.0
    kwargs = {"limit": settings.limit}
    if points is not None and np.isfinite(lower) and np.isfinite(upper):
        inside = sorted(p for p in points if lower < p < upper)
        if inside:
            kwargs["points"] = inside
    value, _ = si.quad(f, lower, upper, **kwargs)
    return float(value)


@lru_cache(maxsize=16)
def _legendre(n: int) -> Tuple[NDArray, NDArray]:
    x, w = np.polynomial.legendre.leggauss(n)
    return 0.5 * (x + 1.0), 0.5 * w


def unit_gauss_legendre(n: int) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
    """Gauss–Legendre nodes and weights mapped to the open interval (0, 1)."""
    u, w = _legendre(int(n))
    return u.copy(), w.copy()
