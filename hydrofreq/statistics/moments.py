"""Sample moment estimators.

Product moments follow the bias-adjusted conventions of flood-frequency
practice (sample standard deviation with n - 1, adjusted Fisher–Pearson
skew, non-excess kurtosis). L-moments are computed from the unbiased
probability weighted moments b_r of Landwehr, Matalas and Wallis (1979)
and Hosking (1990).
"""
from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from ..array_backend.utils import _as_sample, _ensure_vector
from ..custom_types import ArrayLike

__all__ = [
    "product_moments",
    "probability_weighted_moments",
    "linear_moments",
    "percentile",
    "jackknife",
]


def product_moments(sample: ArrayLike) -> NDArray[np.floating]:
    """Return ``[mean, standard deviation, skew, kurtosis]`` of a sample.

    The kurtosis is the non-excess (Pearson) value, so a normal sample gives
    roughly 3. Skew and kurtosis need at least three and four values; fewer
    give NaN.
    """
    x = _as_sample(sample)
    n = x.size
    mean = float(np.mean(x))
    sd = float(np.std(x, ddof=1))
    skew = float(stats.skew(x, bias=False)) if n > 2 else np.nan
    kurt = float(stats.kurtosis(x, fisher=False, bias=False)) if n > 3 else np.nan
    return np.array([mean, sd, skew, kurt])


def probability_weighted_moments(sample: ArrayLike, order: int = 4) -> NDArray[np.floating]:
    """Unbiased probability weighted moments b_0 … b_{order-1}.

    b_r = n⁻¹ Σ_j [(j-1)(j-2)…(j-r) / ((n-1)(n-2)…(n-r))] x_(j) over the
    ascending order statistics x_(1) ≤ … ≤ x_(n).
    """
    x = np.sort(_as_sample(sample))
    n = x.size
    j = np.arange(1, n + 1, dtype=float)
    b = np.empty(order)
    weight = np.ones(n)
    for r in range(order):
        if r > 0:
            weight = weight * (j - r) / (n - r)
        b[r] = np.mean(weight * x)
    return b


def linear_moments(sample: ArrayLike) -> NDArray[np.floating]:
    """Return ``[λ1, λ2, τ3, τ4]``: L-location, L-scale, L-skew and L-kurtosis."""
    x = _as_sample(sample, min_size=4)
    b0, b1, b2, b3 = probability_weighted_moments(x, order=4)
    l1 = b0
    l2 = 2.0 * b1 - b0
    l3 = 6.0 * b2 - 6.0 * b1 + b0
    l4 = 20.0 * b3 - 30.0 * b2 + 12.0 * b1 - b0
    return np.array([l1, l2, l3 / l2, l4 / l2])


def percentile(sample: ArrayLike, k: float | ArrayLike) -> float | NDArray[np.floating]:
    """The k-th percentile (k in [0, 1]) with linear interpolation between order statistics."""
    x = _ensure_vector(sample)
    x = x[np.isfinite(x)]
    if x.size == 0:
        return np.nan if np.ndim(k) == 0 else np.full(np.shape(k), np.nan)
    q = np.quantile(x, k)
    return float(q) if np.ndim(q) == 0 else np.asarray(q, dtype=float)


def jackknife(sample: ArrayLike, statistic: Callable[[NDArray], float]) -> NDArray[np.floating]:
    """Leave-one-out values of `statistic`, one per observation.

    Args:
        sample: Observations.
        statistic: Function of a 1-D sample returning a scalar (or array).

    Returns:
        Array whose first axis indexes the deleted observation.
    """
    x = _ensure_vector(sample)
    n = x.size
    mask = ~np.eye(n, dtype=bool)
    return np.asarray([statistic(x[mask[i]]) for i in range(n)], dtype=float)
