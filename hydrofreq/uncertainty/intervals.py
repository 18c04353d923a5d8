"""Confidence-interval reductions of bootstrap replicate arrays.

Every function takes replicate statistics as a (B, P) array, one column per
quantile of interest, where failed replicates are rows of NaN. They return a
(P, 2) array of lower and upper bounds at confidence level 1 - alpha.

The normal and bootstrap-t intervals work on the cube root of the quantile,
which makes them approximately transformation invariant for skewed flood
quantiles.
"""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from ..array_backend.utils import _as_array, _ensure_real_scalar, _ensure_vector
from ..custom_types import ArrayLike
from ..numerics.special import standard_normal_cdf, standard_z
from ..statistics.moments import percentile

__all__ = [
    "percentile_interval",
    "normal_interval",
    "bias_corrected_interval",
    "bca_interval",
    "bootstrap_t_interval",
    "acceleration",
    "bias_correction",
]


def _check_alpha(alpha: float) -> float:
    alpha = _ensure_real_scalar(alpha)
    if not 0.0 < alpha < 1.0:
        raise ValueError("alpha must be in (0, 1).")
    return alpha


def _columns(replicates: ArrayLike) -> NDArray[np.floating]:
    R = _as_array(replicates)
    if R.ndim == 1:
        R = R.reshape(-1, 1)
    if R.ndim != 2:
        raise ValueError(f"replicates must be a (B, P) array; got shape {R.shape}.")
    return R


def _finite_std(values: NDArray) -> float:
    v = values[np.isfinite(values)]
    return float(np.std(v, ddof=1)) if v.size > 1 else np.nan


def percentile_interval(replicates: ArrayLike, alpha: float = 0.1) -> NDArray[np.floating]:
    """Empirical alpha/2 and 1 - alpha/2 quantiles of the valid replicates."""
    alpha = _check_alpha(alpha)
    R = _columns(replicates)
    levels = [alpha / 2.0, 1.0 - alpha / 2.0]
    return np.array([percentile(R[:, i], levels) for i in range(R.shape[1])]).reshape(-1, 2)


def normal_interval(estimates: ArrayLike, replicates: ArrayLike, alpha: float = 0.1) -> NDArray[np.floating]:
    """(θ̂^⅓ ± z·SE)³ with SE the standard deviation of the cube-rooted replicates."""
    alpha = _check_alpha(alpha)
    R = _columns(replicates)
    theta = np.cbrt(_ensure_vector(estimates, length=R.shape[1]))
    z = standard_z(1.0 - alpha / 2.0)
    out = np.empty((R.shape[1], 2))
    for i in range(R.shape[1]):
        se = _finite_std(np.cbrt(R[:, i]))
        out[i] = (theta[i] - z * se) ** 3, (theta[i] + z * se) ** 3
    return out


def bias_correction(estimate: float, replicates: NDArray) -> float:
    """z₀ = Φ⁻¹(#{θ* ≤ θ̂} / (B + 1)) over the valid replicates."""
    valid = replicates[np.isfinite(replicates)]
    p0 = np.count_nonzero(valid <= estimate) / (valid.size + 1.0)
    return float(standard_z(p0))


def bias_corrected_interval(estimates: ArrayLike, replicates: ArrayLike,
                            alpha: float = 0.1) -> NDArray[np.floating]:
    """Percentiles at Φ(2z₀ + z_{α/2}) and Φ(2z₀ + z_{1-α/2})."""
    return bca_interval(estimates, replicates, np.zeros(_columns(replicates).shape[1]), alpha)


def acceleration(estimates: ArrayLike, jackknife_estimates: ArrayLike) -> NDArray[np.floating]:
    """BCa acceleration a = Σd³ / (6 (Σd²)^{3/2}) with d = θ̂ - θ₍ⱼ₎.

    Args:
        estimates: θ̂ per column, shape (P,).
        jackknife_estimates: Leave-one-out estimates, shape (n, P). Rows where
            the refit failed are NaN and are skipped.

    Returns:
        Acceleration per column; zero where there is no spread.
    """
    J = _columns(jackknife_estimates)
    theta = _ensure_vector(estimates, length=J.shape[1])
    d = theta[np.newaxis, :] - J
    d = np.where(np.isfinite(d), d, 0.0)
    s2 = np.sum(d ** 2, axis=0)
    s3 = np.sum(d ** 3, axis=0)
    with np.errstate(divide="ignore", invalid="ignore"):
        a = s3 / (6.0 * s2 ** 1.5)
    return np.where(s2 > 0.0, a, 0.0)


def bca_interval(estimates: ArrayLike, replicates: ArrayLike, acceleration_constants: ArrayLike,
                 alpha: float = 0.1) -> NDArray[np.floating]:
    """Bias-corrected and accelerated percentile interval (Efron, 1987).

    Levels are Φ(z₀ + (z₀ + z)/(1 - a(z₀ + z))) for z at α/2 and 1 - α/2.
    """
    alpha = _check_alpha(alpha)
    R = _columns(replicates)
    theta = _ensure_vector(estimates, length=R.shape[1])
    a = _ensure_vector(acceleration_constants, length=R.shape[1])
    z = standard_z(np.array([alpha / 2.0, 1.0 - alpha / 2.0]))
    out = np.empty((R.shape[1], 2))
    for i in range(R.shape[1]):
        z0 = bias_correction(theta[i], R[:, i])
        levels = standard_normal_cdf(z0 + (z0 + z) / (1.0 - a[i] * (z0 + z)))
        out[i] = percentile(R[:, i], levels)
    return out


def bootstrap_t_interval(estimates: ArrayLike, replicates: ArrayLike, standard_errors: ArrayLike,
                         alpha: float = 0.1) -> NDArray[np.floating]:
    """Studentized interval on the cube-root scale.

    t* = (θ*^⅓ - θ̂^⅓)/se*, where se* is the standard error of each replicate
    (on the cube-root scale) from its own sample. The bounds are
    (θ̂^⅓ - SE·t*_{1-α/2}, θ̂^⅓ - SE·t*_{α/2})³ with SE the standard deviation
    of the cube-rooted replicates.

    Args:
        estimates: θ̂ per column, shape (P,).
        replicates: θ* per replicate, shape (B, P).
        standard_errors: se* per replicate, shape (B, P).
        alpha: Significance level.
    """
    alpha = _check_alpha(alpha)
    R = _columns(replicates)
    S = _columns(standard_errors)
    if S.shape != R.shape:
        raise ValueError("replicates and standard_errors must have the same shape.")
    theta = np.cbrt(_ensure_vector(estimates, length=R.shape[1]))
    C = np.cbrt(R)
    with np.errstate(divide="ignore", invalid="ignore"):
        T = (C - theta[np.newaxis, :]) / S
    out = np.empty((R.shape[1], 2))
    for i in range(R.shape[1]):
        t = T[:, i]
        t_lo, t_hi = percentile(t[np.isfinite(t)], [alpha / 2.0, 1.0 - alpha / 2.0])
        se = _finite_std(C[:, i])
        out[i] = (theta[i] - se * t_hi) ** 3, (theta[i] - se * t_lo) ** 3
    return out
