"""Special functions used by the distribution families.

Most entries are thin, named wrappers around :mod:`scipy.special` so the
family modules read like the formulas they implement. The frequency factor
functions implement the Pearson type III frequency factor K(γ, p) used in
flood-frequency practice: the Cornish–Fisher expansion for |γ| ≤ 2 and the
modified Wilson–Hilferty transformation of Kirby (1972), with the polynomial
coefficients of Hoshi and Burges (1981), beyond that.
"""
from __future__ import annotations

import numpy as np
from scipy import special as sc

from ..array_backend.utils import _as_float_array, _restore
from ..custom_types import ArrayLike, FloatOrArray

__all__ = [
    "EULER_GAMMA",
    "STANDARD_Z_LIMIT",
    "gamma",
    "log_gamma",
    "digamma",
    "trigamma",
    "beta",
    "log_beta",
    "incomplete_gamma_lower",
    "incomplete_gamma_upper",
    "inverse_incomplete_gamma_lower",
    "incomplete_beta",
    "inverse_incomplete_beta",
    "erf",
    "erfc",
    "erf_inv",
    "erfc_inv",
    "standard_normal_cdf",
    "standard_normal_pdf",
    "standard_z",
    "frequency_factor",
    "frequency_factor_derivative",
]

EULER_GAMMA = float(np.euler_gamma)

# Largest |z| reachable in double precision: ndtri(nextafter(0, 1)) is about -8.2221.
STANDARD_Z_LIMIT = 8.2220822161304348


gamma = sc.gamma
log_gamma = sc.gammaln
digamma = sc.digamma
beta = sc.beta
log_beta = sc.betaln
incomplete_gamma_lower = sc.gammainc
incomplete_gamma_upper = sc.gammaincc
inverse_incomplete_gamma_lower = sc.gammaincinv
incomplete_beta = sc.betainc
inverse_incomplete_beta = sc.betaincinv
erf = sc.erf
erfc = sc.erfc
erf_inv = sc.erfinv
erfc_inv = sc.erfcinv
standard_normal_cdf = sc.ndtr


def trigamma(x: ArrayLike) -> FloatOrArray:
    """Second derivative of log Γ(x)."""
    values, scalar = _as_float_array(x)
    return _restore(sc.polygamma(1, values), scalar)


def standard_normal_pdf(z: ArrayLike) -> FloatOrArray:
    values, scalar = _as_float_array(z)
    return _restore(np.exp(-0.5 * values * values) / np.sqrt(2.0 * np.pi), scalar)


def standard_z(probability: ArrayLike) -> FloatOrArray:
    """Standard normal quantile, clamped to ±STANDARD_Z_LIMIT at p = 0 and p = 1."""
    values, scalar = _as_float_array(probability)
    z = np.clip(sc.ndtri(values), -STANDARD_Z_LIMIT, STANDARD_Z_LIMIT)
    return _restore(z, scalar)


# ------------------------- frequency factors -------------------------

# Hoshi and Burges (1981) polynomials in |γ| for 1/A, B and G.
_KIRBY_A = (0.00199447, 0.48489, 0.0230935, -0.0152435, 0.00160597, -0.000055869)
_KIRBY_B = (0.990562, 0.0319647, -0.0274231, 0.00777405, -0.000571184, 0.0000142077)
_KIRBY_G = (-0.00385205, 1.00426, 0.00651207, -0.0149166, 0.00163945, -0.0000583804)


def _poly(coefficients, x):
    return sum(c * x ** i for i, c in enumerate(coefficients))


def _cornish_fisher_terms(z):
    """The z-polynomials multiplying γ^k/2^m in the Cornish–Fisher expansion."""
    return (
        z,
        (z ** 2 - 1.0) / 3.0,
        (z ** 3 - 7.0 * z) / 9.0,
        (6.0 * z ** 4 + 14.0 * z ** 2 - 32.0) / 405.0,
        (9.0 * z ** 5 + 256.0 * z ** 3 - 433.0 * z) / 4860.0,
        (12.0 * z ** 6 - 143.0 * z ** 4 - 923.0 * z ** 2 + 1472.0) / 25515.0,
        (3753.0 * z ** 7 + 4353.0 * z ** 5 - 289517.0 * z ** 3 - 289717.0 * z) / 9185400.0,
    )


# (divisor, sign) for each γ^k term, k = 1..6
_CF_SCALE = ((2.0, 1.0), (16.0, 1.0), (32.0, -1.0), (128.0, 1.0), (256.0, 1.0), (1024.0, -1.0))


def _kirby(skew: float, z):
    c = min(abs(skew), 9.75)
    A = 1.0 / _poly(_KIRBY_A, c)
    B = _poly(_KIRBY_B, c)
    G = _poly(_KIRBY_G, c)
    H = np.cbrt(B - 2.0 / (c * A))
    zs = np.sign(skew) * z
    inner = np.maximum(H, 1.0 - (G / 6.0) ** 2 + G / 6.0 * zs)
    return np.sign(skew) * A * (inner ** 3 - B)


def frequency_factor(skew: float, probability: ArrayLike) -> FloatOrArray:
    """Pearson type III frequency factor K such that Q(p) = μ + σ·K(γ, p).

    Args:
        skew: Skew coefficient γ.
        probability: Non-exceedance probability, scalar or array.

    Returns:
        K(γ, p) with the same scalar/array form as `probability`.
    """
    values, scalar = _as_float_array(probability)
    z = np.asarray(standard_z(values), dtype=float)
    if abs(skew) < 1e-4:
        return _restore(z, scalar)
    if abs(skew) <= 2.0:
        terms = _cornish_fisher_terms(z)
        k = terms[0].copy()
        for power, (divisor, sign) in enumerate(_CF_SCALE, start=1):
            k = k + sign * skew ** power / divisor * terms[power]
        return _restore(k, scalar)
    return _restore(_kirby(skew, z), scalar)


def frequency_factor_derivative(skew: float, probability: ArrayLike) -> FloatOrArray:
    """Partial derivative ∂K/∂γ of :func:`frequency_factor`."""
    values, scalar = _as_float_array(probability)
    if abs(skew) <= 2.0:
        z = np.asarray(standard_z(values), dtype=float)
        terms = _cornish_fisher_terms(z)
        dk = np.zeros_like(z)
        for power, (divisor, sign) in enumerate(_CF_SCALE, start=1):
            dk = dk + sign * power * skew ** (power - 1) / divisor * terms[power]
        return _restore(dk, scalar)
    h = 1e-4
    upper = np.asarray(frequency_factor(skew + h, values), dtype=float)
    lower = np.asarray(frequency_factor(skew - h, values), dtype=float)
    return _restore((upper - lower) / (2.0 * h), scalar)
