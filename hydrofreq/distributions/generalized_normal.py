"""Generalized normal (GNO) distribution, Hosking's three-parameter log-normal."""
from __future__ import annotations

import numpy as np

from ..numerics.root_finding import brent
from ..numerics.special import standard_normal_cdf, standard_z
from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["GeneralizedNormal"]

NEAR_ZERO = 1e-4

_SQRT_2PI = np.sqrt(2.0 * np.pi)

# Hosking (1997) rational approximations, see Hosking & Wallis, Regional Frequency Analysis.
_E = (2.0466534, -3.6544371, 1.8396733, -0.20360244)
_F = (-2.0182173, 1.2420401, -0.21741801)
_A = (4.8860251e-1, 4.4493076e-3, 8.8027039e-4, 1.1507084e-6)
_B = (6.4662924e-2, 3.3090406e-3, 7.4290680e-5)
_C = (1.8756590e-1, -2.5352147e-3, 2.6995102e-4, -1.8446680e-6)
_D = (8.2325617e-2, 4.2681448e-3, 1.1653690e-4)
_TAU4_NORMAL = 1.2260172e-1


def _even_rational(numerator, denominator, x2):
    num = sum(c * x2 ** i for i, c in enumerate(numerator))
    den = 1.0 + sum(c * x2 ** (i + 1) for i, c in enumerate(denominator))
    return num / den


def _lognormal_skew(s2: float) -> float:
    return (np.exp(s2) + 2.0) * np.sqrt(np.expm1(s2))


class GeneralizedNormal(UnivariateDistribution):
    """GNO distribution, F(x) = Φ(y), y = -ln(1 - κ(x - ξ)/α)/κ.

    κ = 0 is the normal distribution with mean ξ and standard deviation α.
    Otherwise X is a shifted, possibly reflected, log-normal variable: the
    support is bounded above at ξ + α/κ for κ > 0 and below for κ < 0.

    Args:
        xi: Location ξ. Defaults to 100.
        alpha: Scale α, > 0. Defaults to 10.
        kappa: Shape κ. Defaults to 0.
    """

    distribution_type = DistributionType.GENERALIZED_NORMAL
    display_name = "Generalized Normal"
    short_display_name = "GNO"
    parameter_names = ("Location (ξ)", "Scale (α)", "Shape (κ)")
    parameter_symbols = ("ξ", "α", "κ")
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.METHOD_OF_LINEAR_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })
    _positive_parameters = (1,)

    xi = parameter(0, "Location ξ.")
    alpha = parameter(1, "Scale α.")
    kappa = parameter(2, "Shape κ.")

    def __init__(self, xi: float = 100.0, alpha: float = 10.0, kappa: float = 0.0):
        super().__init__([xi, alpha, kappa])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[1] <= 0.0:
            return "The scale parameter α (alpha) must be positive."
        return reason

    def _reduced(self, x):
        y = (x - self.xi) / self.alpha
        if abs(self.kappa) > NEAR_ZERO:
            y = -np.log1p(-self.kappa * y) / self.kappa
        return y

    # ----------------------------- evaluation -----------------------------

    def _support(self):
        xi, alpha, kappa = self._params
        if kappa < -NEAR_ZERO:
            return xi + alpha / kappa, np.inf
        if kappa > NEAR_ZERO:
            return -np.inf, xi + alpha / kappa
        return -np.inf, np.inf

    def _logpdf(self, x):
        y = self._reduced(x)
        kappa = self.kappa if abs(self.kappa) > NEAR_ZERO else 0.0
        return kappa * y - 0.5 * y ** 2 - np.log(self.alpha * _SQRT_2PI)

    def _pdf(self, x):
        return np.exp(self._logpdf(x))

    def _cdf(self, x):
        return standard_normal_cdf(self._reduced(x))

    def _sf(self, x):
        return standard_normal_cdf(-self._reduced(x))

    def _ppf(self, p):
        z = np.asarray(standard_z(p), dtype=float)
        if abs(self.kappa) <= NEAR_ZERO:
            return self.xi + self.alpha * z
        return self.xi + self.alpha / self.kappa * -np.expm1(-self.kappa * z)

    # ------------------------------ moments ------------------------------

    def central_moments(self):
        if not self.parameters_valid:
            return np.full(4, np.nan)
        if "moments" not in self._cache:
            xi, alpha, kappa = self._params
            if abs(kappa) <= NEAR_ZERO:
                moments = [xi, alpha, 0.0, 3.0]
            else:
                s2 = kappa ** 2
                moments = [
                    xi - alpha * np.expm1(0.5 * s2) / kappa,
                    alpha / abs(kappa) * np.exp(0.5 * s2) * np.sqrt(np.expm1(s2)),
                    -np.sign(kappa) * _lognormal_skew(s2),
                    np.exp(4.0 * s2) + 2.0 * np.exp(3.0 * s2) + 3.0 * np.exp(2.0 * s2) - 3.0,
                ]
            self._cache["moments"] = np.array(moments, dtype=float)
        return self._cache["moments"].copy()

    def _median(self):
        return self.xi

    def _mode(self):
        xi, alpha, kappa = self._params
        if abs(kappa) <= NEAR_ZERO:
            return xi
        # Peak of the density at y = κ.
        return xi + alpha / kappa * -np.expm1(-kappa ** 2)

    # ---------------------------- estimation ----------------------------

    def parameters_from_moments(self, moments):
        """Solve κ² from the magnitude of the skew, the sign of κ opposite to it.

        Raises:
            ValueError: If the skew is beyond the reachable range.
        """
        mean, sd, skew = moments[0], moments[1], moments[2]
        s2_max = 9.0
        if abs(skew) >= _lognormal_skew(s2_max):
            raise ValueError(f"skew {skew:g} is outside the feasible range.")
        if abs(skew) < 1e-8:
            return np.array([mean, sd, 0.0])
        s2 = brent(lambda u: _lognormal_skew(u) - abs(skew), 0.0, s2_max)
        kappa = -np.sign(skew) * np.sqrt(s2)
        if abs(kappa) <= NEAR_ZERO:
            return np.array([mean, sd, kappa])
        alpha = sd * abs(kappa) * np.exp(-0.5 * s2) / np.sqrt(np.expm1(s2))
        xi = mean + alpha * np.expm1(0.5 * s2) / kappa
        return np.array([xi, alpha, kappa])

    def parameters_from_linear_moments(self, moments):
        """Rational approximation of κ from τ3, valid for |τ3| < 0.95.

        Raises:
            ValueError: If |τ3| ≥ 0.95.
        """
        l1, l2, t3 = moments[0], moments[1], moments[2]
        if abs(t3) >= 0.95:
            raise ValueError("L-skewness must be within (-0.95, 0.95).")
        kappa = -t3 * _even_rational(_E, _F, t3 ** 2)
        if abs(kappa) <= NEAR_ZERO:
            return np.array([l1, l2 * np.sqrt(np.pi), kappa])
        e = np.exp(0.5 * kappa ** 2)
        alpha = l2 * kappa / (e * (1.0 - 2.0 * standard_normal_cdf(-kappa / np.sqrt(2.0))))
        xi = l1 - alpha * (1.0 - e) / kappa
        return np.array([xi, alpha, kappa])

    def linear_moments_from_parameters(self, values):
        xi, alpha, kappa = values
        k2 = kappa ** 2
        t3 = -kappa * _even_rational(_A, _B, k2)
        t4 = _TAU4_NORMAL + k2 * _even_rational(_C, _D, k2)
        if abs(kappa) <= NEAR_ZERO:
            return np.array([xi, alpha / np.sqrt(np.pi), t3, t4])
        e = np.exp(0.5 * k2)
        return np.array([
            xi + alpha * (1.0 - e) / kappa,
            alpha / kappa * e * (1.0 - 2.0 * standard_normal_cdf(-kappa / np.sqrt(2.0))),
            t3,
            t4,
        ])

    def parameter_constraints(self, sample):
        """Bounds for maximum likelihood; the shape is searched in [-10, 10]."""
        initial, lower, upper = super().parameter_constraints(sample)
        lower[2], upper[2] = -10.0, 10.0
        if not -10.0 < initial[2] < 10.0:
            initial[2] = 0.0
        return initial, lower, upper

    # ---------------------------- delta method ----------------------------

    def quantile_gradient(self, probability):
        alpha, kappa = self.alpha, self.kappa
        z = float(standard_z(probability))
        if abs(kappa) <= NEAR_ZERO:
            return np.array([1.0, z, -0.5 * alpha * z ** 2])
        w = np.exp(-kappa * z)
        return np.array([
            1.0,
            (1.0 - w) / kappa,
            -alpha / kappa ** 2 * (1.0 - w) + alpha / kappa * z * w,
        ])
