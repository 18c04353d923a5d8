"""Generalized extreme value (GEV) distribution in Hosking's parameterization."""
from __future__ import annotations

import numpy as np
from scipy import stats

from ..numerics.root_finding import brent
from ..numerics.special import EULER_GAMMA, digamma, gamma as gamma_function
from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter
from .gumbel import Gumbel

__all__ = ["GeneralizedExtremeValue"]

NEAR_ZERO = 1e-4

# Shape search range for the method of moments; the skew diverges at κ = -1/3.
_MOM_KAPPA_RANGE = (-1.0 / 3.0 + 1e-8, 30.0)


def _skew_from_kappa(kappa: float) -> float:
    return float(stats.genextreme.stats(kappa, moments="s"))


class GeneralizedExtremeValue(UnivariateDistribution):
    """GEV distribution, F(x) = exp(-(1 - κ(x - ξ)/α)^{1/κ}).

    κ > 0 gives an upper bound at ξ + α/κ (Weibull type), κ < 0 a lower bound
    at ξ + α/κ (Fréchet type) and κ = 0 is the Gumbel distribution. The sign
    convention matches scipy's ``genextreme`` shape ``c``.

    Args:
        xi: Location ξ. Defaults to 100.
        alpha: Scale α, > 0. Defaults to 10.
        kappa: Shape κ. Defaults to 0.
    """

    distribution_type = DistributionType.GENERALIZED_EXTREME_VALUE
    display_name = "Generalized Extreme Value"
    short_display_name = "GEV"
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

    @property
    def _is_gumbel(self) -> bool:
        return abs(self.kappa) <= NEAR_ZERO

    def _scipy_distribution(self):
        return stats.genextreme(self.kappa, loc=self.xi, scale=self.alpha)

    def _support(self):
        xi, alpha, kappa = self._params
        if kappa < -NEAR_ZERO:
            return xi + alpha / kappa, np.inf
        if kappa > NEAR_ZERO:
            return -np.inf, xi + alpha / kappa
        return -np.inf, np.inf

    def _median(self):
        xi, alpha, kappa = self._params
        if self._is_gumbel:
            return xi - alpha * np.log(np.log(2.0))
        return xi + alpha * (1.0 - np.log(2.0) ** kappa) / kappa

    def _mode(self):
        xi, alpha, kappa = self._params
        if self._is_gumbel:
            return xi
        if kappa >= 1.0:
            return xi + alpha / kappa
        return xi + alpha * (1.0 - (1.0 - kappa) ** kappa) / kappa

    # ---------------------------- estimation ----------------------------

    def parameters_from_moments(self, moments):
        """Solve κ from the skew, then α and ξ from the standard deviation and mean.

        Raises:
            ValueError: If the skew is outside the range reachable for κ > -1/3.
        """
        mean, sd, skew = moments[0], moments[1], moments[2]
        lo, hi = _MOM_KAPPA_RANGE
        skew_lo, skew_hi = _skew_from_kappa(hi), _skew_from_kappa(lo)
        if not skew_lo < skew < skew_hi:
            raise ValueError(
                f"skew {skew:g} is outside the feasible range ({skew_lo:g}, {skew_hi:g})."
            )
        kappa = brent(lambda k: _skew_from_kappa(k) - skew, lo, hi)
        if abs(kappa) <= NEAR_ZERO:
            xi, alpha = Gumbel().parameters_from_moments(moments)
            return np.array([xi, alpha, kappa])
        u1 = gamma_function(1.0 + kappa)
        u2 = gamma_function(1.0 + 2.0 * kappa)
        alpha = np.sqrt(sd ** 2 * kappa ** 2 / (u2 - u1 ** 2))
        xi = mean - alpha * (1.0 - u1) / kappa
        return np.array([xi, alpha, kappa])

    def parameters_from_linear_moments(self, moments):
        """Hosking (1985) rational approximation for κ, exact root beyond |τ3| > 0.5."""
        l1, l2, t3 = moments[0], moments[1], moments[2]
        if abs(t3) <= 0.5:
            c = 2.0 / (3.0 + t3) - np.log(2.0) / np.log(3.0)
            kappa = 7.859 * c + 2.9554 * c ** 2
        else:
            kappa = brent(
                lambda k: 2.0 * (1.0 - 3.0 ** -k) / (1.0 - 2.0 ** -k) - 3.0 - t3, -1.0 + 1e-8, 10.0
            )
        if abs(kappa) <= NEAR_ZERO:
            xi, alpha = Gumbel().parameters_from_linear_moments(moments)
            return np.array([xi, alpha, kappa])
        g = gamma_function(1.0 + kappa)
        alpha = l2 * kappa / ((1.0 - 2.0 ** -kappa) * g)
        xi = l1 - alpha * (1.0 - g) / kappa
        return np.array([xi, alpha, kappa])

    def linear_moments_from_parameters(self, values):
        xi, alpha, kappa = values
        if kappa <= -1.0:
            raise ValueError("L-moments of the GEV require κ > -1.")
        if abs(kappa) <= NEAR_ZERO:
            return Gumbel().linear_moments_from_parameters([xi, alpha])
        g = gamma_function(1.0 + kappa)
        d2 = 1.0 - 2.0 ** -kappa
        return np.array([
            xi + alpha * (1.0 - g) / kappa,
            alpha * d2 * g / kappa,
            2.0 * (1.0 - 3.0 ** -kappa) / d2 - 3.0,
            (5.0 * (1.0 - 4.0 ** -kappa) - 10.0 * (1.0 - 3.0 ** -kappa) + 6.0 * d2) / d2,
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
        log_y = np.log(-np.log(probability))
        if self._is_gumbel:
            return np.array([1.0, -log_y, -0.5 * alpha * log_y ** 2])
        y_k = np.exp(kappa * log_y)
        return np.array([
            1.0,
            (1.0 - y_k) / kappa,
            -alpha / kappa ** 2 * (1.0 - y_k) - alpha / kappa * y_k * log_y,
        ])

    def expected_information(self, sample_size: int = 1):
        """Closed-form information matrix of Prescott and Walden (1980) for κ < 1/2.

        Falls back to quadrature near the Gumbel limit and for κ ≥ 1/2.
        """
        a, k = self.alpha, self.kappa
        if self._is_gumbel or k >= 0.5:
            return super().expected_information(sample_size)
        n = float(sample_size)
        p = (1.0 - k) ** 2 * gamma_function(1.0 - 2.0 * k)
        gk = (1.0 - k) * gamma_function(1.0 - k)
        q = gk * (digamma(1.0 - k) - (1.0 - k) / k)
        i_uu = n / a ** 2 * p
        i_aa = n / (a ** 2 * k ** 2) * (1.0 - 2.0 * gk + p)
        i_kk = n / k ** 2 * (np.pi ** 2 / 6.0 + (1.0 - EULER_GAMMA - 1.0 / k) ** 2 + 2.0 * q / k + p / k ** 2)
        i_ua = n / (a ** 2 * k) * (p - gk)
        i_uk = -n / (a * k) * (p / k + q)
        i_ak = n / (a * k ** 2) * (1.0 - EULER_GAMMA - (1.0 - gk) / k - p / k - q)
        return np.array([
            [i_uu, i_ua, i_uk],
            [i_ua, i_aa, i_ak],
            [i_uk, i_ak, i_kk],
        ])
