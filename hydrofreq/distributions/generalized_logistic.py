"""Generalized logistic (GLO) distribution in Hosking's parameterization."""
from __future__ import annotations

import numpy as np

from ..numerics.root_finding import brent
from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["GeneralizedLogistic"]

NEAR_ZERO = 1e-4

_LOGISTIC_SD = np.pi / np.sqrt(3.0)
_LOGISTIC_KURTOSIS = 4.2


def _central_from_raw(raw):
    """``(mean, variance, skew, kurtosis)`` from the first four raw moments."""
    m1, m2, m3, m4 = raw
    with np.errstate(invalid="ignore", over="ignore"):
        var = m2 - m1 ** 2
        skew = (m3 - 3.0 * m1 * m2 + 2.0 * m1 ** 3) / var ** 1.5
        kurt = (m4 - 4.0 * m1 * m3 + 6.0 * m1 ** 2 * m2 - 3.0 * m1 ** 4) / var ** 2
    return m1, var, skew, kurt


def _power_moments(kappa: float):
    """Raw moments E[W^r], r = 1..4, of W = ((1 - F)/F)^κ; infinite once |rκ| ≥ 1."""
    out = []
    for r in range(1, 5):
        x = r * kappa * np.pi
        out.append(x / np.sin(x) if abs(r * kappa) < 1.0 else np.inf)
    return out


def _skew_from_kappa(kappa: float) -> float:
    if abs(kappa) <= NEAR_ZERO:
        return 0.0
    return float(-np.sign(kappa) * _central_from_raw(_power_moments(kappa))[2])


class GeneralizedLogistic(UnivariateDistribution):
    """GLO distribution, F(x) = 1 / (1 + e^{-y}), y = -ln(1 - κ(x - ξ)/α)/κ.

    κ = 0 is the logistic distribution; κ > 0 bounds the support above and
    κ < 0 bounds it below, both at ξ + α/κ.

    Args:
        xi: Location ξ. Defaults to 0.
        alpha: Scale α, > 0. Defaults to 1.
        kappa: Shape κ. Defaults to 0.
    """

    distribution_type = DistributionType.GENERALIZED_LOGISTIC
    display_name = "Generalized Logistic"
    short_display_name = "GLO"
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

    def __init__(self, xi: float = 0.0, alpha: float = 1.0, kappa: float = 0.0):
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

    def _pdf(self, x):
        y = self._reduced(x)
        return np.exp(-(1.0 - self.kappa) * y) / (self.alpha * (1.0 + np.exp(-y)) ** 2)

    def _logpdf(self, x):
        y = self._reduced(x)
        return -np.log(self.alpha) - (1.0 - self.kappa) * y - 2.0 * np.logaddexp(0.0, -y)

    def _cdf(self, x):
        return 1.0 / (1.0 + np.exp(-self._reduced(x)))

    def _sf(self, x):
        return 1.0 / (1.0 + np.exp(self._reduced(x)))

    def _ppf(self, p):
        log_odds = np.log((1.0 - p) / p)
        if abs(self.kappa) <= NEAR_ZERO:
            return self.xi - self.alpha * log_odds
        return self.xi + self.alpha / self.kappa * (1.0 - np.exp(self.kappa * log_odds))

    # ------------------------------ moments ------------------------------

    def central_moments(self):
        if not self.parameters_valid:
            return np.full(4, np.nan)
        if "moments" not in self._cache:
            xi, alpha, kappa = self._params
            if abs(kappa) <= NEAR_ZERO:
                moments = [xi, alpha * _LOGISTIC_SD, 0.0, _LOGISTIC_KURTOSIS]
            else:
                m1, var, skew, kurt = _central_from_raw(_power_moments(kappa))
                moments = [
                    xi + alpha / kappa * (1.0 - m1),
                    alpha / abs(kappa) * np.sqrt(var),
                    -np.sign(kappa) * skew,
                    kurt,
                ]
            moments = np.array(moments, dtype=float)
            self._cache["moments"] = np.where(np.isfinite(moments), moments, np.nan)
        return self._cache["moments"].copy()

    def _median(self):
        return self.xi

    def _mode(self):
        xi, alpha, kappa = self._params
        if abs(kappa) <= NEAR_ZERO:
            return xi
        # Density peaks where e^{-y} = (1 - κ)/(1 + κ).
        if abs(kappa) >= 1.0:
            return super()._mode()
        return xi + alpha / kappa * (1.0 - ((1.0 - kappa) / (1.0 + kappa)) ** kappa)

    # ---------------------------- estimation ----------------------------

    def parameters_from_moments(self, moments):
        """Solve κ from the skew on (-1/3, 1/3), where every skew is reachable."""
        mean, sd, skew = moments[0], moments[1], moments[2]
        bound = 1.0 / 3.0 - 1e-6
        kappa = brent(lambda k: _skew_from_kappa(k) - skew, -bound, bound)
        if abs(kappa) <= NEAR_ZERO:
            return np.array([mean, sd / _LOGISTIC_SD, kappa])
        m1, var, _, _ = _central_from_raw(_power_moments(kappa))
        alpha = sd * abs(kappa) / np.sqrt(var)
        return np.array([mean - alpha / kappa * (1.0 - m1), alpha, kappa])

    def parameters_from_linear_moments(self, moments):
        l1, l2, t3 = moments[0], moments[1], moments[2]
        kappa = -t3
        if abs(kappa) <= NEAR_ZERO:
            return np.array([l1, l2, kappa])
        x = kappa * np.pi
        alpha = l2 * np.sin(x) / x
        xi = l1 - alpha * (1.0 / kappa - np.pi / np.sin(x))
        return np.array([xi, alpha, kappa])

    def linear_moments_from_parameters(self, values):
        xi, alpha, kappa = values
        if abs(kappa) >= 1.0:
            raise ValueError("L-moments are only defined for -1 < κ < 1.")
        t4 = (1.0 + 5.0 * kappa ** 2) / 6.0
        if abs(kappa) <= NEAR_ZERO:
            return np.array([xi, alpha, -kappa, t4])
        x = kappa * np.pi
        return np.array([
            xi + alpha * (1.0 / kappa - np.pi / np.sin(x)),
            alpha * x / np.sin(x),
            -kappa,
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
        log_odds = np.log((1.0 - probability) / probability)
        if abs(kappa) <= NEAR_ZERO:
            return np.array([1.0, -log_odds, -0.5 * alpha * log_odds ** 2])
        w = np.exp(kappa * log_odds)
        return np.array([
            1.0,
            (1.0 - w) / kappa,
            -alpha / kappa ** 2 * (1.0 - w) - alpha / kappa * w * log_odds,
        ])
