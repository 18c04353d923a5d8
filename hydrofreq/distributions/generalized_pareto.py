"""Generalized Pareto (GPA) distribution in Hosking's parameterization."""
from __future__ import annotations

import numpy as np
from scipy import stats

from ..array_backend.utils import _as_sample
from ..numerics.optimization import maximize
from ..numerics.root_finding import brent
from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["GeneralizedPareto"]

NEAR_ZERO = 1e-4

_EPS = np.finfo(float).eps

# The skew diverges at κ = -1/3 and decreases without bound as κ grows.
_MOM_KAPPA_RANGE = (-1.0 / 3.0 + 1e-9, 1e4)


def _skew_from_kappa(kappa: float) -> float:
    return 2.0 * (1.0 - kappa) * np.sqrt(1.0 + 2.0 * kappa) / (1.0 + 3.0 * kappa)


class GeneralizedPareto(UnivariateDistribution):
    """GPA distribution, F(x) = 1 - (1 - κ(x - ξ)/α)^{1/κ}, x ≥ ξ.

    κ = 0 is the exponential distribution and κ = 1 the uniform on
    [ξ, ξ + α]. κ > 0 bounds the support above at ξ + α/κ. Backed by scipy's
    ``genpareto`` with ``c = -κ``.

    Args:
        xi: Location ξ. Defaults to 100.
        alpha: Scale α, > 0. Defaults to 10.
        kappa: Shape κ. Defaults to 0.
    """

    distribution_type = DistributionType.GENERALIZED_PARETO
    display_name = "Generalized Pareto"
    short_display_name = "GPA"
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

    def _scipy_distribution(self):
        return stats.genpareto(-self.kappa, loc=self.xi, scale=self.alpha)

    def _mode(self):
        if self.kappa > 1.0:
            return self.xi + self.alpha / self.kappa
        return self.xi

    # ---------------------------- estimation ----------------------------

    def parameters_from_moments(self, moments):
        """Solve κ from the skew, then α and ξ from the standard deviation and mean.

        Raises:
            ValueError: If the skew is outside the reachable range.
        """
        mean, sd, skew = moments[0], moments[1], moments[2]
        lo, hi = _MOM_KAPPA_RANGE
        skew_lo, skew_hi = _skew_from_kappa(hi), _skew_from_kappa(lo)
        if not skew_lo < skew < skew_hi:
            raise ValueError(
                f"skew {skew:g} is outside the feasible range ({skew_lo:g}, {skew_hi:g})."
            )
        kappa = brent(lambda k: _skew_from_kappa(k) - skew, lo, hi)
        alpha = sd * (1.0 + kappa) * np.sqrt(1.0 + 2.0 * kappa)
        return np.array([mean - alpha / (1.0 + kappa), alpha, kappa])

    def parameters_from_linear_moments(self, moments):
        l1, l2, t3 = moments[0], moments[1], moments[2]
        kappa = (1.0 - 3.0 * t3) / (1.0 + t3)
        alpha = (1.0 + kappa) * (2.0 + kappa) * l2
        return np.array([l1 - (2.0 + kappa) * l2, alpha, kappa])

    def linear_moments_from_parameters(self, values):
        xi, alpha, kappa = values
        if kappa <= -1.0:
            raise ValueError("L-moments of the GPA require κ > -1.")
        return np.array([
            xi + alpha / (1.0 + kappa),
            alpha / ((1.0 + kappa) * (2.0 + kappa)),
            (1.0 - kappa) / (3.0 + kappa),
            (1.0 - kappa) * (2.0 - kappa) / ((3.0 + kappa) * (4.0 + kappa)),
        ])

    def parameter_constraints(self, sample):
        """Bounds for maximum likelihood.

        The location may not exceed the sample minimum and the shape is
        searched in [-10, 10].
        """
        x = _as_sample(sample)
        initial, lower, upper = super().parameter_constraints(x)
        upper[0] = np.min(x) + _EPS
        lower[2], upper[2] = -10.0, 10.0
        if not lower[0] < initial[0] < upper[0]:
            initial[0] = 0.5 * (lower[0] + upper[0])
        if not -10.0 < initial[2] < 10.0:
            initial[2] = 0.0
        return initial, lower, upper

    def _mle(self, sample):
        """Maximize over (α, κ) with the location fixed at the sample minimum."""
        initial, lower, upper = self.parameter_constraints(sample)
        xi = float(np.min(sample))
        trial = self.clone()

        def log_likelihood(values):
            trial.set_parameters([xi, values[0], values[1]])
            return trial.log_likelihood(sample)

        result = maximize(log_likelihood, initial[1:], lower[1:], upper[1:])
        return np.concatenate([[xi], result.values])

    # ---------------------------- delta method ----------------------------

    def quantile_gradient(self, probability):
        alpha, kappa = self.alpha, self.kappa
        log_q = np.log1p(-probability)
        if abs(kappa) <= NEAR_ZERO:
            return np.array([1.0, -log_q, -0.5 * alpha * log_q ** 2])
        w = np.exp(kappa * log_q)
        return np.array([
            1.0,
            (1.0 - w) / kappa,
            -alpha / kappa ** 2 * (1.0 - w) - alpha / kappa * log_q * w,
        ])

    def _closed_form_covariance(self, sample_size, method):
        """Hosking and Wallis (1987) asymptotic covariances for MOM and MLE."""
        a, k, n = self.alpha, self.kappa, float(sample_size)
        cov = np.zeros((3, 3))
        cov[0, 0] = n * a * a / ((n + 2.0 * k) * (n + k) ** 2)
        if method is EstimationMethod.METHOD_OF_MOMENTS:
            den = (1.0 + 2.0 * k) * (1.0 + 3.0 * k) * (1.0 + 4.0 * k)
            cov[1, 1] = 2.0 * a * a / n * (1.0 + k) ** 2 * (1.0 + 6.0 * k + 12.0 * k ** 2) / den
            cov[2, 2] = (1.0 + k) ** 2 * (1.0 + 2.0 * k) ** 2 * (1.0 + k + 6.0 * k ** 2) / (n * den)
            cov[1, 2] = a / n * (1.0 + k) ** 2 * (1.0 + 2.0 * k) * (1.0 + 4.0 * k + 12.0 * k ** 2) / den
        elif method is EstimationMethod.MAXIMUM_LIKELIHOOD:
            cov[1, 1] = 2.0 * a * a * (1.0 - k) / n
            cov[2, 2] = (1.0 - k) ** 2 / n
            cov[1, 2] = a * (1.0 - k) / n
        else:
            return None
        cov[2, 1] = cov[1, 2]
        return cov

    def quantile_variance(self, probability, sample_size, method):
        """Delta-method variance from the scale and shape only.

        The location variance is of order 1/n² and is neglected against the
        1/n terms of the scale and shape.
        """
        method = EstimationMethod(method)
        cov = self.parameter_covariance(sample_size, method)
        g = np.asarray(self.quantile_gradient(probability), dtype=float)[1:]
        return float(g @ cov[1:, 1:] @ g)
