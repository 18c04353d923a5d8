"""Two-parameter (shifted) exponential distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Exponential"]


class Exponential(UnivariateDistribution):
    """Exponential distribution with location ξ and scale α.

    Args:
        xi: Location (lower bound) ξ. Defaults to 100.
        alpha: Scale α, > 0. Defaults to 10.
    """

    distribution_type = DistributionType.EXPONENTIAL
    display_name = "Exponential"
    short_display_name = "EXP"
    parameter_names = ("Location (ξ)", "Scale (α)")
    parameter_symbols = ("ξ", "α")
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.METHOD_OF_LINEAR_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })
    _positive_parameters = (1,)

    xi = parameter(0, "Location ξ.")
    alpha = parameter(1, "Scale α.")

    def __init__(self, xi: float = 100.0, alpha: float = 10.0):
        super().__init__([xi, alpha])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[1] <= 0.0:
            return "The scale parameter α (alpha) must be positive."
        return reason

    def _scipy_distribution(self):
        return stats.expon(loc=self.xi, scale=self.alpha)

    def _mean(self):
        return self.xi + self.alpha

    def _mode(self):
        return self.xi

    def _standard_deviation(self):
        return self.alpha

    def _skewness(self):
        return 2.0

    def _kurtosis(self):
        return 9.0

    # ---------------------------- estimation ----------------------------

    def parameters_from_moments(self, moments):
        return np.array([moments[0] - moments[1], moments[1]])

    def parameters_from_linear_moments(self, moments):
        alpha = 2.0 * moments[1]
        return np.array([moments[0] - alpha, alpha])

    def linear_moments_from_parameters(self, values):
        xi, alpha = values
        return np.array([xi + alpha, 0.5 * alpha, 1.0 / 3.0, 1.0 / 6.0])

    def _mle(self, sample):
        lo = np.min(sample)
        return np.array([lo, np.mean(sample) - lo])

    # ---------------------------- delta method ----------------------------

    def quantile_gradient(self, probability):
        return np.array([1.0, -np.log1p(-probability)])

    def _closed_form_covariance(self, sample_size, method):
        a2 = self.alpha ** 2
        n = sample_size
        if method is EstimationMethod.METHOD_OF_MOMENTS:
            return np.array([[a2 / n, -a2 / n], [-a2 / n, 2.0 * a2 / n]])
        if method is EstimationMethod.MAXIMUM_LIKELIHOOD:
            if n < 2:
                raise ValueError("sample_size must be at least 2 for maximum likelihood.")
            c = a2 / (n * (n - 1))
            return np.array([[c, -c], [-c, a2 / (n - 1)]])
        return None
