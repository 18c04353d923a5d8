"""Logistic distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Logistic"]


class Logistic(UnivariateDistribution):
    """Logistic distribution with location ξ and scale α.

    Args:
        xi: Location ξ. Defaults to 0.
        alpha: Scale α, > 0. Defaults to 0.1.
    """

    distribution_type = DistributionType.LOGISTIC
    display_name = "Logistic"
    short_display_name = "LO"
    parameter_names = ("Location (ξ)", "Scale (α)")
    parameter_symbols = ("ξ", "α")
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })
    _positive_parameters = (1,)

    xi = parameter(0, "Location ξ.")
    alpha = parameter(1, "Scale α.")

    def __init__(self, xi: float = 0.0, alpha: float = 0.1):
        super().__init__([xi, alpha])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[1] <= 0.0:
            return "The scale parameter α (alpha) must be positive."
        return reason

    def _scipy_distribution(self):
        return stats.logistic(loc=self.xi, scale=self.alpha)

    def _mean(self):
        return self.xi

    def _median(self):
        return self.xi

    def _mode(self):
        return self.xi

    def _standard_deviation(self):
        return self.alpha * np.pi / np.sqrt(3.0)

    def _skewness(self):
        return 0.0

    def _kurtosis(self):
        return 4.2

    def parameters_from_moments(self, moments):
        return np.array([moments[0], moments[1] * np.sqrt(3.0) / np.pi])

    def linear_moments_from_parameters(self, values):
        xi, alpha = values
        return np.array([xi, alpha, 0.0, 1.0 / 6.0])

    def quantile_gradient(self, probability):
        return np.array([1.0, np.log(probability / (1.0 - probability))])

    def _closed_form_covariance(self, sample_size, method):
        a2 = self.alpha ** 2 / sample_size
        if method is EstimationMethod.METHOD_OF_MOMENTS:
            return np.diag([np.pi ** 2 / 3.0 * a2, 4.0 / 5.0 * a2])
        if method is EstimationMethod.MAXIMUM_LIKELIHOOD:
            return np.diag([3.0 * a2, 9.0 / (3.0 + np.pi ** 2) * a2])
        return None
