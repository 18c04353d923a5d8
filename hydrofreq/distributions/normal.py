"""Normal distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from ..numerics.special import standard_z
from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Normal"]

# τ4 of every normal distribution.
NORMAL_L_KURTOSIS = 30.0 / np.pi * np.arctan(np.sqrt(2.0)) - 9.0


class Normal(UnivariateDistribution):
    """Normal distribution N(μ, σ²).

    Args:
        mu: Mean. Defaults to 0.
        sigma: Standard deviation, must be > 0. Defaults to 1.
    """

    distribution_type = DistributionType.NORMAL
    display_name = "Normal"
    short_display_name = "N"
    parameter_names = ("Mean (µ)", "Std Dev (σ)")
    parameter_symbols = ("µ", "σ")
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.METHOD_OF_LINEAR_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })
    _positive_parameters = (1,)

    mu = parameter(0, "Mean.")
    sigma = parameter(1, "Standard deviation.")

    def __init__(self, mu: float = 0.0, sigma: float = 1.0):
        super().__init__([mu, sigma])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[1] <= 0.0:
            return "The standard deviation σ (sigma) must be positive."
        return reason

    def _scipy_distribution(self):
        return stats.norm(loc=self.mu, scale=self.sigma)

    def _mean(self):
        return self.mu

    def _median(self):
        return self.mu

    def _mode(self):
        return self.mu

    def _standard_deviation(self):
        return self.sigma

    def _skewness(self):
        return 0.0

    def _kurtosis(self):
        return 3.0

    # ---------------------------- estimation ----------------------------

    def parameters_from_moments(self, moments):
        return np.array([moments[0], moments[1]], dtype=float)

    def parameters_from_linear_moments(self, moments):
        return np.array([moments[0], moments[1] * np.sqrt(np.pi)], dtype=float)

    def linear_moments_from_parameters(self, values):
        mu, sigma = values
        return np.array([mu, sigma / np.sqrt(np.pi), 0.0, NORMAL_L_KURTOSIS])

    def _mle(self, sample):
        return np.array([np.mean(sample), np.std(sample)])

    # ---------------------------- delta method ----------------------------

    def quantile_gradient(self, probability):
        return np.array([1.0, standard_z(probability)])

    def _closed_form_covariance(self, sample_size, method):
        if method in (EstimationMethod.METHOD_OF_MOMENTS, EstimationMethod.MAXIMUM_LIKELIHOOD):
            s2 = self.sigma ** 2
            return np.diag([s2 / sample_size, s2 / (2.0 * sample_size)])
        return None
