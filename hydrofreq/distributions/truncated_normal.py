"""Normal distribution truncated to [min, max]."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["TruncatedNormal"]


class TruncatedNormal(UnivariateDistribution):
    """N(μ, σ²) conditioned on min ≤ X ≤ max.

    μ and σ are the parameters of the parent normal, not the moments of the
    truncated distribution.

    Args:
        mu: Parent mean. Defaults to 0.5.
        sigma: Parent standard deviation, > 0. Defaults to 0.2.
        min: Lower truncation point. Defaults to 0.
        max: Upper truncation point, > min. Defaults to 1.
    """

    distribution_type = DistributionType.TRUNCATED_NORMAL
    display_name = "Truncated Normal"
    short_display_name = "Trunc. N"
    parameter_names = ("Mean (µ)", "Std Dev (σ)", "Min", "Max")
    parameter_symbols = ("µ", "σ", "Min", "Max")
    supported_methods = frozenset({EstimationMethod.METHOD_OF_MOMENTS})

    mu = parameter(0, "Parent mean.")
    sigma = parameter(1, "Parent standard deviation.")
    min = parameter(2, "Lower truncation point.")
    max = parameter(3, "Upper truncation point.")

    def __init__(self, mu: float = 0.5, sigma: float = 0.2, min: float = 0.0, max: float = 1.0):
        super().__init__([mu, sigma, min, max])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        if values[1] <= 0.0:
            return "Standard deviation must be positive."
        if values[2] >= values[3]:
            return "The min cannot be greater than or equal to the max."
        return None

    def _scipy_distribution(self):
        a = (self.min - self.mu) / self.sigma
        b = (self.max - self.mu) / self.sigma
        return stats.truncnorm(a, b, loc=self.mu, scale=self.sigma)

    def _support(self):
        return self.min, self.max

    def _mode(self):
        return float(np.clip(self.mu, self.min, self.max))

    def _fit(self, sample, method):
        if method is EstimationMethod.METHOD_OF_MOMENTS:
            return np.array([np.mean(sample), np.std(sample, ddof=1), np.min(sample), np.max(sample)])
        return super()._fit(sample, method)
