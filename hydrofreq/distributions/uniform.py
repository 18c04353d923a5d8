"""Continuous uniform distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Uniform"]


class Uniform(UnivariateDistribution):
    """Uniform distribution on [min, max].

    Args:
        min: Lower bound. Defaults to 0.
        max: Upper bound, > min. Defaults to 1.
    """

    distribution_type = DistributionType.UNIFORM
    display_name = "Uniform"
    short_display_name = "U"
    parameter_names = ("Min", "Max")
    parameter_symbols = ("a", "b")
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })

    min = parameter(0, "Lower bound.")
    max = parameter(1, "Upper bound.")

    def __init__(self, min: float = 0.0, max: float = 1.0):
        super().__init__([min, max])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[0] >= values[1]:
            return "The min cannot be greater than or equal to the max."
        return reason

    def _scipy_distribution(self):
        return stats.uniform(loc=self.min, scale=self.max - self.min)

    def _support(self):
        return self.min, self.max

    def _mode(self):
        return 0.5 * (self.min + self.max)

    def parameters_from_moments(self, moments):
        half_width = np.sqrt(3.0) * moments[1]
        return np.array([moments[0] - half_width, moments[0] + half_width])

    def _mle(self, sample):
        return np.array([np.min(sample), np.max(sample)])
