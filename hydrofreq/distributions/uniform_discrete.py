"""Discrete uniform distribution on the integers min … max."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["UniformDiscrete"]


class UniformDiscrete(UnivariateDistribution):
    """Equal probability on each integer in [min, max].

    Args:
        min: Smallest integer. Defaults to 0.
        max: Largest integer, ≥ min. Defaults to 1.
    """

    distribution_type = DistributionType.UNIFORM_DISCRETE
    display_name = "Uniform (Discrete)"
    short_display_name = "UD"
    parameter_names = ("Min", "Max")
    parameter_symbols = ("a", "b")
    is_discrete = True
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })

    min = parameter(0, "Smallest value.")
    max = parameter(1, "Largest value.")

    def __init__(self, min: float = 0.0, max: float = 1.0):
        super().__init__([min, max])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        if values[0] > values[1]:
            return "The min cannot be greater than the max."
        if values[0] != np.floor(values[0]) or values[1] != np.floor(values[1]):
            return "The min and max must be integers."
        return None

    def _scipy_distribution(self):
        return stats.randint(int(self.min), int(self.max) + 1)

    def _support(self):
        return self.min, self.max

    def _mode(self):
        return self.min

    def parameters_from_moments(self, moments):
        # Var = ((b - a + 1)^2 - 1) / 12
        width = np.sqrt(12.0 * moments[1] ** 2 + 1.0) - 1.0
        a = np.round(moments[0] - 0.5 * width)
        return np.array([a, a + np.round(width)])

    def _mle(self, sample):
        return np.array([np.floor(np.min(sample)), np.ceil(np.max(sample))])
