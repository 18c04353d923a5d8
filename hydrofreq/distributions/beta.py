"""Beta distribution on [0, 1]."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Beta"]


class Beta(UnivariateDistribution):
    """Beta distribution with shapes α and β on the unit interval.

    Args:
        alpha: Shape α, > 0. Defaults to 2.
        beta: Shape β, > 0. Defaults to 2.
    """

    distribution_type = DistributionType.BETA
    display_name = "Beta"
    short_display_name = "Beta"
    parameter_names = ("Shape (α)", "Shape (β)")
    parameter_symbols = ("α", "β")
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })
    _positive_parameters = (0, 1)

    alpha = parameter(0, "Shape α.")
    beta = parameter(1, "Shape β.")

    def __init__(self, alpha: float = 2.0, beta: float = 2.0):
        super().__init__([alpha, beta])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        if values[0] <= 0.0:
            return "The shape parameter α (alpha) must be positive."
        if values[1] <= 0.0:
            return "The shape parameter β (beta) must be positive."
        return None

    def _scipy_distribution(self):
        return stats.beta(self.alpha, self.beta)

    def _support(self):
        return 0.0, 1.0

    def parameters_from_moments(self, moments):
        mean, var = moments[0], moments[1] ** 2
        if not 0.0 < mean < 1.0 or var >= mean * (1.0 - mean):
            raise ValueError("sample mean and variance are not attainable by a beta distribution.")
        common = mean * (1.0 - mean) / var - 1.0
        return np.array([mean * common, (1.0 - mean) * common])
