"""Chi-squared distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["ChiSquared"]


class ChiSquared(UnivariateDistribution):
    """Chi-squared distribution with ν degrees of freedom.

    Args:
        degrees_of_freedom: ν ≥ 1. Defaults to 10.
    """

    distribution_type = DistributionType.CHI_SQUARED
    display_name = "Chi-Squared (χ²)"
    short_display_name = "χ²"
    parameter_names = ("Degrees of Freedom (ν)",)
    parameter_symbols = ("ν",)
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })
    _positive_parameters = (0,)

    degrees_of_freedom = parameter(0, "Degrees of freedom ν.")

    def __init__(self, degrees_of_freedom: float = 10.0):
        super().__init__([degrees_of_freedom])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[0] < 1.0:
            return "The degrees of freedom ν (nu) must greater than or equal to one."
        return reason

    def _scipy_distribution(self):
        return stats.chi2(self.degrees_of_freedom)

    def _mode(self):
        return max(self.degrees_of_freedom - 2.0, 0.0)

    def parameters_from_moments(self, moments):
        return np.array([moments[0]])
