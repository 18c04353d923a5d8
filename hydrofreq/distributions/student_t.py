"""Location-scale Student's t distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["StudentT"]


class StudentT(UnivariateDistribution):
    """Student's t with location μ, scale σ and ν degrees of freedom.

    Args:
        mu: Location. Defaults to 0.
        sigma: Scale, > 0. Defaults to 1.
        degrees_of_freedom: ν ≥ 1. Defaults to 10.
    """

    distribution_type = DistributionType.STUDENT_T
    display_name = "Student's t"
    short_display_name = "T"
    parameter_names = ("Location (µ)", "Scale (σ)", "Degrees of Freedom (ν)")
    parameter_symbols = ("µ", "σ", "ν")
    supported_methods = frozenset({EstimationMethod.MAXIMUM_LIKELIHOOD})
    _positive_parameters = (1, 2)

    mu = parameter(0, "Location µ.")
    sigma = parameter(1, "Scale σ.")
    degrees_of_freedom = parameter(2, "Degrees of freedom ν.")

    def __init__(self, mu: float = 0.0, sigma: float = 1.0, degrees_of_freedom: float = 10.0):
        super().__init__([mu, sigma, degrees_of_freedom])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        if values[1] <= 0.0:
            return "Standard deviation must be positive."
        if values[2] < 1.0:
            return "The degrees of freedom ν (nu) must greater than or equal to one."
        return None

    def _scipy_distribution(self):
        return stats.t(self.degrees_of_freedom, loc=self.mu, scale=self.sigma)

    def _median(self):
        return self.mu

    def _mode(self):
        return self.mu

    def _initial_parameters(self, sample):
        return np.array([np.median(sample), np.std(sample, ddof=1), 10.0])
