"""Scaled inverse chi-squared distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["InverseChiSquared"]


class InverseChiSquared(UnivariateDistribution):
    """Scaled inverse chi-squared with ν degrees of freedom and scale σ.

    Equivalent to an inverse-gamma distribution with shape ν/2 and scale νσ/2.

    Args:
        degrees_of_freedom: ν ≥ 1. Defaults to 10.
        sigma: Scale σ, > 0. Defaults to 1.
    """

    distribution_type = DistributionType.INVERSE_CHI_SQUARED
    display_name = "Inverse Chi-Squared (χ²)"
    short_display_name = "Inv-χ²"
    parameter_names = ("Degrees of Freedom (ν)", "Scale (σ)")
    parameter_symbols = ("ν", "σ")
    supported_methods = frozenset({EstimationMethod.MAXIMUM_LIKELIHOOD})
    _positive_parameters = (0, 1)

    degrees_of_freedom = parameter(0, "Degrees of freedom ν.")
    sigma = parameter(1, "Scale σ.")

    def __init__(self, degrees_of_freedom: float = 10.0, sigma: float = 1.0):
        super().__init__([degrees_of_freedom, sigma])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        if values[0] < 1.0:
            return "The degrees of freedom ν (nu) must greater than or equal to one."
        if values[1] <= 0.0:
            return "The scale parameter σ (sigma) must be positive."
        return None

    def _scipy_distribution(self):
        nu = self.degrees_of_freedom
        return stats.invgamma(0.5 * nu, scale=0.5 * nu * self.sigma)

    def _mode(self):
        nu = self.degrees_of_freedom
        return nu * self.sigma / (nu + 2.0)

    def _initial_parameters(self, sample):
        # Moment matching: CV² = 2/(ν - 4) and mean = νσ/(ν - 2).
        mean = np.mean(sample)
        cv = np.std(sample, ddof=1) / mean
        nu = 4.0 + 2.0 / cv ** 2
        return np.array([nu, mean * (nu - 2.0) / nu])
