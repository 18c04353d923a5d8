"""Noncentral t distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["NoncentralT"]


class NoncentralT(UnivariateDistribution):
    """Noncentral t with ν degrees of freedom and noncentrality μ.

    Args:
        degrees_of_freedom: ν ≥ 1. Defaults to 10.
        noncentrality: μ. Defaults to 0.
    """

    distribution_type = DistributionType.NONCENTRAL_T
    display_name = "Noncentral t"
    short_display_name = "NCT"
    parameter_names = ("Degrees of Freedom (ν)", "Noncentrality (μ)")
    parameter_symbols = ("ν", "μ")
    supported_methods = frozenset({EstimationMethod.MAXIMUM_LIKELIHOOD})
    _positive_parameters = (0,)

    degrees_of_freedom = parameter(0, "Degrees of freedom ν.")
    noncentrality = parameter(1, "Noncentrality μ.")

    def __init__(self, degrees_of_freedom: float = 10.0, noncentrality: float = 0.0):
        super().__init__([degrees_of_freedom, noncentrality])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[0] < 1.0:
            return "The degrees of freedom ν (nu) must greater than or equal to one."
        return reason

    def _scipy_distribution(self):
        return stats.nct(self.degrees_of_freedom, self.noncentrality)

    def _initial_parameters(self, sample):
        return np.array([10.0, np.mean(sample)])
