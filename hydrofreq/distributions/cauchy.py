"""Cauchy distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Cauchy"]


class Cauchy(UnivariateDistribution):
    """Cauchy (Lorentz) distribution. Its mean and variance do not exist.

    Args:
        location: Location x0. Defaults to 0.
        scale: Scale γ, > 0. Defaults to 1.
    """

    distribution_type = DistributionType.CAUCHY
    display_name = "Cauchy"
    short_display_name = "C"
    parameter_names = ("Location (X0)", "Scale (γ)")
    parameter_symbols = ("X0", "γ")
    supported_methods = frozenset({EstimationMethod.MAXIMUM_LIKELIHOOD})
    _positive_parameters = (1,)

    location = parameter(0, "Location x0.")
    scale = parameter(1, "Scale γ.")

    def __init__(self, location: float = 0.0, scale: float = 1.0):
        super().__init__([location, scale])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[1] <= 0.0:
            return "The scale parameter γ (gamma) must be positive."
        return reason

    def _scipy_distribution(self):
        return stats.cauchy(loc=self.location, scale=self.scale)

    def _mean(self):
        return np.nan

    def _median(self):
        return self.location

    def _mode(self):
        return self.location

    def _standard_deviation(self):
        return np.nan

    def _skewness(self):
        return np.nan

    def _kurtosis(self):
        return np.nan

    def _initial_parameters(self, sample):
        q1, q2, q3 = np.quantile(sample, [0.25, 0.5, 0.75])
        return np.array([q2, max(0.5 * (q3 - q1), np.finfo(float).eps)])
