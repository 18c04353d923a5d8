"""Poisson distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Poisson"]


class Poisson(UnivariateDistribution):
    """Number of events in a fixed interval at rate λ.

    Args:
        rate: Expected count λ, > 0. Defaults to 1.
    """

    distribution_type = DistributionType.POISSON
    display_name = "Poisson"
    short_display_name = "P"
    parameter_names = ("Rate (λ)",)
    parameter_symbols = ("λ",)
    is_discrete = True
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })

    rate = parameter(0, "Rate λ.")

    def __init__(self, rate: float = 1.0):
        super().__init__([rate])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[0] <= 0.0:
            return "The rate (λ) must be positive."
        return reason

    def _scipy_distribution(self):
        return stats.poisson(self.rate)

    def _mode(self):
        return float(np.floor(self.rate))

    def parameters_from_moments(self, moments):
        return np.array([moments[0]])

    def _mle(self, sample):
        return np.array([np.mean(sample)])

    def _closed_form_covariance(self, sample_size, method):
        return np.array([[self.rate / sample_size]])
