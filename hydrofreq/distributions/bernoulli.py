"""Bernoulli distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Bernoulli"]


class Bernoulli(UnivariateDistribution):
    """Bernoulli distribution on {0, 1} with success probability p.

    Args:
        probability: Success probability in [0, 1]. Defaults to 0.5.
    """

    distribution_type = DistributionType.BERNOULLI
    display_name = "Bernoulli"
    short_display_name = "B"
    parameter_names = ("Probability (p)",)
    parameter_symbols = ("p",)
    is_discrete = True
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })

    probability = parameter(0, "Probability of success.")

    def __init__(self, probability: float = 0.5):
        super().__init__([probability])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and not 0.0 <= values[0] <= 1.0:
            return "Probability must be between 0 and 1."
        return reason

    def _scipy_distribution(self):
        return stats.bernoulli(self.probability)

    def _support(self):
        return 0.0, 1.0

    def _mean(self):
        return self.probability

    def _median(self):
        return 0.0 if self.probability <= 0.5 else 1.0

    def _mode(self):
        return 0.0 if self.probability <= 0.5 else 1.0

    def _standard_deviation(self):
        p = self.probability
        return float(np.sqrt(p * (1.0 - p)))

    def _skewness(self):
        p = self.probability
        with np.errstate(divide="ignore"):
            return float(np.float64(1.0 - 2.0 * p) / np.sqrt(p * (1.0 - p)))

    def _kurtosis(self):
        p = self.probability
        with np.errstate(divide="ignore"):
            return float(3.0 + np.float64(1.0 - 6.0 * p * (1.0 - p)) / (p * (1.0 - p)))

    def parameters_from_moments(self, moments):
        return np.array([moments[0]])

    def _mle(self, sample):
        return np.array([np.mean(sample)])
