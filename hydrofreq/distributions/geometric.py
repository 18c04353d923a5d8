"""Geometric distribution: failures before the first success."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Geometric"]


class Geometric(UnivariateDistribution):
    """Number of failures k = 0, 1, 2, … before the first success.

    Args:
        probability: Probability of success, in (0, 1]. Defaults to 0.5.
    """

    distribution_type = DistributionType.GEOMETRIC
    display_name = "Geometric"
    short_display_name = "Geo"
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
        if reason is None and not 0.0 < values[0] <= 1.0:
            return "Probability must be between 0 and 1."
        return reason

    def _scipy_distribution(self):
        return stats.geom(self.probability, loc=-1)

    def _mode(self):
        return 0.0

    def parameters_from_moments(self, moments):
        return np.array([1.0 / (1.0 + moments[0])])

    def _mle(self, sample):
        return np.array([1.0 / (1.0 + np.mean(sample))])
