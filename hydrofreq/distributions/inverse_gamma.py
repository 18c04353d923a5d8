"""Inverse-gamma distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["InverseGamma"]


class InverseGamma(UnivariateDistribution):
    """Distribution of 1/Y for Y gamma distributed with shape α and rate β.

    Args:
        scale: Scale β, > 0. Defaults to 0.5.
        shape: Shape α, > 0. Defaults to 2.
    """

    distribution_type = DistributionType.INVERSE_GAMMA
    display_name = "Inverse-Gamma"
    short_display_name = "Inv-G"
    parameter_names = ("Scale (β)", "Shape (α)")
    parameter_symbols = ("β", "α")
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })
    _positive_parameters = (0, 1)

    scale = parameter(0, "Scale β.")
    shape = parameter(1, "Shape α.")

    def __init__(self, scale: float = 0.5, shape: float = 2.0):
        super().__init__([scale, shape])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        if values[0] <= 0.0:
            return "The scale parameter β (beta) must be positive."
        if values[1] <= 0.0:
            return "The shape parameter α (alpha) must be positive."
        return None

    def _scipy_distribution(self):
        return stats.invgamma(self.shape, scale=self.scale)

    def _mode(self):
        return self.scale / (self.shape + 1.0)

    def parameters_from_moments(self, moments):
        # mean = β/(α-1), var = mean²/(α-2)
        mean, sd = moments[0], moments[1]
        alpha = 2.0 + (mean / sd) ** 2
        return np.array([mean * (alpha - 1.0), alpha])
