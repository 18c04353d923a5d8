"""Pareto (type I) distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Pareto"]


class Pareto(UnivariateDistribution):
    """Pareto distribution with scale x_m (the lower bound) and shape α.

    Args:
        xm: Scale x_m, > 0. Defaults to 1.
        alpha: Shape α, > 0. Defaults to 10.
    """

    distribution_type = DistributionType.PARETO
    display_name = "Pareto"
    short_display_name = "PA"
    parameter_names = ("Scale (Xm)", "Shape (α)")
    parameter_symbols = ("Xm", "α")
    supported_methods = frozenset({EstimationMethod.MAXIMUM_LIKELIHOOD})
    _positive_parameters = (0, 1)

    xm = parameter(0, "Scale x_m.")
    alpha = parameter(1, "Shape α.")

    def __init__(self, xm: float = 1.0, alpha: float = 10.0):
        super().__init__([xm, alpha])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        if values[0] <= 0.0:
            return "The scale parameter Xm must be positive."
        if values[1] <= 0.0:
            return "The shape parameter α (alpha) must be positive."
        return None

    def _scipy_distribution(self):
        return stats.pareto(self.alpha, scale=self.xm)

    def _mode(self):
        return self.xm

    def _mle(self, sample):
        xm = np.min(sample)
        if xm <= 0.0:
            raise ValueError("Pareto fits need strictly positive sample values.")
        return np.array([xm, len(sample) / np.sum(np.log(sample / xm))])
