"""Triangular distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Triangular"]


class Triangular(UnivariateDistribution):
    """Triangular distribution on [min, max] with peak at `mode`.

    Args:
        min: Lower bound. Defaults to 0.
        mode: Most likely value, in [min, max]. Defaults to 0.5.
        max: Upper bound. Defaults to 1.
    """

    distribution_type = DistributionType.TRIANGULAR
    display_name = "Triangular"
    short_display_name = "TRI"
    parameter_names = ("Min (a)", "Most Likely (c)", "Max (b)")
    parameter_symbols = ("a", "c", "b")
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })

    min = parameter(0, "Lower bound.")
    most_likely = parameter(1, "Most likely value.")
    max = parameter(2, "Upper bound.")

    def __init__(self, min: float = 0.0, mode: float = 0.5, max: float = 1.0):
        super().__init__([min, mode, max])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        a, c, b = values
        if a >= b:
            return "The min cannot be greater than or equal to the max."
        if c < a or c > b:
            return "The mode (most likely) must be between the min and max."
        return None

    def _scipy_distribution(self):
        width = self.max - self.min
        return stats.triang((self.most_likely - self.min) / width, loc=self.min, scale=width)

    def _support(self):
        return self.min, self.max

    def _mode(self):
        return self.most_likely

    def _sample_moment_fit(self, sample):
        lo, hi = np.min(sample), np.max(sample)
        mode = np.clip(3.0 * np.mean(sample) - lo - hi, lo, hi)
        return np.array([lo, mode, hi])

    def _fit(self, sample, method):
        if method is EstimationMethod.METHOD_OF_MOMENTS:
            return self._sample_moment_fit(sample)
        return super()._fit(sample, method)

    def _initial_parameters(self, sample):
        # Open the bounds slightly so the extreme observations have positive density.
        a, c, b = self._sample_moment_fit(sample)
        pad = (b - a) / len(sample)
        return np.array([a - pad, c, b + pad])
