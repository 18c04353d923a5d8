"""Four-parameter beta distribution on [min, max]."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["GeneralizedBeta"]


class GeneralizedBeta(UnivariateDistribution):
    """Beta distribution with shapes α, β rescaled to [min, max].

    Args:
        alpha: Shape α, > 0. Defaults to 2.
        beta: Shape β, > 0. Defaults to 2.
        min: Lower bound. Defaults to 0.
        max: Upper bound, > min. Defaults to 1.
    """

    distribution_type = DistributionType.GENERALIZED_BETA
    display_name = "Generalized Beta"
    short_display_name = "GB"
    parameter_names = ("Shape (α)", "Shape (β)", "Min", "Max")
    parameter_symbols = ("α", "β", "Min", "Max")
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })
    _positive_parameters = (0, 1)

    alpha = parameter(0, "Shape α.")
    beta = parameter(1, "Shape β.")
    min = parameter(2, "Lower bound.")
    max = parameter(3, "Upper bound.")

    def __init__(self, alpha: float = 2.0, beta: float = 2.0, min: float = 0.0, max: float = 1.0):
        super().__init__([alpha, beta, min, max])

    @classmethod
    def pert(cls, min: float, mode: float, max: float, scale: float = 4.0) -> "GeneralizedBeta":
        """The PERT beta with the given bounds and most likely value.

        Raises:
            ValueError: If the bounds are not ordered or the mode lies outside them.
        """
        if min >= max:
            raise ValueError("The maximum value must be greater than the minimum value.")
        if mode < min or mode > max:
            raise ValueError("The mode must be between the minimum and maximum values.")
        mean = (min + scale * mode + max) / (scale + 2.0)
        alpha = 1.0 + scale / 2.0
        if mean != mode:
            alpha = (mean - min) * (2.0 * mode - min - max) / ((mode - mean) * (max - min))
        beta = alpha * (max - mean) / (mean - min)
        return cls(alpha, beta, min, max)

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        if values[0] <= 0.0:
            return "The shape parameter α (alpha) must be positive."
        if values[1] <= 0.0:
            return "The shape parameter β (beta) must be positive."
        if values[2] >= values[3]:
            return "The min cannot be greater than or equal to the max."
        return None

    def _scipy_distribution(self):
        return stats.beta(self.alpha, self.beta, loc=self.min, scale=self.max - self.min)

    def _support(self):
        return self.min, self.max

    def _mode(self):
        a, b = self.alpha, self.beta
        if a > 1.0 and b > 1.0:
            return self.min + (a - 1.0) / (a + b - 2.0) * (self.max - self.min)
        return super()._mode()

    @staticmethod
    def shapes_from_moments(mu: float, sigma: float, min: float, max: float):
        """Shapes (α, β) of the beta on [min, max] with mean `mu` and sd `sigma`."""
        s2 = sigma * sigma
        common = (min - mu) * (max - mu) + s2
        alpha = (min - mu) * common / (s2 * (max - min))
        beta = -(max - mu) * common / (s2 * (max - min))
        return alpha, beta

    def _sample_moment_fit(self, sample):
        lo, hi = np.min(sample), np.max(sample)
        alpha, beta = self.shapes_from_moments(np.mean(sample), np.std(sample, ddof=1), lo, hi)
        return np.array([alpha, beta, lo, hi])

    def _fit(self, sample, method):
        if method is EstimationMethod.METHOD_OF_MOMENTS:
            return self._sample_moment_fit(sample)
        return super()._fit(sample, method)

    def _initial_parameters(self, sample):
        # Widen the bounds so no observation sits on the edge of the support.
        lo, hi = np.min(sample), np.max(sample)
        pad = (hi - lo) / len(sample)
        lo, hi = lo - pad, hi + pad
        alpha, beta = self.shapes_from_moments(np.mean(sample), np.std(sample, ddof=1), lo, hi)
        return np.array([max(alpha, 1.0), max(beta, 1.0), lo, hi])
