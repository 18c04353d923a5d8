"""PERT distribution and its percentile-based fit."""
from __future__ import annotations

import numpy as np

from ..numerics.optimization import maximize
from ..statistics.moments import percentile
from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter
from .generalized_beta import GeneralizedBeta

__all__ = ["Pert"]

_FIT_PROBABILITIES = np.array([0.05, 0.5, 0.95])


class Pert(UnivariateDistribution):
    """PERT distribution: a beta on [min, max] whose mean is (min + 4·mode + max)/6.

    Args:
        min: Lower bound. Defaults to 0.
        mode: Most likely value. Defaults to 0.5.
        max: Upper bound. Defaults to 1.
    """

    distribution_type = DistributionType.PERT
    display_name = "PERT"
    short_display_name = "PERT"
    parameter_names = ("Min (a)", "Most Likely (c)", "Max (b)")
    parameter_symbols = ("a", "c", "b")
    supported_methods = frozenset({EstimationMethod.METHOD_OF_PERCENTILES})

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

    def beta_distribution(self) -> GeneralizedBeta:
        """The equivalent four-parameter beta."""
        return GeneralizedBeta.pert(self.min, self.most_likely, self.max)

    def _scipy_distribution(self):
        return self.beta_distribution()._scipy_distribution()

    def _support(self):
        return self.min, self.max

    def _mean(self):
        return (self.min + 4.0 * self.most_likely + self.max) / 6.0

    def _median(self):
        return (self.min + 6.0 * self.most_likely + self.max) / 8.0

    def _mode(self):
        return self.most_likely

    def _standard_deviation(self):
        mean = self._mean()
        return np.sqrt((mean - self.min) * (self.max - mean) / 7.0)

    def _fit_percentiles(self, sample):
        """Match the 5th, 50th and 95th sample percentiles by least squares."""
        targets = np.asarray(percentile(np.sort(sample), _FIT_PROBABILITIES), dtype=float)
        p5, p50, p95 = targets
        width = p95 - p5
        initial = np.array([p5 - 0.25 * width, p50, p95 + 0.25 * width])
        lower = np.array([p5 - 2.0 * width, p5 - 2.0 * width, p95])
        upper = np.array([p5, p95 + 2.0 * width, p95 + 2.0 * width])
        trial = self.clone()

        def negative_sse(values):
            trial.set_parameters(values)
            if not trial.parameters_valid:
                return -np.inf
            return -float(np.sum((np.asarray(trial.inv_cdf(_FIT_PROBABILITIES)) - targets) ** 2))

        return maximize(negative_sse, initial, lower, upper).values
