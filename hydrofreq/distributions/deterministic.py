"""Point mass at a single value."""
from __future__ import annotations

import numpy as np

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Deterministic"]


class Deterministic(UnivariateDistribution):
    """All probability at one value.

    Useful where a model input is known exactly but the surrounding code
    expects a distribution. The method of moments sets the value to the
    sample mean.

    Args:
        value: The value. Defaults to 0.5.
    """

    distribution_type = DistributionType.DETERMINISTIC
    display_name = "Deterministic"
    short_display_name = "D"
    parameter_names = ("Value",)
    parameter_symbols = ("x",)
    is_discrete = True
    supported_methods = frozenset({EstimationMethod.METHOD_OF_MOMENTS})

    value = parameter(0, "The value.")

    def __init__(self, value: float = 0.5):
        super().__init__([value])

    def _support(self):
        return self.value, self.value

    def _pdf(self, x):
        return np.where(x == self.value, 1.0, 0.0)

    def _logpdf(self, x):
        return np.where(x == self.value, 0.0, -np.inf)

    def _cdf(self, x):
        return np.where(x < self.value, 0.0, 1.0)

    def _sf(self, x):
        return np.where(x < self.value, 1.0, 0.0)

    def _ppf(self, p):
        return np.full(np.shape(p), self.value)

    def central_moments(self):
        if not self.parameters_valid:
            return np.full(4, np.nan)
        return np.array([self.value, 0.0, np.nan, np.nan])

    def _median(self):
        return self.value

    def _mode(self):
        return self.value

    def parameters_from_moments(self, moments):
        return np.array([moments[0]], dtype=float)

    def sample(self, n_samples, *, seed=None, rng=None):
        return np.full(int(n_samples), self.value if self.parameters_valid else np.nan)
