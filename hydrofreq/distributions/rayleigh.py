"""Rayleigh distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from ..numerics.special import log_gamma
from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Rayleigh"]


class Rayleigh(UnivariateDistribution):
    """Rayleigh distribution with scale σ.

    Args:
        sigma: Scale σ, > 0. Defaults to 10.
    """

    distribution_type = DistributionType.RAYLEIGH
    display_name = "Rayleigh"
    short_display_name = "RAY"
    parameter_names = ("Scale (σ)",)
    parameter_symbols = ("σ",)
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })
    _positive_parameters = (0,)

    sigma = parameter(0, "Scale σ.")

    def __init__(self, sigma: float = 10.0):
        super().__init__([sigma])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[0] <= 0.0:
            return "Standard deviation must be greater than zero."
        return reason

    def _scipy_distribution(self):
        return stats.rayleigh(scale=self.sigma)

    def _mode(self):
        return self.sigma

    def parameters_from_moments(self, moments):
        return np.array([moments[0] / np.sqrt(np.pi / 2.0)])

    def _mle(self, sample):
        n = len(sample)
        biased = np.sqrt(np.sum(sample ** 2) / (2.0 * n))
        # Γ(n)√n / Γ(n + ½) removes the small-sample bias of the root.
        correction = np.exp(log_gamma(n) + 0.5 * np.log(n) - log_gamma(n + 0.5))
        return np.array([biased * correction])

    def quantile_gradient(self, probability):
        return np.array([np.sqrt(-2.0 * np.log1p(-probability))])

    def _closed_form_covariance(self, sample_size, method):
        if method is EstimationMethod.MAXIMUM_LIKELIHOOD:
            return np.array([[self.sigma ** 2 / (4.0 * sample_size)]])
        return None
