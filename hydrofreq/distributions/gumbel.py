"""Gumbel (extreme value type I) distribution for maxima."""
from __future__ import annotations

import numpy as np
from scipy import stats

from ..numerics.root_finding import solve_bracketed
from ..numerics.special import EULER_GAMMA
from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Gumbel"]


class Gumbel(UnivariateDistribution):
    """Gumbel distribution, F(x) = exp(-exp(-(x - ξ)/α)).

    Args:
        xi: Location ξ. Defaults to 100.
        alpha: Scale α, > 0. Defaults to 10.
    """

    distribution_type = DistributionType.GUMBEL
    display_name = "Gumbel (EVI)"
    short_display_name = "EVI"
    parameter_names = ("Location (ξ)", "Scale (α)")
    parameter_symbols = ("ξ", "α")
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.METHOD_OF_LINEAR_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })
    _positive_parameters = (1,)

    xi = parameter(0, "Location ξ.")
    alpha = parameter(1, "Scale α.")

    def __init__(self, xi: float = 100.0, alpha: float = 10.0):
        super().__init__([xi, alpha])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[1] <= 0.0:
            return "The scale parameter α (alpha) must be positive."
        return reason

    def _scipy_distribution(self):
        return stats.gumbel_r(loc=self.xi, scale=self.alpha)

    def _median(self):
        return self.xi - self.alpha * np.log(np.log(2.0))

    def _mode(self):
        return self.xi

    # ---------------------------- estimation ----------------------------

    def parameters_from_moments(self, moments):
        alpha = np.sqrt(6.0) / np.pi * moments[1]
        return np.array([moments[0] - EULER_GAMMA * alpha, alpha])

    def parameters_from_linear_moments(self, moments):
        alpha = moments[1] / np.log(2.0)
        return np.array([moments[0] - EULER_GAMMA * alpha, alpha])

    def linear_moments_from_parameters(self, values):
        xi, alpha = values
        ln2 = np.log(2.0)
        return np.array([
            xi + EULER_GAMMA * alpha,
            alpha * ln2,
            np.log(9.0 / 8.0) / ln2,
            (16.0 * ln2 - 10.0 * np.log(3.0)) / ln2,
        ])

    def _mle(self, sample):
        """Solve the profile likelihood equation for α, then ξ in closed form.

        α satisfies  x̄ - α - Σ x e^{-x/α} / Σ e^{-x/α} = 0.
        """
        mean = np.mean(sample)
        shifted = sample - np.min(sample)

        def weights(alpha):
            return np.exp(-shifted / alpha)

        def score(alpha):
            w = weights(alpha)
            return mean - alpha - np.sum(sample * w) / np.sum(w)

        guess = np.sqrt(6.0) / np.pi * np.std(sample, ddof=1)
        alpha = solve_bracketed(score, 0.5 * guess, 2.0 * guess, minimum=np.finfo(float).tiny)
        xi = np.min(sample) - alpha * np.log(np.mean(weights(alpha)))
        return np.array([xi, alpha])

    # ---------------------------- delta method ----------------------------

    def quantile_gradient(self, probability):
        return np.array([1.0, -np.log(-np.log(probability))])

    def _closed_form_covariance(self, sample_size, method):
        if method is not EstimationMethod.MAXIMUM_LIKELIHOOD:
            return None
        a2 = self.alpha ** 2 / sample_size
        return np.array([[1.1087 * a2, 0.257 * a2], [0.257 * a2, 0.6079 * a2]])
