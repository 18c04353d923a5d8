"""Two-parameter Weibull distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from ..numerics.root_finding import solve_bracketed
from ..numerics.special import gamma as gamma_function
from ..numerics.special import log_gamma
from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Weibull"]

_TINY = np.finfo(float).tiny


class Weibull(UnivariateDistribution):
    """Weibull distribution, F(x) = 1 - exp(-(x/λ)^κ) on x ≥ 0.

    Args:
        lambda_: Scale λ, > 0. Defaults to 10.
        kappa: Shape κ, > 0. Defaults to 2.
    """

    distribution_type = DistributionType.WEIBULL
    display_name = "Weibull"
    short_display_name = "W"
    parameter_names = ("Scale (λ)", "Shape (κ)")
    parameter_symbols = ("λ", "κ")
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.METHOD_OF_LINEAR_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })
    _positive_parameters = (0, 1)

    lambda_ = parameter(0, "Scale λ.")
    kappa = parameter(1, "Shape κ.")

    def __init__(self, lambda_: float = 10.0, kappa: float = 2.0):
        super().__init__([lambda_, kappa])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        if values[0] <= 0.0:
            return "The scale parameter λ (lambda) must be positive."
        if values[1] <= 0.0:
            return "The shape parameter κ (kappa) must be positive."
        return None

    def _scipy_distribution(self):
        return stats.weibull_min(self.kappa, scale=self.lambda_)

    def _median(self):
        return self.lambda_ * np.log(2.0) ** (1.0 / self.kappa)

    def _mode(self):
        if self.kappa <= 1.0:
            return 0.0
        return self.lambda_ * ((self.kappa - 1.0) / self.kappa) ** (1.0 / self.kappa)

    # ---------------------------- estimation ----------------------------

    @staticmethod
    def _require_positive(sample):
        if np.any(sample <= 0.0):
            raise ValueError("Weibull fits need strictly positive sample values.")

    def parameters_from_moments(self, moments):
        mean, sd = moments[0], moments[1]
        if mean <= 0.0:
            raise ValueError("the sample mean must be positive.")
        target = np.log1p((sd / mean) ** 2)

        # log(1 + CV²) = lnΓ(1 + 2/κ) - 2 lnΓ(1 + 1/κ), decreasing in κ.
        def f(kappa):
            return log_gamma(1.0 + 2.0 / kappa) - 2.0 * log_gamma(1.0 + 1.0 / kappa) - target

        kappa = solve_bracketed(f, 0.5, 5.0, minimum=1e-2, maximum=1e3)
        return np.array([mean / gamma_function(1.0 + 1.0 / kappa), kappa])

    def parameters_from_linear_moments(self, moments):
        l1, l2 = moments[0], moments[1]
        if l1 <= 0.0 or not 0.0 < l2 / l1 < 1.0:
            raise ValueError("L-CV must be in (0, 1) for a Weibull fit.")
        # λ2/λ1 = 1 - 2^(-1/κ)
        kappa = -np.log(2.0) / np.log1p(-l2 / l1)
        return np.array([l1 / gamma_function(1.0 + 1.0 / kappa), kappa])

    def _mle(self, sample):
        """Profile likelihood: κ solves 1/κ + mean(ln x) - Σ x^κ ln x / Σ x^κ = 0."""
        self._require_positive(sample)
        log_x = np.log(sample)
        mean_log = np.mean(log_x)
        # Work with x / max(x) to keep x^κ finite for large κ.
        scaled = log_x - np.max(log_x)

        def score(kappa):
            w = np.exp(kappa * scaled)
            return 1.0 / kappa + mean_log - np.sum(w * log_x) / np.sum(w)

        kappa = solve_bracketed(score, 0.5, 5.0, minimum=_TINY)
        lam = np.exp(np.max(log_x)) * np.mean(np.exp(kappa * scaled)) ** (1.0 / kappa)
        return np.array([lam, kappa])

    # ---------------------------- delta method ----------------------------

    def quantile_gradient(self, probability):
        lam, kappa = self.lambda_, self.kappa
        y = -np.log1p(-probability)
        base = y ** (1.0 / kappa)
        return np.array([base, -lam * base * np.log(y) / kappa ** 2])

    def _closed_form_covariance(self, sample_size, method):
        if method is not EstimationMethod.MAXIMUM_LIKELIHOOD:
            return None
        lam, kappa = self.lambda_, self.kappa
        n = sample_size
        cov = 0.257022 * lam / n
        return np.array([
            [1.108665 * lam ** 2 / (n * kappa ** 2), cov],
            [cov, 0.607927 * kappa ** 2 / n],
        ])
