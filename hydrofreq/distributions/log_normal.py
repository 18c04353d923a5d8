"""Log-normal distribution with a configurable logarithm base."""
from __future__ import annotations

import numpy as np
from scipy import stats

from ..numerics.special import standard_z
from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter
from .normal import NORMAL_L_KURTOSIS

__all__ = ["LogNormal", "log_transform"]


def log_transform(sample, base: float = 10.0):
    """Logarithms of a sample in the given base.

    Raises:
        ValueError: If any value is not positive.
    """
    x = np.asarray(sample, dtype=float)
    if np.any(x <= 0.0):
        raise ValueError("log-space fits need strictly positive sample values.")
    return np.log(x) / np.log(base)


class LogNormal(UnivariateDistribution):
    """Log-normal distribution: log_b(X) ~ N(μ, σ²).

    Parameters are the mean and standard deviation of the logarithms. The
    base defaults to 10, the convention in flood-frequency work; pass
    ``base=np.e`` for natural logarithms.

    Args:
        mu: Mean of the logarithms. Defaults to 3.
        sigma: Standard deviation of the logarithms. Defaults to 0.5.
        base: Logarithm base, > 0 and != 1.
    """

    distribution_type = DistributionType.LOG_NORMAL
    display_name = "Log-Normal"
    short_display_name = "LogN"
    parameter_names = ("Mean (of log) (µ)", "Std Dev (of log) (σ)")
    parameter_symbols = ("µ", "σ")
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.METHOD_OF_LINEAR_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })
    _positive_parameters = (1,)

    mu = parameter(0, "Mean of the logarithms.")
    sigma = parameter(1, "Standard deviation of the logarithms.")

    def __init__(self, mu: float = 3.0, sigma: float = 0.5, *, base: float = 10.0):
        if not base > 0.0 or base == 1.0:
            raise ValueError("base must be positive and different from 1.")
        self.base = float(base)
        super().__init__([mu, sigma])

    @property
    def _ln_base(self) -> float:
        return np.log(self.base)

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[1] <= 0.0:
            return "The standard deviation σ (sigma) must be positive."
        return reason

    def _scipy_distribution(self):
        k = self._ln_base
        return stats.lognorm(s=self.sigma * k, scale=np.exp(self.mu * k))

    def _median(self):
        return self.base ** self.mu

    def _mode(self):
        k = self._ln_base
        return np.exp(self.mu * k - (self.sigma * k) ** 2)

    # ---------------------------- estimation ----------------------------
    # Moment and L-moment views are those of the logarithms.

    def _fit(self, sample, method):
        if method is EstimationMethod.MAXIMUM_LIKELIHOOD:
            y = log_transform(sample, self.base)
            return np.array([np.mean(y), np.std(y)])
        return super()._fit(log_transform(sample, self.base), method)

    def parameters_from_moments(self, moments):
        return np.array([moments[0], moments[1]], dtype=float)

    def moments_from_parameters(self, values):
        return np.array([values[0], values[1], 0.0, 3.0])

    def parameters_from_linear_moments(self, moments):
        return np.array([moments[0], moments[1] * np.sqrt(np.pi)], dtype=float)

    def linear_moments_from_parameters(self, values):
        mu, sigma = values
        return np.array([mu, sigma / np.sqrt(np.pi), 0.0, NORMAL_L_KURTOSIS])

    # ---------------------------- delta method ----------------------------

    def quantile_gradient(self, probability):
        q = float(self.inv_cdf(probability))
        k = self._ln_base
        return np.array([q * k, q * k * standard_z(probability)])

    def _closed_form_covariance(self, sample_size, method):
        if method in (EstimationMethod.METHOD_OF_MOMENTS, EstimationMethod.MAXIMUM_LIKELIHOOD):
            s2 = self.sigma ** 2
            return np.diag([s2 / sample_size, s2 / (2.0 * sample_size)])
        return None

    def __repr__(self) -> str:
        return f"LogNormal({self.mu!r}, {self.sigma!r}, base={self.base!r})"
