"""Log-normal distribution (base e) parameterized by its real-space mean and standard deviation."""
from __future__ import annotations

import numpy as np
from scipy import stats

from ..numerics import differentiation
from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter
from .log_normal import log_transform
from .normal import NORMAL_L_KURTOSIS

__all__ = ["LnNormal"]


def _log_space(mean: float, sd: float):
    """(μ, σ) of ln X for a log-normal X with the given mean and standard deviation."""
    sigma2 = np.log1p((sd / mean) ** 2)
    return np.log(mean) - 0.5 * sigma2, np.sqrt(sigma2)


def _real_space(mu: float, sigma: float):
    s2 = sigma * sigma
    mean = np.exp(mu + 0.5 * s2)
    return mean, mean * np.sqrt(np.expm1(s2))


class LnNormal(UnivariateDistribution):
    """Log-normal distribution with ln(X) ~ N(μ, σ²).

    The parameter vector holds the mean and standard deviation of X itself;
    the log-space values are available as `mu` and `sigma`.

    Args:
        mean: Mean of X, > 0. Defaults to 10.
        standard_deviation: Standard deviation of X, > 0. Defaults to 10.
    """

    distribution_type = DistributionType.LN_NORMAL
    display_name = "Log-Normal (base e)"
    short_display_name = "LN"
    parameter_names = ("Mean (µ)", "Std Dev (σ)")
    parameter_symbols = ("µ", "σ")
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.METHOD_OF_LINEAR_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })
    _positive_parameters = (0, 1)

    real_mean = parameter(0, "Mean of X.")
    real_standard_deviation = parameter(1, "Standard deviation of X.")

    def __init__(self, mean: float = 10.0, standard_deviation: float = 10.0):
        super().__init__([mean, standard_deviation])

    def _assign(self, values):
        super()._assign(values)
        with np.errstate(all="ignore"):
            self._mu, self._sigma = _log_space(self._params[0], self._params[1])

    @property
    def mu(self) -> float:
        """Mean of ln X."""
        return float(self._mu)

    @property
    def sigma(self) -> float:
        """Standard deviation of ln X."""
        return float(self._sigma)

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[0] <= 0.0:
            return "The mean must be positive."
        if reason is None and values[1] <= 0.0:
            return "Standard deviation must be positive."
        return reason

    def _scipy_distribution(self):
        return stats.lognorm(s=self.sigma, scale=np.exp(self.mu))

    def _mean(self):
        return float(self._params[0])

    def _standard_deviation(self):
        return float(self._params[1])

    def _median(self):
        return float(np.exp(self.mu))

    def _mode(self):
        return float(np.exp(self.mu - self.sigma ** 2))

    def _skewness(self):
        e = np.expm1(self.sigma ** 2)
        return float((e + 3.0) * np.sqrt(e))

    def _kurtosis(self):
        s2 = self.sigma ** 2
        return float(np.exp(4.0 * s2) + 2.0 * np.exp(3.0 * s2) + 3.0 * np.exp(2.0 * s2) - 3.0)

    # ---------------------------- estimation ----------------------------
    # The moment views take moments of ln X and return real-space parameters.

    def _fit(self, sample, method):
        y = log_transform(sample, np.e)
        if method is EstimationMethod.MAXIMUM_LIKELIHOOD:
            return np.array(_real_space(np.mean(y), np.std(y)))
        return super()._fit(y, method)

    def parameters_from_moments(self, moments):
        return np.array(_real_space(moments[0], moments[1]))

    def parameters_from_linear_moments(self, moments):
        return np.array(_real_space(moments[0], moments[1] * np.sqrt(np.pi)))

    def linear_moments_from_parameters(self, values):
        mu, sigma = _log_space(values[0], values[1])
        return np.array([mu, sigma / np.sqrt(np.pi), 0.0, NORMAL_L_KURTOSIS])

    # ---------------------------- delta method ----------------------------

    def _closed_form_covariance(self, sample_size, method):
        if method not in (EstimationMethod.METHOD_OF_MOMENTS, EstimationMethod.MAXIMUM_LIKELIHOOD):
            return None
        # Normal-theory covariance of (μ, σ), carried to (mean, sd) by the Jacobian.
        s2 = self.sigma ** 2
        log_cov = np.diag([s2 / sample_size, s2 / (2.0 * sample_size)])
        J = differentiation.jacobian(lambda v: np.array(_real_space(v[0], v[1])),
                                     np.array([self.mu, self.sigma]))
        return J @ log_cov @ J.T
