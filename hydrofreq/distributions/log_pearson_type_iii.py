"""Log-Pearson type III distribution, the standard flood-frequency model."""
from __future__ import annotations

import numpy as np

from ..statistics.moments import linear_moments, product_moments
from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter
from .log_normal import log_transform
from .pearson_type_iii import NEAR_ZERO_SKEW, PearsonTypeIII

__all__ = ["LogPearsonTypeIII"]


class LogPearsonTypeIII(UnivariateDistribution):
    """log_b(X) follows a Pearson type III distribution.

    Parameters are the mean, standard deviation and skew of the logarithms.
    Estimation works on the logarithms of the sample ("indirect" moments), as
    in Bulletin 17 practice.

    Args:
        mu: Mean of the logarithms. Defaults to 3.
        sigma: Standard deviation of the logarithms, > 0. Defaults to 0.5.
        gamma: Skew of the logarithms. Defaults to 0.
        base: Logarithm base. Defaults to 10.
    """

    distribution_type = DistributionType.LOG_PEARSON_TYPE_III
    display_name = "Log-Pearson Type III"
    short_display_name = "LPIII"
    parameter_names = ("Mean (of log) (µ)", "Std Dev (of log) (σ)", "Skew (of log) (γ)")
    parameter_symbols = ("µ", "σ", "γ")
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.METHOD_OF_LINEAR_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })
    _positive_parameters = (1,)

    mu = parameter(0, "Mean of the logarithms.")
    sigma = parameter(1, "Standard deviation of the logarithms.")
    gamma = parameter(2, "Skew of the logarithms.")

    def __init__(self, mu: float = 3.0, sigma: float = 0.5, gamma: float = 0.0, *, base: float = 10.0):
        if not base > 0.0 or base == 1.0:
            raise ValueError("base must be positive and different from 1.")
        self.base = float(base)
        super().__init__([mu, sigma, gamma])

    @property
    def _ln_base(self) -> float:
        return np.log(self.base)

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[1] <= 0.0:
            return "Sigma must be positive."
        return reason

    def log_distribution(self) -> PearsonTypeIII:
        """The Pearson type III distribution of the logarithms."""
        if "log" not in self._cache:
            self._cache["log"] = PearsonTypeIII(*self._params)
        return self._cache["log"]

    # ----------------------------- evaluation -----------------------------

    def _support(self):
        lo, hi = self.log_distribution()._support()
        return self.base ** lo, self.base ** hi

    def _pdf(self, x):
        with np.errstate(divide="ignore"):
            y = np.log(x) / self._ln_base
        return np.asarray(self.log_distribution().density(y)) / (x * self._ln_base)

    def _cdf(self, x):
        with np.errstate(divide="ignore"):
            y = np.log(x) / self._ln_base
        return np.asarray(self.log_distribution().cdf(y))

    def _sf(self, x):
        with np.errstate(divide="ignore"):
            y = np.log(x) / self._ln_base
        return np.asarray(self.log_distribution().ccdf(y))

    def _ppf(self, p):
        return self.base ** np.asarray(self.log_distribution().inv_cdf(p))

    # ------------------------------ moments ------------------------------

    def _raw_moment(self, r: int) -> float:
        """E[X^r] = E[exp(r·k·Y)] for Y the log-space Pearson III, k = ln(base)."""
        k = r * self._ln_base
        if abs(self.gamma) <= NEAR_ZERO_SKEW:
            return float(np.exp(k * self.mu + 0.5 * (k * self.sigma) ** 2))
        p3 = self.log_distribution()
        if k * p3.beta >= 1.0:
            return np.inf
        return float(np.exp(k * p3.xi - p3.alpha * np.log1p(-k * p3.beta)))

    def central_moments(self):
        if not self.parameters_valid:
            return np.full(4, np.nan)
        if "moments" not in self._cache:
            m1, m2, m3, m4 = (self._raw_moment(r) for r in range(1, 5))
            with np.errstate(invalid="ignore", over="ignore"):
                var = m2 - m1 ** 2
                sd = np.sqrt(var)
                skew = (m3 - 3.0 * m1 * m2 + 2.0 * m1 ** 3) / sd ** 3
                kurt = (m4 - 4.0 * m1 * m3 + 6.0 * m1 ** 2 * m2 - 3.0 * m1 ** 4) / var ** 2
            self._cache["moments"] = np.array([m1, sd, skew, kurt], dtype=float)
        return self._cache["moments"].copy()

    def _mode(self):
        p3 = self.log_distribution()
        k = self._ln_base
        if abs(self.gamma) <= NEAR_ZERO_SKEW:
            return self.base ** (self.mu - k * self.sigma ** 2)
        # Mode of exp(kY) with Y = ξ + βG, G ~ Gamma(α), at G* = (α - 1)/(1 + kβ).
        denominator = 1.0 + k * p3.beta
        if denominator <= 0.0 or p3.alpha <= 1.0:
            return super()._mode()
        return self.base ** (p3.xi + p3.beta * (p3.alpha - 1.0) / denominator)

    # ---------------------------- estimation ----------------------------

    def _fit(self, sample, method):
        y = log_transform(sample, self.base)
        if method is EstimationMethod.METHOD_OF_MOMENTS:
            return self.parameters_from_moments(product_moments(y))
        if method is EstimationMethod.METHOD_OF_LINEAR_MOMENTS:
            return self.parameters_from_linear_moments(linear_moments(y))
        return PearsonTypeIII(*self._params)._mle(y)

    def parameters_from_moments(self, moments):
        """Parameters from the product moments of the logarithms."""
        return np.array([moments[0], moments[1], moments[2]], dtype=float)

    def parameters_from_linear_moments(self, moments):
        """Parameters from the L-moments of the logarithms."""
        return PearsonTypeIII().parameters_from_linear_moments(moments)

    def linear_moments_from_parameters(self, values):
        """L-moments of the logarithms."""
        return PearsonTypeIII().linear_moments_from_parameters(values)

    # ---------------------------- delta method ----------------------------

    def quantile_gradient(self, probability):
        q = float(self.inv_cdf(probability))
        return q * self._ln_base * self.log_distribution().quantile_gradient(probability)

    def _closed_form_covariance(self, sample_size, method):
        return self.log_distribution()._closed_form_covariance(sample_size, method)

    def quantile_variance(self, probability, sample_size, method):
        """Log-space Pearson III quantile variance scaled by (Q·ln b)²."""
        method = EstimationMethod(method)
        if method is not EstimationMethod.METHOD_OF_MOMENTS:
            return super().quantile_variance(probability, sample_size, method)
        log_variance = self.log_distribution().quantile_variance(probability, sample_size, method)
        q = float(self.inv_cdf(probability))
        return float(log_variance * (q * self._ln_base) ** 2)

    def __repr__(self) -> str:
        values = ", ".join(repr(float(v)) for v in self._params)
        return f"{type(self).__name__}({values}, base={self.base!r})"
