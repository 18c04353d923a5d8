"""Pearson type III distribution, parameterized by its product moments."""
from __future__ import annotations

import numpy as np
from scipy import stats

from ..numerics.differentiation import derivative, step_size
from ..numerics.special import frequency_factor, frequency_factor_derivative, log_gamma, trigamma
from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter
from .gamma import gamma_linear_moment_ratios
from .normal import NORMAL_L_KURTOSIS

__all__ = ["PearsonTypeIII", "NEAR_ZERO_SKEW"]

# Skews this small are treated as exactly normal.
NEAR_ZERO_SKEW = 1e-4


class PearsonTypeIII(UnivariateDistribution):
    """Pearson type III: a shifted, possibly reflected, gamma distribution.

    The public parameters are the mean μ, standard deviation σ and skew γ.
    The equivalent gamma form has location ξ = μ - 2σ/γ, scale β = σγ/2 and
    shape α = 4/γ², available through :attr:`xi`, :attr:`beta` and :attr:`alpha`.

    Args:
        mu: Mean. Defaults to 100.
        sigma: Standard deviation, > 0. Defaults to 10.
        gamma: Skew coefficient. Defaults to 0.
    """

    distribution_type = DistributionType.PEARSON_TYPE_III
    display_name = "Pearson Type III"
    short_display_name = "PIII"
    parameter_names = ("Mean (µ)", "Std Dev (σ)", "Skew (γ)")
    parameter_symbols = ("µ", "σ", "γ")
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.METHOD_OF_LINEAR_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })
    _positive_parameters = (1,)

    mu = parameter(0, "Mean µ.")
    sigma = parameter(1, "Standard deviation σ.")
    gamma = parameter(2, "Skew γ.")

    def __init__(self, mu: float = 100.0, sigma: float = 10.0, gamma: float = 0.0):
        super().__init__([mu, sigma, gamma])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[1] <= 0.0:
            return "Sigma must be positive."
        return reason

    @property
    def is_normal(self) -> bool:
        return abs(self.gamma) <= NEAR_ZERO_SKEW

    @property
    def xi(self) -> float:
        """Location of the bound of the support."""
        return self.mu - 2.0 * self.sigma / self.gamma if not self.is_normal else -np.inf

    @property
    def beta(self) -> float:
        """Gamma scale; negative for negatively skewed distributions."""
        return 0.5 * self.sigma * self.gamma

    @property
    def alpha(self) -> float:
        """Gamma shape."""
        return 4.0 / self.gamma ** 2 if not self.is_normal else np.inf

    def _scipy_distribution(self):
        if self.is_normal:
            return stats.norm(loc=self.mu, scale=self.sigma)
        return stats.pearson3(self.gamma, loc=self.mu, scale=self.sigma)

    def _mean(self):
        return self.mu

    def _mode(self):
        if self.is_normal:
            return self.mu
        return self.xi + (self.alpha - 1.0) * self.beta

    def _standard_deviation(self):
        return self.sigma

    def _skewness(self):
        return 0.0 if self.is_normal else self.gamma

    def _kurtosis(self):
        return 3.0 if self.is_normal else 3.0 + 1.5 * self.gamma ** 2

    # ---------------------------- estimation ----------------------------

    def parameters_from_moments(self, moments):
        return np.array([moments[0], moments[1], moments[2]], dtype=float)

    def parameters_from_linear_moments(self, moments):
        """Hosking's rational approximation of the shape from the L-skewness."""
        l1, l2, t3 = moments[0], moments[1], moments[2]
        t = abs(t3)
        if t <= 1e-6:
            return np.array([l1, l2 * np.sqrt(np.pi), 0.0])
        if t < 1.0 / 3.0:
            z = 3.0 * np.pi * t3 * t3
            alpha = (1.0 + 0.2906 * z) / (z + 0.1882 * z ** 2 + 0.0442 * z ** 3)
        else:
            z = 1.0 - t
            alpha = ((0.36067 * z - 0.59567 * z ** 2 + 0.25361 * z ** 3)
                     / (1.0 - 2.78861 * z + 2.56096 * z ** 2 - 0.77045 * z ** 3))
        gamma = 2.0 / np.sqrt(alpha) * np.sign(t3)
        sigma = l2 * np.sqrt(np.pi) * np.sqrt(alpha) * np.exp(log_gamma(alpha) - log_gamma(alpha + 0.5))
        return np.array([l1, sigma, gamma])

    def linear_moments_from_parameters(self, values):
        mu, sigma, gamma = values
        if abs(gamma) <= NEAR_ZERO_SKEW:
            return np.array([mu, sigma / np.sqrt(np.pi), 0.0, NORMAL_L_KURTOSIS])
        alpha = 4.0 / gamma ** 2
        beta = 0.5 * sigma * abs(gamma)
        l2 = beta * np.exp(log_gamma(alpha + 0.5) - log_gamma(alpha)) / np.sqrt(np.pi)
        t3, t4 = gamma_linear_moment_ratios(alpha)
        return np.array([mu, l2, np.sign(gamma) * t3, t4])

    def parameter_constraints(self, sample):
        """Bounds for maximum likelihood; the skew is searched in [-2, 2]."""
        initial, lower, upper = super().parameter_constraints(sample)
        lower[2], upper[2] = -2.0, 2.0
        if not -2.0 < initial[2] < 2.0:
            initial[2] = 0.0
        return initial, lower, upper

    # ---------------------------- delta method ----------------------------

    def quantile_gradient(self, probability):
        """(1, K, σ·∂K/∂γ) for the exact standardized quantile K(γ, p).

        ∂K/∂γ is a central difference of scipy's pearson3 quantile in the skew.
        The step never drops below 1e-3 so that the difference straddles the
        normal limit cleanly at small skews.
        """
        p = float(probability)
        kp = float(stats.pearson3.ppf(p, self.gamma))
        h = max(step_size(self.gamma), 1e-3)
        dkp = derivative(lambda g: float(stats.pearson3.ppf(p, g)), self.gamma, h)
        return np.array([1.0, kp, self.sigma * dkp])

    def _closed_form_covariance(self, sample_size, method):
        """Bobée's (1975) MLE covariance of (ξ, 1/β, α), mapped to (μ, σ, γ)."""
        if method is not EstimationMethod.MAXIMUM_LIKELIHOOD or self.is_normal:
            return None
        a = 1.0 / self.beta
        lam = self.alpha
        n = sample_size
        psi1 = trigamma(lam)
        A = 2.0 * psi1 - 2.0 / (lam - 1.0) + 1.0 / (lam - 1.0) ** 2
        var_xi = (lam - 2.0) / (n * A) / a ** 2 * (psi1 * lam - 1.0)
        var_a = (lam - 2.0) * a ** 2 / (n * A) * (psi1 / (lam - 2.0) - 1.0 / (lam - 1.0) ** 2)
        var_lam = 2.0 / (n * A)
        cov_xi_a = (lam - 2.0) / (n * A) * (psi1 - 1.0 / (lam - 1.0))
        cov_xi_lam = (2.0 - lam) / (n * a * A * (lam - 1.0))
        cov_a_lam = a / (n * A * (lam - 1.0))
        shape_cov = np.array([
            [var_xi, cov_xi_a, cov_xi_lam],
            [cov_xi_a, var_a, cov_a_lam],
            [cov_xi_lam, cov_a_lam, var_lam],
        ])
        s = np.sign(a)
        root = np.sqrt(lam)
        J = np.array([
            [1.0, -lam / a ** 2, 1.0 / a],
            [0.0, -root * s / a ** 2, 1.0 / (2.0 * root * abs(a))],
            [0.0, 0.0, -s * lam ** -1.5],
        ])
        return J @ shape_cov @ J.T

    def quantile_variance(self, probability, sample_size, method):
        """Delta-method quantile variance; Bobée's expression for the method of moments."""
        method = EstimationMethod(method)
        if method is not EstimationMethod.METHOD_OF_MOMENTS:
            return super().quantile_variance(probability, sample_size, method)
        g = self.gamma
        g2 = g * g
        kp = frequency_factor(g, probability)
        dkp = frequency_factor_derivative(g, probability)
        return float(self.sigma ** 2 / sample_size * (
            1.0 + kp ** 2 / 2.0 * (1.0 + 0.75 * g2) + kp * g
            + 6.0 * (1.0 + 0.25 * g2) * dkp * (dkp * (1.0 + 1.25 * g2) + kp / 2.0 * g)
        ))
