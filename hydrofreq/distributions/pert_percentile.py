"""PERT-shaped distributions specified by their 5th, 50th and 95th percentiles.

Expert elicitation often gives three percentiles rather than a minimum, most
likely and maximum. Both families here find the four-parameter beta whose
5%, 50% and 95% quantiles reproduce the given values, starting from the PERT
beta that treats them as min, mode and max. :class:`PertPercentileZ` does
the same for a probability-valued quantity on the standard normal scale.
"""
from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from ..numerics.optimization import maximize
from ..numerics.special import STANDARD_Z_LIMIT, standard_normal_cdf, standard_normal_pdf, standard_z
from ..statistics.moments import percentile
from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter
from .generalized_beta import GeneralizedBeta
from .pert import Pert

__all__ = ["PertPercentile", "PertPercentileZ"]

log = logging.getLogger(__name__)

_PROBABILITIES = np.array([0.05, 0.5, 0.95])
_EPS = np.finfo(float).eps


def solve_percentile_beta(fifth: float, fiftieth: float, ninety_fifth: float,
                          lower: float, upper: float) -> GeneralizedBeta:
    """Least-squares four-parameter beta through three percentiles.

    The bounds of the beta are searched inside [lower, upper]; the shapes
    between machine epsilon and a hundred times their PERT starting values.
    """
    targets = np.array([fifth, fiftieth, ninety_fifth], dtype=float)
    start = GeneralizedBeta.pert(fifth, fiftieth, ninety_fifth)
    initial = start.parameters
    lo = np.array([_EPS, _EPS, lower, lower])
    hi = np.array([100.0 * initial[0], 100.0 * initial[1], upper, upper])
    trial = GeneralizedBeta()

    def negative_sse(values):
        trial.set_parameters(values)
        if not trial.parameters_valid:
            return -np.inf
        return -float(np.sum((np.asarray(trial.inv_cdf(_PROBABILITIES)) - targets) ** 2))

    result = maximize(negative_sse, initial, lo, hi)
    log.debug("percentile beta for %s: %s (sse %g)", targets, result.values, -result.objective)
    return GeneralizedBeta(*result.values)


class PertPercentile(UnivariateDistribution):
    """Beta distribution matching given 5th, 50th and 95th percentiles.

    Args:
        fifth: 5th percentile. Defaults to 0.05.
        fiftieth: 50th percentile (median). Defaults to 0.5.
        ninety_fifth: 95th percentile. Defaults to 0.95.
    """

    distribution_type = DistributionType.PERT_PERCENTILE
    display_name = "PERT-Percentile"
    short_display_name = "PERT-%"
    parameter_names = ("5%", "50%", "95%")
    parameter_symbols = ("5%", "50%", "95%")
    supported_methods = frozenset({EstimationMethod.METHOD_OF_PERCENTILES})

    fifth = parameter(0, "5th percentile.")
    fiftieth = parameter(1, "50th percentile.")
    ninety_fifth = parameter(2, "95th percentile.")

    def __init__(self, fifth: float = 0.05, fiftieth: float = 0.5, ninety_fifth: float = 0.95):
        super().__init__([fifth, fiftieth, ninety_fifth])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        if values[0] >= values[2]:
            return "The 5% must be less than the 95%."
        if values[1] < values[0] or values[1] > values[2]:
            return "The 50% must be between the 5% and 95%."
        return None

    def beta_distribution(self) -> GeneralizedBeta:
        """The fitted four-parameter beta, solved once per parameter set."""
        if "beta" not in self._cache:
            a, m, b = self._params
            width = b - a
            self._cache["beta"] = solve_percentile_beta(a, m, b, a - 2.0 * width, b + 2.0 * width)
        return self._cache["beta"]

    def to_pert(self):
        """PERT with the bounds of the fitted beta and its mode as most likely value."""
        beta = self.beta_distribution()
        return Pert(beta.min, float(beta.mode()), beta.max)

    def _scipy_distribution(self):
        return self.beta_distribution()._scipy_distribution()

    def _support(self):
        beta = self.beta_distribution()
        return beta.min, beta.max

    def _mode(self):
        return self.beta_distribution().mode()

    def _fit_percentiles(self, sample):
        return np.asarray(percentile(np.sort(sample), _PROBABILITIES), dtype=float)


class PertPercentileZ(UnivariateDistribution):
    """Probability-valued quantity whose standard normal variate is a percentile beta.

    X = Φ(Y) with Y the four-parameter beta through Φ⁻¹ of the three given
    percentiles, so X lives in (0, 1).

    Args:
        fifth: 5th percentile, in (0, 1). Defaults to 0.05.
        fiftieth: 50th percentile, in (0, 1). Defaults to 0.5.
        ninety_fifth: 95th percentile, in (0, 1). Defaults to 0.95.
    """

    distribution_type = DistributionType.PERT_PERCENTILE_Z
    display_name = "PERT-Percentile Z"
    short_display_name = "PERT-% Z"
    parameter_names = ("5%", "50%", "95%")
    parameter_symbols = ("5%", "50%", "95%")
    supported_methods = frozenset({EstimationMethod.METHOD_OF_PERCENTILES})

    fifth = parameter(0, "5th percentile.")
    fiftieth = parameter(1, "50th percentile.")
    ninety_fifth = parameter(2, "95th percentile.")

    def __init__(self, fifth: float = 0.05, fiftieth: float = 0.5, ninety_fifth: float = 0.95):
        super().__init__([fifth, fiftieth, ninety_fifth])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        if np.any(values <= 0.0) or np.any(values >= 1.0):
            return "The percentiles must be between 0 and 1."
        if values[0] >= values[2]:
            return "The 5% must be less than the 95%."
        if values[1] < values[0] or values[1] > values[2]:
            return "The 50% must be between the 5% and 95%."
        return None

    def beta_distribution(self) -> GeneralizedBeta:
        """The fitted beta of the standard normal variate."""
        if "beta" not in self._cache:
            z = np.asarray(standard_z(self._params), dtype=float)
            self._cache["beta"] = solve_percentile_beta(*z, -STANDARD_Z_LIMIT, STANDARD_Z_LIMIT)
        return self._cache["beta"]

    def _support(self):
        beta = self.beta_distribution()
        return float(standard_normal_cdf(beta.min)), float(standard_normal_cdf(beta.max))

    def _z(self, x: NDArray) -> NDArray:
        return np.asarray(standard_z(x), dtype=float)

    def _pdf(self, x):
        z = self._z(x)
        return np.asarray(self.beta_distribution().density(z), dtype=float) / np.asarray(standard_normal_pdf(z))

    def _cdf(self, x):
        return np.asarray(self.beta_distribution().cdf(self._z(x)), dtype=float)

    def _ppf(self, p):
        return standard_normal_cdf(np.asarray(self.beta_distribution().inv_cdf(p), dtype=float))

    def _fit_percentiles(self, sample):
        return np.asarray(percentile(np.sort(sample), _PROBABILITIES), dtype=float)
