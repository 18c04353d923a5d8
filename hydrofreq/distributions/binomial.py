"""Binomial distribution."""
from __future__ import annotations

import numpy as np
from scipy import stats

from .base import DistributionType, EstimationMethod, UnivariateDistribution, parameter

__all__ = ["Binomial"]


class Binomial(UnivariateDistribution):
    """Number of successes in n independent Bernoulli(p) trials.

    The number of trials is treated as known when fitting; only p is
    estimated.

    Args:
        probability: Probability of success in [0, 1]. Defaults to 0.5.
        trials: Number of trials, a non-negative integer. Defaults to 10.
    """

    distribution_type = DistributionType.BINOMIAL
    display_name = "Binomial"
    short_display_name = "Bin"
    parameter_names = ("Probability of Success (p)", "Number of Trials (n)")
    parameter_symbols = ("p", "n")
    is_discrete = True
    supported_methods = frozenset({
        EstimationMethod.METHOD_OF_MOMENTS,
        EstimationMethod.MAXIMUM_LIKELIHOOD,
    })

    probability = parameter(0, "Probability of success.")
    trials = parameter(1, "Number of trials.")

    def __init__(self, probability: float = 0.5, trials: int = 10):
        super().__init__([probability, trials])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        if not 0.0 <= values[0] <= 1.0:
            return "Probability must be between 0 and 1."
        if values[1] < 0 or values[1] != np.floor(values[1]):
            return "The number of trials must be a non-negative integer."
        return None

    def _scipy_distribution(self):
        return stats.binom(int(self.trials), self.probability)

    def _support(self):
        return 0.0, float(self.trials)

    def _mode(self):
        return float(np.floor((self.trials + 1.0) * self.probability))

    def parameters_from_moments(self, moments):
        return np.array([moments[0] / self.trials, self.trials])

    def _mle(self, sample):
        if np.any(sample > self.trials):
            raise ValueError("sample values exceed the number of trials.")
        return np.array([np.mean(sample) / self.trials, self.trials])
