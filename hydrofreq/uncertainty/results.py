"""Result container of a bootstrap uncertainty analysis."""
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from ..array_backend.utils import _as_sample
from ..custom_types import ArrayLike
from ..distributions.base import UnivariateDistribution
from ..statistics.goodness_of_fit import aic, bic, rmse

__all__ = ["UncertaintyAnalysisResults"]


@dataclass
class UncertaintyAnalysisResults:
    """Frequency curves and intervals from :meth:`BootstrapAnalysis.estimate`.

    Attributes:
        parent_distribution: The distribution the replicates were drawn from.
        probabilities: Non-exceedance probabilities of the curves, shape (P,).
        mode_curve: Quantiles of the parent distribution, shape (P,).
        mean_curve: Quantiles of the expected-probability curve, shape (P,).
        confidence_intervals: Lower and upper bounds, shape (P, 2).
        alpha: Significance level of the intervals.
        parameter_sets: Replicate parameter vectors, shape (B, k), NaN rows
            for failed replicates. None when not recorded.
        aic, bic, rmse: Fit statistics of the parent against an observed
            sample, NaN until :meth:`goodness_of_fit` is called.
    """

    parent_distribution: UnivariateDistribution
    probabilities: NDArray[np.floating]
    mode_curve: NDArray[np.floating]
    mean_curve: NDArray[np.floating]
    confidence_intervals: NDArray[np.floating]
    alpha: float
    parameter_sets: NDArray[np.floating] | None = None
    aic: float = field(default=np.nan)
    bic: float = field(default=np.nan)
    rmse: float = field(default=np.nan)

    @property
    def lower_curve(self) -> NDArray[np.floating]:
        return self.confidence_intervals[:, 0]

    @property
    def upper_curve(self) -> NDArray[np.floating]:
        return self.confidence_intervals[:, 1]

    def goodness_of_fit(self, sample: ArrayLike) -> "UncertaintyAnalysisResults":
        """Fill `aic`, `bic` and `rmse` of the parent fitted to `sample`.

        The RMSE compares the sorted sample against parent quantiles at the
        Weibull plotting positions i / (n + 1).
        """
        x = np.sort(_as_sample(sample))
        n = x.size
        k = self.parent_distribution.number_of_parameters
        log_l = self.parent_distribution.log_likelihood(x)
        plotting_positions = np.arange(1, n + 1) / (n + 1.0)
        modeled = np.asarray(self.parent_distribution.inv_cdf(plotting_positions), dtype=float)
        self.aic = aic(k, log_l)
        self.bic = bic(n, k, log_l)
        self.rmse = rmse(x, modeled, k)
        return self
