"""Parametric and nonparametric bootstrap of a fitted distribution.

:class:`BootstrapAnalysis` draws B samples of the fitted size, refits a copy
of the parent distribution to each, and reduces the replicates to quantile
confidence intervals and an expected-probability ("mean") frequency curve.

Replicate m draws from its own generator, seeded with the m-th child of
``np.random.SeedSequence(settings.seed)``. A failed refit re-draws from the
same stream, so results do not depend on the order in which replicates run
and a threaded run matches a serial one.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from ..array_backend.utils import _as_sample, _ensure_probabilities, _ensure_vector
from ..config import BootstrapSettings
from ..custom_types import ArrayLike
from ..distributions.base import EstimationMethod, UnivariateDistribution
from ..exceptions import EstimationError
from ..numerics.special import standard_z
from ..statistics.moments import jackknife, linear_moments, product_moments
from . import intervals
from .replicates import BootstrapDistribution
from .results import UncertaintyAnalysisResults

__all__ = ["IntervalMethod", "BootstrapAnalysis"]

log = logging.getLogger(__name__)

MIN_SAMPLE_SIZE = 10

# Probability range spanned by the expected-probability quantile grid.
_MEAN_CURVE_RANGE = (0.001, 1.0 - 1e-9)


class IntervalMethod(str, Enum):
    PERCENTILE = "percentile"
    NORMAL = "normal"
    BIAS_CORRECTED = "bias_corrected"
    BCA = "bca"
    BOOTSTRAP_T = "bootstrap_t"


class BootstrapAnalysis:
    """Bootstrap uncertainty analysis of a fitted distribution.

    Args:
        distribution: The fitted parent distribution. It is copied.
        estimation_method: Method used to refit every replicate.
        sample_size: Size of each replicate sample, at least 10.
        settings: Replication count, seed, retries, workers and default alpha.
        sample: The observed sample. Required for nonparametric resampling
            and for BCa intervals.
        parametric: Draw replicate samples from the parent distribution
            (True) or resample `sample` with replacement (False).

    Raises:
        ValueError: If `sample_size` is below 10, or a nonparametric analysis
            has no sample.
        NotImplementedError: If the distribution does not support
            `estimation_method`.
    """

    def __init__(
        self,
        distribution: UnivariateDistribution,
        estimation_method: EstimationMethod | str,
        sample_size: int,
        settings: Optional[BootstrapSettings] = None,
        *,
        sample: Optional[ArrayLike] = None,
        parametric: bool = True,
    ):
        estimation_method = EstimationMethod(estimation_method)
        if estimation_method not in distribution.supported_methods:
            raise NotImplementedError(
                f"{distribution.display_name} does not support {estimation_method.value}."
            )
        if int(sample_size) < MIN_SAMPLE_SIZE:
            raise ValueError(f"The sample size must be at least {MIN_SAMPLE_SIZE}.")
        if not parametric and sample is None:
            raise ValueError("A nonparametric bootstrap needs the observed sample.")
        self.distribution = distribution.clone()
        self.estimation_method = estimation_method
        self.sample_size = int(sample_size)
        self.settings = settings or BootstrapSettings()
        self.parametric = bool(parametric)
        self._sample = None if sample is None else _as_sample(sample)
        self._replicates: Optional[List[Tuple[Optional[UnivariateDistribution], Optional[NDArray]]]] = None

    @classmethod
    def from_sample(
        cls,
        sample: ArrayLike,
        distribution: UnivariateDistribution,
        estimation_method: EstimationMethod | str,
        settings: Optional[BootstrapSettings] = None,
        parametric: bool = True,
    ) -> "BootstrapAnalysis":
        """Fit a copy of `distribution` to `sample` and bootstrap the fit.

        Raises:
            EstimationError: If the parent fit fails.
        """
        x = _as_sample(sample)
        parent = distribution.clone().estimate(x, estimation_method)
        return cls(parent, estimation_method, x.size, settings, sample=x, parametric=parametric)

    @property
    def replications(self) -> int:
        return self.settings.replications

    @property
    def sample(self) -> Optional[NDArray[np.floating]]:
        return None if self._sample is None else self._sample.copy()

    # ----------------------------- replicates -----------------------------

    def _map(self, func: Callable, items: Iterable) -> list:
        workers = self.settings.max_workers
        if workers is None or workers == 1:
            return [func(item) for item in items]
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(func, items))

    def _streams(self) -> List[np.random.SeedSequence]:
        return np.random.SeedSequence(self.settings.seed).spawn(self.replications)

    def _draw(self, rng: np.random.Generator) -> NDArray[np.floating]:
        if self.parametric:
            return self.distribution.sample(self.sample_size, rng=rng)
        return rng.choice(self._sample, size=self.sample_size, replace=True)

    def _replicate(self, stream: np.random.SeedSequence):
        rng = np.random.default_rng(stream)
        reason = None
        for _ in range(self.settings.max_retries + 1):
            x = self._draw(rng)
            candidate = self.distribution.clone()
            try:
                candidate.estimate(x, self.estimation_method)
            except EstimationError as err:
                reason = err
                continue
            return candidate, x
        log.warning("bootstrap replicate failed after %d attempts: %s",
                    self.settings.max_retries + 1, reason)
        return None, None

    def _run(self):
        if self._replicates is None:
            log.info("bootstrapping %s by %s: %d replicates of size %d",
                     self.distribution.display_name, self.estimation_method.value,
                     self.replications, self.sample_size)
            self._replicates = self._map(self._replicate, self._streams())
            failed = sum(d is None for d, _ in self._replicates)
            log.info("bootstrap finished: %d of %d replicates valid",
                     self.replications - failed, self.replications)
        return self._replicates

    def distributions(self) -> List[Optional[UnivariateDistribution]]:
        """The B refitted replicates; None where every attempt failed.

        The replicates are computed once and reused by the other methods.
        """
        return [d for d, _ in self._run()]

    def distributions_from_parameters(self, parameter_sets: ArrayLike) -> List[Optional[UnivariateDistribution]]:
        """Copies of the parent carrying each row of `parameter_sets`.

        Rows giving invalid parameters become None.
        """
        out = []
        for values in np.atleast_2d(np.asarray(parameter_sets, dtype=float)):
            d = self.distribution.clone()
            d.set_parameters(values)
            out.append(d if d.parameters_valid else None)
        return out

    def _by_replicate(self, func: Callable[[UnivariateDistribution], NDArray], width: int,
                      distributions: Optional[Sequence[Optional[UnivariateDistribution]]] = None
                      ) -> NDArray[np.floating]:
        distributions = self.distributions() if distributions is None else distributions
        out = np.full((len(distributions), width), np.nan)
        for i, d in enumerate(distributions):
            if d is not None:
                out[i] = func(d)
        return out

    # ------------------------ replicate statistics ------------------------

    def parameters(self, distributions=None) -> NDArray[np.floating]:
        """Replicate parameter vectors, shape (B, k)."""
        return self._by_replicate(lambda d: d.parameters, self.distribution.number_of_parameters,
                                  distributions)

    def _sample_statistics(self, statistic: Callable[[NDArray], NDArray]) -> NDArray[np.floating]:
        def first_draw(stream):
            return statistic(self._draw(np.random.default_rng(stream)))
        return np.array(self._map(first_draw, self._streams()), dtype=float)

    def product_moments(self) -> NDArray[np.floating]:
        """Sample product moments of each replicate sample, shape (B, 4)."""
        return self._sample_statistics(product_moments)

    def linear_moments(self) -> NDArray[np.floating]:
        """Sample L-moments of each replicate sample, shape (B, 4)."""
        return self._sample_statistics(linear_moments)

    def quantiles(self, probabilities: ArrayLike, distributions=None) -> NDArray[np.floating]:
        """Replicate quantiles, shape (B, P)."""
        p, _ = _ensure_probabilities(probabilities)
        return self._by_replicate(lambda d: d.inv_cdf(p), p.size, distributions)

    def probabilities(self, quantiles: ArrayLike, distributions=None) -> NDArray[np.floating]:
        """Replicate non-exceedance probabilities, shape (B, Q)."""
        x = _ensure_vector(quantiles)
        return self._by_replicate(lambda d: d.cdf(x), x.size, distributions)

    def quantile_distribution(self, probabilities: ArrayLike) -> BootstrapDistribution:
        """Replicate quantiles over the valid replicates as a :class:`BootstrapDistribution`."""
        Q = self.quantiles(probabilities)
        valid = Q[np.all(np.isfinite(Q), axis=1)]
        return BootstrapDistribution(valid, rng=np.random.default_rng(self.settings.seed))

    def expected_probabilities(self, quantiles: ArrayLike, distributions=None) -> NDArray[np.floating]:
        """Mean replicate CDF at each of the sorted `quantiles`."""
        x = np.sort(_ensure_vector(quantiles))
        P = self.probabilities(x, distributions)
        valid = P[np.all(np.isfinite(P), axis=1)]
        if valid.shape[0] == 0:
            return np.full(x.size, np.nan)
        return valid.mean(axis=0)

    def compute_min_max_quantiles(self, min_probability: float, max_probability: float,
                                  distributions=None) -> Tuple[float, float]:
        """Smallest replicate quantile at `min_probability` and largest at `max_probability`."""
        Q = self.quantiles([min_probability, max_probability], distributions)
        lows = Q[:, 0][np.isfinite(Q[:, 0])]
        highs = Q[:, 1][np.isfinite(Q[:, 1])]
        if lows.size == 0 or highs.size == 0:
            raise EstimationError("no bootstrap replicate gives finite quantiles.")
        return float(lows.min()), float(highs.max())

    # ------------------------ confidence intervals ------------------------

    def _alpha(self, alpha: Optional[float]) -> float:
        return self.settings.alpha if alpha is None else float(alpha)

    def _parent_quantiles(self, probabilities: NDArray) -> NDArray[np.floating]:
        return np.asarray(self.distribution.inv_cdf(probabilities), dtype=float).reshape(-1)

    def percentile_quantile_ci(self, probabilities: ArrayLike, alpha: Optional[float] = None,
                               distributions=None) -> NDArray[np.floating]:
        """Percentile interval of the replicate quantiles, shape (P, 2)."""
        return intervals.percentile_interval(self.quantiles(probabilities, distributions), self._alpha(alpha))

    def normal_quantile_ci(self, probabilities: ArrayLike, alpha: Optional[float] = None,
                           distributions=None) -> NDArray[np.floating]:
        """Normal interval on the cube-root scale, shape (P, 2)."""
        p, _ = _ensure_probabilities(probabilities)
        return intervals.normal_interval(self._parent_quantiles(p), self.quantiles(p, distributions),
                                         self._alpha(alpha))

    def bias_corrected_quantile_ci(self, probabilities: ArrayLike, alpha: Optional[float] = None,
                                   distributions=None) -> NDArray[np.floating]:
        """Bias-corrected percentile interval, shape (P, 2)."""
        p, _ = _ensure_probabilities(probabilities)
        return intervals.bias_corrected_interval(self._parent_quantiles(p), self.quantiles(p, distributions),
                                                 self._alpha(alpha))

    def _jackknife_quantiles(self, sample: NDArray, probabilities: NDArray,
                             transform: Callable[[NDArray], NDArray] = np.asarray) -> NDArray[np.floating]:
        """Leave-one-out refits of the parent; NaN rows where the refit fails."""
        def statistic(subsample):
            d = self.distribution.clone()
            try:
                d.estimate(subsample, self.estimation_method)
            except EstimationError:
                return np.full(probabilities.size, np.nan)
            return transform(np.asarray(d.inv_cdf(probabilities), dtype=float))
        return jackknife(sample, statistic)

    def bca_quantile_ci(self, probabilities: ArrayLike, alpha: Optional[float] = None,
                        sample: Optional[ArrayLike] = None) -> NDArray[np.floating]:
        """Bias-corrected and accelerated interval, shape (P, 2).

        The acceleration comes from the jackknife of the parent fit on the
        observed sample. Passing `sample` refits the parent to it, resets the
        replicate size to its length and discards cached replicates.

        Raises:
            ValueError: If there is no observed sample.
        """
        if sample is not None:
            x = _as_sample(sample)
            self.distribution.estimate(x, self.estimation_method)
            self._sample = x
            self.sample_size = x.size
            self._replicates = None
        if self._sample is None:
            raise ValueError("BCa intervals need the observed sample.")
        p, _ = _ensure_probabilities(probabilities)
        theta = self._parent_quantiles(p)
        a = intervals.acceleration(theta, self._jackknife_quantiles(self._sample, p))
        return intervals.bca_interval(theta, self.quantiles(p), a, self._alpha(alpha))

    def bootstrap_t_quantile_ci(self, probabilities: ArrayLike,
                                alpha: Optional[float] = None) -> NDArray[np.floating]:
        """Bootstrap-t interval on the cube-root scale, shape (P, 2).

        Each replicate's standard error is the jackknife standard error of
        its cube-rooted quantiles, refitting on its own sample. This costs
        B·n refits.
        """
        p, _ = _ensure_probabilities(probabilities)
        replicates = self._run()

        def standard_error(item):
            d, x = item
            if d is None:
                return np.full(p.size, np.nan)
            theta = np.cbrt(np.asarray(d.inv_cdf(p), dtype=float))
            J = self._jackknife_quantiles(x, p, np.cbrt)
            n = np.count_nonzero(np.all(np.isfinite(J), axis=1))
            if n < 2:
                return np.full(p.size, np.nan)
            return np.sqrt((n - 1.0) / n * np.nansum((theta - J) ** 2, axis=0))

        S = np.array(self._map(standard_error, replicates), dtype=float).reshape(-1, p.size)
        return intervals.bootstrap_t_interval(self._parent_quantiles(p), self.quantiles(p), S,
                                              self._alpha(alpha))

    # ------------------------------ summary ------------------------------

    def _mean_curve(self, probabilities: NDArray, distributions) -> NDArray[np.floating]:
        """Expected-probability quantiles, interpolated in (z, log x) space.

        The replicate CDFs are averaged on a log-spaced quantile grid; the
        grid is shifted to positive values first when it reaches zero.
        """
        lo, hi = self.compute_min_max_quantiles(*_MEAN_CURVE_RANGE, distributions)
        shift = abs(lo) + 1.0 if lo <= 0.0 else 0.0
        log_lo, log_hi = np.log10(lo + shift), np.log10(hi + shift)
        order = int(np.floor(log_hi - log_lo))
        bins = max(200, min(1000, 100 * order))
        grid = 10.0 ** np.linspace(log_lo, log_hi, bins) - shift
        expected = self.expected_probabilities(grid, distributions)
        keep = np.concatenate([[True], np.diff(np.maximum.accumulate(expected)) > 0.0])
        z = standard_z(expected[keep])
        y = np.log10(grid[keep] + shift)
        return 10.0 ** np.interp(standard_z(probabilities), z, y) - shift

    def estimate(
        self,
        probabilities: ArrayLike,
        alpha: Optional[float] = None,
        interval: IntervalMethod | str = IntervalMethod.PERCENTILE,
        *,
        distributions: Optional[Sequence[Optional[UnivariateDistribution]]] = None,
        record_parameter_sets: bool = True,
    ) -> UncertaintyAnalysisResults:
        """Mode curve, mean curve and confidence intervals at `probabilities`.

        Args:
            probabilities: Non-exceedance probabilities.
            alpha: Significance level; defaults to ``settings.alpha``.
            interval: Confidence-interval method.
            distributions: Replicates to summarise instead of the bootstrap,
                e.g. from :meth:`distributions_from_parameters`. Only the
                percentile, normal and bias-corrected intervals use them.
            record_parameter_sets: Keep the replicate parameters in the result.
        """
        p, _ = _ensure_probabilities(probabilities)
        alpha = self._alpha(alpha)
        interval = IntervalMethod(interval)
        distributions = self.distributions() if distributions is None else list(distributions)
        if interval is IntervalMethod.PERCENTILE:
            ci = self.percentile_quantile_ci(p, alpha, distributions)
        elif interval is IntervalMethod.NORMAL:
            ci = self.normal_quantile_ci(p, alpha, distributions)
        elif interval is IntervalMethod.BIAS_CORRECTED:
            ci = self.bias_corrected_quantile_ci(p, alpha, distributions)
        elif interval is IntervalMethod.BCA:
            ci = self.bca_quantile_ci(p, alpha)
        else:
            ci = self.bootstrap_t_quantile_ci(p, alpha)
        return UncertaintyAnalysisResults(
            parent_distribution=self.distribution.clone(),
            probabilities=p.copy(),
            mode_curve=self._parent_quantiles(p),
            mean_curve=self._mean_curve(p, distributions),
            confidence_intervals=ci,
            alpha=alpha,
            parameter_sets=self.parameters(distributions) if record_parameter_sets else None,
        )

    def __repr__(self) -> str:
        kind = "parametric" if self.parametric else "nonparametric"
        return (f"BootstrapAnalysis({self.distribution!r}, {self.estimation_method.value!r}, "
                f"sample_size={self.sample_size}, replications={self.replications}, {kind})")
