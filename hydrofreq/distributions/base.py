"""Univariate distribution contract shared by every family and composite.

A distribution owns an ordered parameter vector. Setting it re-evaluates
``parameters_valid``; invalid parameters never raise from the constructor,
instead every derived quantity (moments, PDF, CDF, quantiles) comes back as
NaN. Evaluation methods accept scalars or arrays and return a ``float`` for
scalar input and an ``ndarray`` otherwise.

Subclasses supply the family-specific pieces through a small set of hooks:

- ``_scipy_distribution()``: a frozen :mod:`scipy.stats` object backing the
  PDF, CDF, quantile function, support and moments, when one exists.
- ``_pdf`` / ``_cdf`` / ``_ppf`` and friends: closed forms that replace or
  complement the scipy backing.
- ``validate_parameters``: the family domain.
- ``parameters_from_moments`` / ``parameters_from_linear_moments`` and the
  optional ``_mle`` override: the estimation bijections.
- ``quantile_gradient`` / ``_closed_form_covariance``: the delta method.
"""
from __future__ import annotations

import copy
import logging
from abc import ABC
from enum import Enum
from typing import Any, List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .._utils import _clip_unit_interval, _symmetrize_spd
from ..array_backend.utils import (
    _as_float_array,
    _as_sample,
    _ensure_probabilities,
    _ensure_vector,
    _restore,
)
from ..config import DEFAULT_INTEGRATION, DEFAULT_SOLVER
from ..custom_types import ArrayLike, FloatOrArray
from ..exceptions import ConvergenceError, EstimationError
from ..numerics import differentiation
from ..numerics.integration import integrate, unit_gauss_legendre
from ..numerics.optimization import maximize, maximize_scalar
from ..numerics.root_finding import solve_bracketed
from ..statistics.moments import linear_moments, product_moments

__all__ = [
    "EstimationMethod",
    "DistributionType",
    "UnivariateDistribution",
    "parameter",
]

log = logging.getLogger(__name__)

_EPS = np.finfo(float).eps


class EstimationMethod(str, Enum):
    """Parameter estimation methods."""

    METHOD_OF_MOMENTS = "method_of_moments"
    METHOD_OF_LINEAR_MOMENTS = "method_of_linear_moments"
    MAXIMUM_LIKELIHOOD = "maximum_likelihood"
    METHOD_OF_PERCENTILES = "method_of_percentiles"


class DistributionType(str, Enum):
    """Closed set of distribution families."""

    BERNOULLI = "Bernoulli"
    BETA = "Beta"
    BINOMIAL = "Binomial"
    CAUCHY = "Cauchy"
    CHI_SQUARED = "ChiSquared"
    COMPETING_RISKS = "CompetingRisks"
    DETERMINISTIC = "Deterministic"
    EMPIRICAL = "Empirical"
    EXPONENTIAL = "Exponential"
    GAMMA = "GammaDistribution"
    GENERALIZED_BETA = "GeneralizedBeta"
    GENERALIZED_EXTREME_VALUE = "GeneralizedExtremeValue"
    GENERALIZED_LOGISTIC = "GeneralizedLogistic"
    GENERALIZED_NORMAL = "GeneralizedNormal"
    GENERALIZED_PARETO = "GeneralizedPareto"
    GEOMETRIC = "Geometric"
    GUMBEL = "Gumbel"
    INVERSE_CHI_SQUARED = "InverseChiSquared"
    INVERSE_GAMMA = "InverseGamma"
    KAPPA_FOUR = "KappaFour"
    KERNEL_DENSITY = "KernelDensity"
    LN_NORMAL = "LnNormal"
    LOGISTIC = "Logistic"
    LOG_NORMAL = "LogNormal"
    LOG_PEARSON_TYPE_III = "LogPearsonTypeIII"
    MIXTURE = "Mixture"
    NONCENTRAL_T = "NoncentralT"
    NORMAL = "Normal"
    PARETO = "Pareto"
    PEARSON_TYPE_III = "PearsonTypeIII"
    PERT = "Pert"
    PERT_PERCENTILE = "PertPercentile"
    PERT_PERCENTILE_Z = "PertPercentileZ"
    POISSON = "Poisson"
    RAYLEIGH = "Rayleigh"
    STUDENT_T = "StudentT"
    TRIANGULAR = "Triangular"
    TRUNCATED_NORMAL = "TruncatedNormal"
    UNIFORM = "Uniform"
    UNIFORM_DISCRETE = "UniformDiscrete"
    WEIBULL = "Weibull"


def parameter(index: int, doc: str | None = None) -> property:
    """Named read/write view onto one entry of the parameter vector.

    Assigning through the property goes through ``set_parameters`` so the
    validity flag and caches stay in step.
    """

    def fget(self) -> float:
        return float(self._params[index])

    def fset(self, value: float) -> None:
        values = self._params.copy()
        values[index] = value
        self.set_parameters(values)

    return property(fget, fset, doc=doc)


class UnivariateDistribution(ABC):
    """Base class of all univariate distributions.

    Class attributes set by each family:
        distribution_type: Family tag.
        display_name: Human readable name, e.g. ``"Pearson Type III"``.
        short_display_name: Abbreviation, e.g. ``"PIII"``.
        parameter_names: Labels with conventional symbols, e.g. ``"Scale (α)"``.
        parameter_symbols: The symbols alone.
        is_discrete: Whether `density` is a probability mass function.
        supported_methods: Estimation methods accepted by `estimate`.
    """

    distribution_type: DistributionType
    display_name: str = ""
    short_display_name: str = ""
    parameter_names: Tuple[str, ...] = ()
    parameter_symbols: Tuple[str, ...] = ()
    is_discrete: bool = False
    supported_methods: frozenset = frozenset({EstimationMethod.MAXIMUM_LIKELIHOOD})

    # Indices of parameters that must be strictly positive; used for MLE bounds.
    _positive_parameters: Tuple[int, ...] = ()

    def __init__(self, parameters: ArrayLike):
        self._params = np.empty(0)
        self._invalid_reason: str | None = None
        self._cache: dict = {}
        self.set_parameters(parameters)

    # ----------------------------- parameters -----------------------------

    @property
    def number_of_parameters(self) -> int:
        return len(self.parameter_names)

    @property
    def parameters(self) -> NDArray[np.floating]:
        """Copy of the parameter vector."""
        return self._params.copy()

    @property
    def parameters_valid(self) -> bool:
        return self._invalid_reason is None

    @property
    def invalid_reason(self) -> str | None:
        """Why the current parameters are invalid, or None when they are valid."""
        return self._invalid_reason

    def set_parameters(self, values: ArrayLike) -> None:
        """Assign the parameter vector in place and re-evaluate validity.

        Raises:
            ValueError: If the number of values does not match the family.
        """
        v = _ensure_vector(values)
        if v.size != self.number_of_parameters:
            raise ValueError(
                f"{type(self).__name__} takes {self.number_of_parameters} parameters; got {v.size}."
            )
        self._assign(v)
        self._invalid_reason = self.validate_parameters(self._params)
        self._cache.clear()

    def _assign(self, values: NDArray) -> None:
        self._params = np.asarray(values, dtype=float).copy()

    def validate_parameters(self, values: ArrayLike) -> str | None:
        """Return the reason `values` are outside the family domain, or None.

        The base check only requires every value to be finite; families extend
        it with their own constraints.
        """
        v = np.asarray(values, dtype=float)
        if not np.all(np.isfinite(v)):
            return "parameters must be finite numbers."
        return None

    # -------------------------- scipy backing --------------------------

    def _scipy_distribution(self):
        """Frozen scipy.stats distribution for the current parameters, or None."""
        return None

    def _frozen(self):
        if "frozen" not in self._cache:
            self._cache["frozen"] = self._scipy_distribution() if self.parameters_valid else None
        return self._cache["frozen"]

    # ------------------------------ support ------------------------------

    @property
    def minimum(self) -> float:
        if not self.parameters_valid:
            return np.nan
        return float(self._support()[0])

    @property
    def maximum(self) -> float:
        if not self.parameters_valid:
            return np.nan
        return float(self._support()[1])

    def _support(self) -> Tuple[float, float]:
        frozen = self._frozen()
        if frozen is not None:
            lo, hi = frozen.support()
            return float(lo), float(hi)
        return -np.inf, np.inf

    # --------------------------- private hooks ---------------------------

    def _pdf(self, x: NDArray) -> NDArray:
        frozen = self._frozen()
        if frozen is None:
            raise NotImplementedError(f"{type(self).__name__} must implement _pdf.")
        return frozen.pmf(x) if self.is_discrete else frozen.pdf(x)

    def _logpdf(self, x: NDArray) -> NDArray:
        frozen = self._frozen()
        if frozen is None:
            with np.errstate(divide="ignore"):
                return np.log(self._pdf(x))
        return frozen.logpmf(x) if self.is_discrete else frozen.logpdf(x)

    def _cdf(self, x: NDArray) -> NDArray:
        frozen = self._frozen()
        if frozen is None:
            raise NotImplementedError(f"{type(self).__name__} must implement _cdf.")
        return frozen.cdf(x)

    def _sf(self, x: NDArray) -> NDArray:
        frozen = self._frozen()
        if frozen is None:
            return 1.0 - self._cdf(x)
        return frozen.sf(x)

    def _ppf(self, p: NDArray) -> NDArray:
        frozen = self._frozen()
        if frozen is None:
            return self._numeric_ppf(p)
        return frozen.ppf(p)

    def _numeric_ppf(self, p: NDArray) -> NDArray:
        """Invert the CDF by bracketed root finding.

        The bracket starts at `_quantile_guess` and is expanded outward, never
        past the support, until ``cdf(x) - p`` changes sign; Brent's method
        then polishes the root.
        """
        lo_support, hi_support = self._support()
        out = np.empty(p.shape)
        for i, pi in enumerate(p.flat):
            guess_lo, guess_hi = self._quantile_guess(pi)

            def f(x, target=pi):
                return float(np.asarray(self._cdf(np.array([x]))).reshape(-1)[0]) - target

            out.flat[i] = solve_bracketed(f, guess_lo, guess_hi, DEFAULT_SOLVER,
                                          minimum=lo_support, maximum=hi_support)
        return out

    def _quantile_guess(self, p: float) -> Tuple[float, float]:
        lo, hi = self._support()
        if np.isfinite(lo) and np.isfinite(hi):
            return lo, hi
        if np.isfinite(lo):
            return lo, lo + 1.0
        if np.isfinite(hi):
            return hi - 1.0, hi
        return -1.0, 1.0

    # ----------------------------- evaluation -----------------------------

    def density(self, x: ArrayLike) -> FloatOrArray:
        """Probability density (or mass) at `x`; 0 outside the support."""
        values, scalar = _as_float_array(x)
        if not self.parameters_valid:
            return _restore(np.full(values.shape, np.nan), scalar)
        lo, hi = self._support()
        out = np.zeros(values.shape)
        inside = (values >= lo) & (values <= hi)
        if np.any(inside):
            with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
                out[inside] = self._pdf(values[inside])
        out = np.where(np.isnan(out), 0.0, np.maximum(out, 0.0))
        out[np.isnan(values)] = np.nan
        return _restore(out, scalar)

    def log_density(self, x: ArrayLike) -> FloatOrArray:
        """Natural log of `density`; -inf outside the support."""
        values, scalar = _as_float_array(x)
        if not self.parameters_valid:
            return _restore(np.full(values.shape, np.nan), scalar)
        lo, hi = self._support()
        out = np.full(values.shape, -np.inf)
        inside = (values >= lo) & (values <= hi)
        if np.any(inside):
            with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
                out[inside] = self._logpdf(values[inside])
        out = np.where(np.isnan(out), -np.inf, out)
        out[np.isnan(values)] = np.nan
        return _restore(out, scalar)

    def cdf(self, x: ArrayLike) -> FloatOrArray:
        """Non-exceedance probability P(X ≤ x), clipped to [0, 1]."""
        values, scalar = _as_float_array(x)
        if not self.parameters_valid:
            return _restore(np.full(values.shape, np.nan), scalar)
        lo, hi = self._support()
        out = np.where(values >= hi, 1.0, 0.0)
        inside = (values >= lo) & (values < hi)
        if np.any(inside):
            with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
                out[inside] = self._cdf(values[inside])
        out = _clip_unit_interval(out)
        out[np.isnan(values)] = np.nan
        return _restore(out, scalar)

    def ccdf(self, x: ArrayLike) -> FloatOrArray:
        """Exceedance probability P(X > x)."""
        values, scalar = _as_float_array(x)
        if not self.parameters_valid:
            return _restore(np.full(values.shape, np.nan), scalar)
        lo, hi = self._support()
        out = np.where(values < lo, 1.0, 0.0)
        inside = (values >= lo) & (values < hi)
        if np.any(inside):
            with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
                out[inside] = self._sf(values[inside])
        out = _clip_unit_interval(out)
        out[np.isnan(values)] = np.nan
        return _restore(out, scalar)

    def log_cdf(self, x: ArrayLike) -> FloatOrArray:
        values, scalar = _as_float_array(x)
        with np.errstate(divide="ignore"):
            return _restore(np.log(np.asarray(self.cdf(values), dtype=float)), scalar)

    def log_ccdf(self, x: ArrayLike) -> FloatOrArray:
        values, scalar = _as_float_array(x)
        with np.errstate(divide="ignore"):
            return _restore(np.log(np.asarray(self.ccdf(values), dtype=float)), scalar)

    def hazard(self, x: ArrayLike) -> FloatOrArray:
        """Hazard rate f(x) / (1 - F(x))."""
        values, scalar = _as_float_array(x)
        with np.errstate(divide="ignore", invalid="ignore"):
            h = np.asarray(self.density(values), dtype=float) / np.asarray(self.ccdf(values), dtype=float)
        return _restore(h, scalar)

    def inv_cdf(self, p: ArrayLike) -> FloatOrArray:
        """Quantile function.

        Returns `minimum` and `maximum` exactly at p = 0 and p = 1.

        Raises:
            ValueError: If any probability is NaN or outside [0, 1].
        """
        values, scalar = _ensure_probabilities(p)
        if not self.parameters_valid:
            return _restore(np.full(values.shape, np.nan), scalar)
        lo, hi = self._support()
        out = np.where(values <= 0.0, lo, hi).astype(float)
        inside = (values > 0.0) & (values < 1.0)
        if np.any(inside):
            with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
                q = np.asarray(self._ppf(values[inside]), dtype=float)
            out[inside] = np.clip(q, lo, hi)
        return _restore(out, scalar)

    # ------------------------------ moments ------------------------------

    def central_moments(self) -> NDArray[np.floating]:
        """``[mean, standard deviation, skewness, kurtosis]`` of the distribution.

        Taken from the scipy backing when there is one, otherwise by
        numerical integration over the support between the tail quantiles of
        ``DEFAULT_INTEGRATION.tail_probability``. The kurtosis is non-excess.
        """
        if not self.parameters_valid:
            return np.full(4, np.nan)
        if "moments" not in self._cache:
            frozen = self._frozen()
            if frozen is not None:
                with np.errstate(all="ignore"):
                    m, v, s, k = (float(t) for t in frozen.stats(moments="mvsk"))
                self._cache["moments"] = np.array([m, np.sqrt(v) if v >= 0 else np.nan, s, k + 3.0])
            else:
                self._cache["moments"] = self._numerical_moments()
        return self._cache["moments"].copy()

    def _integration_points(self) -> List[float]:
        """Interior break points that help quadrature of the density."""
        return []

    def _numerical_moments(self) -> NDArray[np.floating]:
        tail = DEFAULT_INTEGRATION.tail_probability
        lo = float(self.inv_cdf(tail))
        hi = float(self.inv_cdf(1.0 - tail))
        points = self._integration_points()

        def raw(k, center=0.0):
            return integrate(lambda x: (x - center) ** k * float(self.density(x)), lo, hi,
                             DEFAULT_INTEGRATION, points)

        mass = raw(0)
        mean = raw(1) / mass
        m2 = raw(2, mean) / mass
        m3 = raw(3, mean) / mass
        m4 = raw(4, mean) / mass
        sd = np.sqrt(m2)
        return np.array([mean, sd, m3 / sd ** 3, m4 / m2 ** 2])

    def _mean(self) -> float:
        return float(self.central_moments()[0])

    def _median(self) -> float:
        return float(self.inv_cdf(0.5))

    def _mode(self) -> float:
        lo = float(self.inv_cdf(1e-6))
        hi = float(self.inv_cdf(1.0 - 1e-6))
        return maximize_scalar(lambda x: float(self.density(x)), lo, hi)

    def _standard_deviation(self) -> float:
        return float(self.central_moments()[1])

    def _skewness(self) -> float:
        return float(self.central_moments()[2])

    def _kurtosis(self) -> float:
        return float(self.central_moments()[3])

    def mean(self) -> float:
        return self._mean() if self.parameters_valid else np.nan

    def median(self) -> float:
        return self._median() if self.parameters_valid else np.nan

    def mode(self) -> float:
        return self._mode() if self.parameters_valid else np.nan

    def standard_deviation(self) -> float:
        return self._standard_deviation() if self.parameters_valid else np.nan

    def variance(self) -> float:
        return self.standard_deviation() ** 2

    def skewness(self) -> float:
        return self._skewness() if self.parameters_valid else np.nan

    def kurtosis(self) -> float:
        """Non-excess kurtosis; 3 for a normal distribution."""
        return self._kurtosis() if self.parameters_valid else np.nan

    def coefficient_of_variation(self) -> float:
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.float64(self.standard_deviation()) / np.float64(self.mean()))

    def conditional_expected_value(self, alpha: float) -> float:
        """E[X | X > Q(alpha)], the mean of the upper tail beyond the alpha quantile."""
        if not 0.0 <= alpha < 1.0:
            raise ValueError("alpha must be in [0, 1).")
        if not self.parameters_valid:
            return np.nan
        tail = integrate(lambda u: float(self.inv_cdf(u)), alpha, 1.0, DEFAULT_INTEGRATION)
        return tail / (1.0 - alpha)

    # ---------------------------- moment views ----------------------------

    def moments_from_parameters(self, values: ArrayLike) -> NDArray[np.floating]:
        """``[mean, sd, skew, kurtosis]`` implied by a parameter vector."""
        trial = self.clone()
        trial.set_parameters(values)
        return np.array([trial.mean(), trial.standard_deviation(), trial.skewness(), trial.kurtosis()])

    def parameters_from_moments(self, moments: ArrayLike) -> NDArray[np.floating]:
        raise NotImplementedError(f"{self.display_name} has no method of moments solution.")

    def parameters_from_linear_moments(self, moments: ArrayLike) -> NDArray[np.floating]:
        raise NotImplementedError(f"{self.display_name} has no L-moment solution.")

    def linear_moments_from_parameters(self, values: ArrayLike) -> NDArray[np.floating]:
        """``[λ1, λ2, τ3, τ4]`` implied by a parameter vector.

        The base version integrates Q(u) against the shifted Legendre
        polynomials P*_0 … P*_3 over (0, 1).
        """
        trial = self.clone()
        trial.set_parameters(values)
        if not trial.parameters_valid:
            return np.full(4, np.nan)
        shifted_legendre = (
            lambda u: 1.0,
            lambda u: 2.0 * u - 1.0,
            lambda u: 6.0 * u * u - 6.0 * u + 1.0,
            lambda u: 20.0 * u ** 3 - 30.0 * u ** 2 + 12.0 * u - 1.0,
        )
        lam = [
            integrate(lambda u, P=P: float(trial.inv_cdf(u)) * P(u), 0.0, 1.0, DEFAULT_INTEGRATION)
            for P in shifted_legendre
        ]
        return np.array([lam[0], lam[1], lam[2] / lam[1], lam[3] / lam[1]])

    # ----------------------------- estimation -----------------------------

    def estimate(self, sample: ArrayLike, method: EstimationMethod | str) -> "UnivariateDistribution":
        """Fit the parameters to `sample` in place.

        Args:
            sample: Observations; at least two finite values with some spread.
            method: One of `supported_methods`.

        Returns:
            The distribution itself, to allow chaining.

        Raises:
            NotImplementedError: If the family does not support `method`.
            EstimationError: If the sample is degenerate or no valid parameter
                set can be found.
        """
        method = EstimationMethod(method)
        if method not in self.supported_methods:
            raise NotImplementedError(f"{self.display_name} does not support {method.value}.")
        try:
            x = _as_sample(sample)
        except ValueError as err:
            raise EstimationError(str(err)) from err
        if np.ptp(x) == 0.0:
            raise EstimationError("sample has no variation.")
        try:
            values = np.asarray(self._fit(x, method), dtype=float)
        except (ConvergenceError, ValueError, ZeroDivisionError) as err:
            raise EstimationError(f"{self.display_name} {method.value} fit failed: {err}") from err
        reason = self.validate_parameters(values)
        if reason is not None:
            raise EstimationError(f"{self.display_name} {method.value} fit is invalid: {reason}")
        self.set_parameters(values)
        log.debug("%s fitted by %s: %s", self.display_name, method.value, values)
        return self

    def _fit(self, sample: NDArray, method: EstimationMethod) -> NDArray:
        if method is EstimationMethod.METHOD_OF_MOMENTS:
            return self.parameters_from_moments(product_moments(sample))
        if method is EstimationMethod.METHOD_OF_LINEAR_MOMENTS:
            return self.parameters_from_linear_moments(linear_moments(sample))
        if method is EstimationMethod.MAXIMUM_LIKELIHOOD:
            return self._mle(sample)
        return self._fit_percentiles(sample)

    def _fit_percentiles(self, sample: NDArray) -> NDArray:
        raise NotImplementedError(f"{self.display_name} has no method of percentiles solution.")

    def _initial_parameters(self, sample: NDArray) -> NDArray:
        """Starting point for maximum likelihood: a cheap closed-form fit."""
        for method in (EstimationMethod.METHOD_OF_LINEAR_MOMENTS, EstimationMethod.METHOD_OF_MOMENTS):
            if method not in self.supported_methods:
                continue
            try:
                values = np.asarray(self._fit(sample, method), dtype=float)
            except (ConvergenceError, ValueError, NotImplementedError, ZeroDivisionError):
                continue
            if self.validate_parameters(values) is None:
                return values
        return self._params.copy()

    def parameter_constraints(self, sample: ArrayLike) -> Tuple[NDArray, NDArray, NDArray]:
        """``(initial, lower, upper)`` parameter vectors for maximum likelihood.

        Each bound sits one order of magnitude beyond the initial value; the
        parameters listed in ``_positive_parameters`` are bounded below by
        machine epsilon.
        """
        x = _as_sample(sample)
        initial = self._initial_parameters(x)
        magnitude = np.maximum(np.abs(initial), _EPS)
        width = 10.0 ** np.ceil(np.log10(magnitude) + 1.0)
        lower = initial - width
        upper = initial + width
        for i in self._positive_parameters:
            lower[i] = _EPS
        initial = np.clip(initial, lower, upper)
        return initial, lower, upper

    def _mle(self, sample: NDArray) -> NDArray:
        initial, lower, upper = self.parameter_constraints(sample)
        trial = self.clone()

        def log_likelihood(values):
            trial.set_parameters(values)
            return trial.log_likelihood(sample)

        return maximize(log_likelihood, initial, lower, upper).values

    # ----------------------------- likelihood -----------------------------

    def log_likelihood(self, sample: ArrayLike) -> float:
        """Sum of log densities; -inf when any term is not finite."""
        if not self.parameters_valid:
            return -np.inf
        x = _ensure_vector(sample)
        total = float(np.sum(np.asarray(self.log_density(x), dtype=float)))
        return total if np.isfinite(total) else -np.inf

    def log_likelihood_left_censored(self, sample: ArrayLike, threshold: float) -> float:
        """Log-likelihood with observations at or below `threshold` known only to be ≤ it."""
        if not self.parameters_valid:
            return -np.inf
        x = _ensure_vector(sample)
        censored = x <= threshold
        total = float(np.sum(np.asarray(self.log_density(x[~censored]), dtype=float)))
        total += int(censored.sum()) * float(self.log_cdf(threshold))
        return total if np.isfinite(total) else -np.inf

    def log_likelihood_right_censored(self, sample: ArrayLike, threshold: float) -> float:
        """Log-likelihood with observations at or above `threshold` known only to be ≥ it."""
        if not self.parameters_valid:
            return -np.inf
        x = _ensure_vector(sample)
        censored = x >= threshold
        total = float(np.sum(np.asarray(self.log_density(x[~censored]), dtype=float)))
        total += int(censored.sum()) * float(self.log_ccdf(threshold))
        return total if np.isfinite(total) else -np.inf

    def log_likelihood_intervals(self, intervals: ArrayLike) -> float:
        """Log-likelihood of interval-censored data given as rows ``(lower, upper)``."""
        if not self.parameters_valid:
            return -np.inf
        bounds = np.asarray(intervals, dtype=float).reshape(-1, 2)
        mass = np.asarray(self.cdf(bounds[:, 1]), dtype=float) - np.asarray(self.cdf(bounds[:, 0]), dtype=float)
        with np.errstate(divide="ignore", invalid="ignore"):
            total = float(np.sum(np.log(mass)))
        return total if np.isfinite(total) else -np.inf

    # ---------------------------- delta method ----------------------------

    def quantile_gradient(self, probability: float) -> NDArray[np.floating]:
        """∂Q(p)/∂θ for each parameter θ. Families override with closed forms."""
        return self.numerical_quantile_gradient(probability)

    def numerical_quantile_gradient(self, probability: float) -> NDArray[np.floating]:
        """Central finite-difference gradient of the quantile with respect to the parameters."""
        trial = self.clone()

        def quantile(values):
            trial.set_parameters(values)
            return float(trial.inv_cdf(probability))

        return differentiation.gradient(quantile, self._params.copy())

    def _closed_form_covariance(self, sample_size: int, method: EstimationMethod) -> NDArray | None:
        return None

    def parameter_covariance(self, sample_size: int, method: EstimationMethod | str) -> NDArray[np.floating]:
        """Asymptotic covariance matrix of the estimated parameters.

        Published closed forms are used where the family has one. Otherwise
        maximum likelihood falls back to the inverse expected Fisher
        information.

        Raises:
            NotImplementedError: For other methods without a closed form.
        """
        method = EstimationMethod(method)
        if sample_size < 1:
            raise ValueError("sample_size must be positive.")
        cov = self._closed_form_covariance(int(sample_size), method)
        if cov is not None:
            return np.asarray(cov, dtype=float)
        if method is EstimationMethod.MAXIMUM_LIKELIHOOD:
            info = self.expected_information(sample_size)
            return np.linalg.inv(_symmetrize_spd(info))
        raise NotImplementedError(
            f"{self.display_name} has no parameter covariance for {method.value}."
        )

    def expected_information(self, sample_size: int = 1) -> NDArray[np.floating]:
        """Expected Fisher information of `sample_size` observations.

        E[s sᵀ] with s the score vector is evaluated on Gauss–Legendre nodes
        in probability space, x = Q(u), so the quadrature adapts to the
        scale of the distribution.
        """
        u, w = unit_gauss_legendre(DEFAULT_INTEGRATION.quadrature_nodes)
        x = np.asarray(self.inv_cdf(u), dtype=float)
        trial = self.clone()

        def log_density(values):
            trial.set_parameters(values)
            return np.asarray(trial.log_density(x), dtype=float)

        scores = differentiation.jacobian(log_density, self._params.copy())  # (nodes, k)
        scores = np.where(np.isfinite(scores), scores, 0.0)
        return sample_size * (scores.T * w) @ scores

    def observed_information(self, sample: ArrayLike) -> NDArray[np.floating]:
        """Negative Hessian of the log-likelihood at the current parameters."""
        x = _ensure_vector(sample)
        trial = self.clone()

        def log_likelihood(values):
            trial.set_parameters(values)
            return trial.log_likelihood(x)

        return -differentiation.hessian(log_likelihood, self._params.copy())

    def quantile_variance(self, probability: float, sample_size: int,
                          method: EstimationMethod | str) -> float:
        """Delta-method variance ∇Qᵀ · Cov(θ̂) · ∇Q of the p-quantile."""
        method = EstimationMethod(method)
        g = np.asarray(self.quantile_gradient(probability), dtype=float)
        cov = self.parameter_covariance(sample_size, method)
        return float(g @ cov @ g)

    def quantile_standard_error(self, probability: float, sample_size: int,
                                method: EstimationMethod | str) -> float:
        return float(np.sqrt(self.quantile_variance(probability, sample_size, method)))

    def quantile_jacobian(self, probabilities: Sequence[float]) -> Tuple[NDArray[np.floating], float]:
        """Jacobian of quantiles with respect to parameters and its determinant.

        Row i is the quantile gradient at ``probabilities[i]``; one
        probability is needed per parameter.
        """
        if len(probabilities) != self.number_of_parameters:
            raise ValueError(
                "The number of probabilities must be the same length as the number of distribution parameters."
            )
        J = np.vstack([self.quantile_gradient(p) for p in probabilities])
        return J, float(np.linalg.det(J))

    # ---------------------------- random values ----------------------------

    def sample(self, n_samples: int, *, seed: int | None = None,
               rng: np.random.Generator | None = None) -> NDArray[np.floating]:
        """Draw `n_samples` values by inversion sampling.

        Args:
            n_samples: Number of values.
            seed: Seed for a fresh generator; ignored when `rng` is given.
            rng: Generator to draw the uniform stream from.

        Returns:
            Array of shape (n_samples,).
        """
        rng = rng or np.random.default_rng(seed)
        u = _clip_unit_interval(rng.random(int(n_samples)), eps=1e-16)
        return np.asarray(self.inv_cdf(u), dtype=float).reshape(-1)

    # alias
    rvs = sample

    def bootstrap(self, method: EstimationMethod | str, sample_size: int, *,
                  seed: int | None = None, rng: np.random.Generator | None = None) -> "UnivariateDistribution":
        """Refit a copy of this distribution to a sample drawn from it.

        Raises:
            EstimationError: If the refit does not give valid parameters.
        """
        replicate = self.clone()
        values = replicate.sample(sample_size, seed=seed, rng=rng)
        replicate.estimate(values, method)
        return replicate

    # ------------------------------ formatting ------------------------------

    @staticmethod
    def _format_value(value: float, format_spec: str | None) -> str:
        if format_spec is not None:
            return format(float(value), format_spec)
        if not np.isfinite(value):
            return str(float(value))
        return np.format_float_positional(float(value), trim="-")

    def parameters_to_string(self, format_spec: str | None = None) -> List[Tuple[str, str]]:
        """Rows of ``(label, value)``, one per parameter.

        Values use locale-independent shortest round-trip formatting unless an
        explicit `format_spec` (as accepted by :func:`format`) is given.
        """
        return [(label, self._format_value(v, format_spec))
                for label, v in zip(self.parameter_names, self._params)]

    def display_label(self, format_spec: str | None = None) -> str:
        values = ", ".join(value for _, value in self.parameters_to_string(format_spec))
        return f"{self.short_display_name} ({values})"

    # ------------------------------- misc -------------------------------

    def clone(self) -> "UnivariateDistribution":
        """Independent copy with the same parameters."""
        other = copy.copy(self)
        other._params = self._params.copy()
        other._cache = {}
        return other

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return bool(np.array_equal(self.parameters, other.parameters, equal_nan=True))

    __hash__ = None

    def __repr__(self) -> str:
        values = ", ".join(repr(float(v)) for v in self._params)
        return f"{type(self).__name__}({values})"
