"""Finite mixture of univariate distributions."""
from __future__ import annotations

import logging
from typing import Sequence, Tuple

import numpy as np
from numpy.typing import NDArray
from scipy.special import logsumexp, softmax

from ..array_backend.utils import _as_sample
from ..custom_types import ArrayLike
from ..numerics.optimization import maximize
from ..numerics.root_finding import brent
from .base import DistributionType, EstimationMethod, UnivariateDistribution

__all__ = ["Mixture"]

log = logging.getLogger(__name__)

_WEIGHT_TOLERANCE = 1e-10
_LOGIT_BOUND = 20.0


class Mixture(UnivariateDistribution):
    """Weighted mixture f(x) = Σ wᵢ fᵢ(x).

    The parameter vector is the weights followed by the parameters of each
    component in order. Weights are normalised to sum to one on assignment;
    the components are owned by the mixture and updated through it.

    Args:
        weights: One non-negative weight per component.
        distributions: The component distributions. They are copied.

    Raises:
        ValueError: If the weight and distribution sequences differ in length
            or are empty.
    """

    distribution_type = DistributionType.MIXTURE
    display_name = "Mixture"
    short_display_name = "MIX"
    supported_methods = frozenset({EstimationMethod.MAXIMUM_LIKELIHOOD})

    def __init__(self, weights: ArrayLike, distributions: Sequence[UnivariateDistribution]):
        weights = np.asarray(weights, dtype=float).reshape(-1)
        if len(distributions) == 0:
            raise ValueError("a mixture needs at least one component.")
        if weights.size != len(distributions):
            raise ValueError("The weight and distribution arrays must have the same length.")
        self._components = [d.clone() for d in distributions]
        values = np.concatenate([weights] + [d.parameters for d in self._components])
        super().__init__(values)

    # ----------------------------- parameters -----------------------------

    @property
    def parameter_names(self) -> Tuple[str, ...]:
        names = [f"Weight (w{i + 1})" for i in range(len(self._components))]
        for d in self._components:
            names.extend(d.parameter_names)
        return tuple(names)

    @property
    def parameter_symbols(self) -> Tuple[str, ...]:
        symbols = [f"w{i + 1}" for i in range(len(self._components))]
        for d in self._components:
            symbols.extend(d.parameter_symbols)
        return tuple(symbols)

    @property
    def weights(self) -> NDArray[np.floating]:
        return self._params[: len(self._components)].copy()

    @property
    def distributions(self) -> Tuple[UnivariateDistribution, ...]:
        return tuple(self._components)

    def _split(self, values: NDArray) -> Tuple[NDArray, list]:
        k = len(self._components)
        weights = np.asarray(values[:k], dtype=float)
        slices, start = [], k
        for d in self._components:
            slices.append(np.asarray(values[start:start + d.number_of_parameters], dtype=float))
            start += d.number_of_parameters
        return weights, slices

    def _assign(self, values):
        weights, slices = self._split(values)
        total = weights.sum()
        if total != 0.0 and np.isfinite(total):
            weights = weights / total
        for d, v in zip(self._components, slices):
            d.set_parameters(v)
        self._params = np.concatenate([weights] + slices)

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        weights, slices = self._split(np.asarray(values, dtype=float))
        if np.any(weights < 0.0) or np.any(weights > 1.0):
            return "The weights must be between 0 and 1."
        if abs(weights.sum() - 1.0) > _WEIGHT_TOLERANCE:
            return "The weights must sum to 1.0."
        for d, v in zip(self._components, slices):
            if d.validate_parameters(v) is not None:
                return "One of the distributions have invalid parameters."
        return None

    # ----------------------------- evaluation -----------------------------

    def _support(self):
        lows, highs = zip(*(d._support() for d in self._components))
        return min(lows), max(highs)

    def _pdf(self, x):
        return sum(w * np.asarray(d.density(x), dtype=float)
                   for w, d in zip(self.weights, self._components))

    def _logpdf(self, x):
        with np.errstate(divide="ignore"):
            terms = np.array([np.log(w) + np.asarray(d.log_density(x), dtype=float)
                              for w, d in zip(self.weights, self._components)])
        return logsumexp(terms, axis=0)

    def _cdf(self, x):
        return sum(w * np.asarray(d.cdf(x), dtype=float)
                   for w, d in zip(self.weights, self._components))

    def _sf(self, x):
        return sum(w * np.asarray(d.ccdf(x), dtype=float)
                   for w, d in zip(self.weights, self._components))

    def _ppf(self, p):
        """Brent root of F(x) = p between the smallest and largest component quantiles."""
        quantiles = np.array([np.asarray(d.inv_cdf(p), dtype=float).reshape(-1)
                              for d in self._components])
        out = np.empty(p.shape)
        for i, pi in enumerate(p.flat):
            lo, hi = quantiles[:, i].min(), quantiles[:, i].max()
            if lo == hi:
                out.flat[i] = lo
                continue
            out.flat[i] = brent(lambda x, target=pi: float(self.cdf(x)) - target, lo, hi)
        return out

    # ---------------------------- estimation ----------------------------

    def parameter_constraints(self, sample):
        """Bounds for the components fitted to equal slices of the sorted sample.

        Weights are reported at their equal starting value in [0, 1]; the MLE
        itself searches their softmax logits.
        """
        x = np.sort(_as_sample(sample))
        k = len(self._components)
        initial = [np.full(k, 1.0 / k)]
        lower = [np.zeros(k)]
        upper = [np.ones(k)]
        for d, part in zip(self._components, np.array_split(x, k)):
            i, lo, hi = d.parameter_constraints(part)
            initial.append(i)
            lower.append(lo)
            upper.append(hi)
        return np.concatenate(initial), np.concatenate(lower), np.concatenate(upper)

    def _mle(self, sample):
        """Maximize jointly over the weight logits and the component parameters.

        The last logit is pinned at zero so the softmax weights are identified.
        """
        k = len(self._components)
        initial, lower, upper = self.parameter_constraints(sample)
        free_initial = np.concatenate([np.zeros(k - 1), initial[k:]])
        free_lower = np.concatenate([np.full(k - 1, -_LOGIT_BOUND), lower[k:]])
        free_upper = np.concatenate([np.full(k - 1, _LOGIT_BOUND), upper[k:]])
        trial = self.clone()

        def to_parameters(values):
            weights = softmax(np.append(values[: k - 1], 0.0))
            return np.concatenate([weights, values[k - 1:]])

        def log_likelihood(values):
            trial.set_parameters(to_parameters(values))
            return trial.log_likelihood(sample)

        result = maximize(log_likelihood, free_initial, free_lower, free_upper)
        log.debug("mixture MLE objective %g after %d iterations", result.objective, result.iterations)
        return to_parameters(result.values)

    # ---------------------------- random values ----------------------------

    def sample(self, n_samples: int, *, seed: int | None = None,
               rng: np.random.Generator | None = None) -> NDArray[np.floating]:
        """Pick a component by weight for each draw, then invert its CDF."""
        rng = rng or np.random.default_rng(seed)
        n = int(n_samples)
        if not self.parameters_valid:
            return np.full(n, np.nan)
        labels = rng.choice(len(self._components), size=n, p=self.weights)
        out = np.empty(n)
        for i, d in enumerate(self._components):
            chosen = labels == i
            if np.any(chosen):
                out[chosen] = d.sample(int(chosen.sum()), rng=rng)
        return out

    rvs = sample

    # ------------------------------- misc -------------------------------

    def clone(self) -> "Mixture":
        return Mixture(self.weights, self._components)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        if [type(d) for d in self._components] != [type(d) for d in other._components]:
            return False
        return bool(np.array_equal(self.parameters, other.parameters, equal_nan=True))

    __hash__ = None

    def __repr__(self) -> str:
        weights = ", ".join(repr(float(w)) for w in self.weights)
        components = ", ".join(repr(d) for d in self._components)
        return f"Mixture(weights=[{weights}], distributions=[{components}])"
