"""Competing risks: the minimum (or maximum) of several random variables."""
from __future__ import annotations

from enum import Enum
from typing import Sequence, Tuple

import numpy as np
from numpy.typing import NDArray
from scipy.integrate import cumulative_trapezoid

from ..array_backend.utils import _as_sample, _ensure_vector
from ..numerics.differentiation import step_size
from .base import DistributionType, EstimationMethod, UnivariateDistribution

__all__ = ["Dependency", "CompetingRisks"]

# Uniform grid used by the comonotone and countermonotone constructions.
_DEPENDENT_GRID_SIZE = 10000


class Dependency(str, Enum):
    """Dependence between the competing random variables."""

    INDEPENDENT = "independent"
    PERFECTLY_POSITIVE = "perfectly_positive"
    PERFECTLY_NEGATIVE = "perfectly_negative"


class CompetingRisks(UnivariateDistribution):
    """Distribution of min(X₁, …, X_D) or max(X₁, …, X_D).

    The parameter vector is the concatenation of the component parameter
    vectors. The density is analytic under independence and a numerical
    derivative of the CDF otherwise.

    Args:
        distributions: The competing causes. They are copied.
        dependency: Dependence between the causes.
        minimum_of_random_variables: True for the minimum (first failure),
            False for the maximum.
    """

    distribution_type = DistributionType.COMPETING_RISKS
    display_name = "Competing Risks"
    short_display_name = "CR"
    supported_methods = frozenset({EstimationMethod.MAXIMUM_LIKELIHOOD})

    def __init__(self, distributions: Sequence[UnivariateDistribution],
                 dependency: Dependency | str = Dependency.INDEPENDENT,
                 minimum_of_random_variables: bool = True):
        if len(distributions) == 0:
            raise ValueError("competing risks need at least one distribution.")
        self._components = [d.clone() for d in distributions]
        self.dependency = Dependency(dependency)
        self.minimum_of_random_variables = bool(minimum_of_random_variables)
        super().__init__(np.concatenate([d.parameters for d in self._components]))

    # ----------------------------- parameters -----------------------------

    @property
    def parameter_names(self) -> Tuple[str, ...]:
        return tuple(name for d in self._components for name in d.parameter_names)

    @property
    def parameter_symbols(self) -> Tuple[str, ...]:
        return tuple(s for d in self._components for s in d.parameter_symbols)

    @property
    def distributions(self) -> Tuple[UnivariateDistribution, ...]:
        return tuple(self._components)

    def _split(self, values: NDArray) -> list:
        slices, start = [], 0
        for d in self._components:
            slices.append(np.asarray(values[start:start + d.number_of_parameters], dtype=float))
            start += d.number_of_parameters
        return slices

    def _assign(self, values):
        for d, v in zip(self._components, self._split(values)):
            d.set_parameters(v)
        self._params = np.asarray(values, dtype=float).copy()

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        for d, v in zip(self._components, self._split(np.asarray(values, dtype=float))):
            if d.validate_parameters(v) is not None:
                return "One of the distributions have invalid parameters."
        return None

    # ----------------------------- evaluation -----------------------------

    def _support(self):
        lows, highs = zip(*(d._support() for d in self._components))
        return min(lows), max(highs)

    def _component_cdfs(self, x) -> NDArray:
        return np.array([np.asarray(d.cdf(x), dtype=float) for d in self._components])

    def _component_sfs(self, x) -> NDArray:
        return np.array([np.asarray(d.ccdf(x), dtype=float) for d in self._components])

    def _cdf(self, x):
        F = self._component_cdfs(x)
        D = F.shape[0]
        if self.minimum_of_random_variables:
            if self.dependency is Dependency.INDEPENDENT:
                return 1.0 - np.prod(self._component_sfs(x), axis=0)
            if self.dependency is Dependency.PERFECTLY_POSITIVE:
                return F.max(axis=0)
            return np.minimum(1.0, F.sum(axis=0))
        if self.dependency is Dependency.INDEPENDENT:
            return np.prod(F, axis=0)
        if self.dependency is Dependency.PERFECTLY_POSITIVE:
            return F.min(axis=0)
        return np.maximum(0.0, F.sum(axis=0) - (D - 1))

    def _sf(self, x):
        if self.minimum_of_random_variables and self.dependency is Dependency.INDEPENDENT:
            return np.prod(self._component_sfs(x), axis=0)
        return 1.0 - self._cdf(x)

    def _cause_densities(self, x) -> NDArray:
        """fᵢ(x)·Π_{k≠i} Sₖ(x) for the minimum, fᵢ(x)·Π_{k≠i} Fₖ(x) for the maximum."""
        f = np.array([np.asarray(d.density(x), dtype=float) for d in self._components])
        other = self._component_sfs(x) if self.minimum_of_random_variables else self._component_cdfs(x)
        out = np.empty_like(f)
        for i in range(f.shape[0]):
            out[i] = f[i] * np.prod(np.delete(other, i, axis=0), axis=0)
        return out

    def _pdf(self, x):
        if self.dependency is Dependency.INDEPENDENT:
            return self._cause_densities(x).sum(axis=0)
        x = np.asarray(x, dtype=float)
        h = np.array([step_size(v) for v in x.reshape(-1)]).reshape(x.shape)
        return (self._cdf(x + h) - self._cdf(x - h)) / (2.0 * h)

    def _quantile_guess(self, p):
        q = [float(d.inv_cdf(p)) for d in self._components]
        return min(q), max(q)

    # ------------------------ cumulative incidence ------------------------

    def cumulative_incidence_functions(self, x: Sequence[float]) -> NDArray[np.floating]:
        """Probability that cause i is the deciding one and the outcome is ≤ x.

        Args:
            x: Increasing evaluation grid.

        Returns:
            Array of shape (D, len(x)), one cumulative incidence function per cause.

        Raises:
            NotImplementedError: For perfectly negative dependence between more
                than two causes.
        """
        x = _ensure_vector(x)
        D = len(self._components)
        if self.dependency is Dependency.INDEPENDENT:
            density = self._cause_densities(x)
            F0 = self._component_cdfs(x[:1])[:, 0]
            other = (self._component_sfs(x[:1]) if self.minimum_of_random_variables
                     else self._component_cdfs(x[:1]))[:, 0]
            start = np.array([F0[i] * np.prod(np.delete(other, i)) for i in range(D)])
            return start[:, None] + cumulative_trapezoid(density, x, axis=1, initial=0.0)
        if self.dependency is Dependency.PERFECTLY_NEGATIVE and D > 2:
            raise NotImplementedError(
                "Perfectly negative dependence is only defined for two competing risks."
            )
        u = (np.arange(_DEPENDENT_GRID_SIZE) + 0.5) / _DEPENDENT_GRID_SIZE
        values = np.array([np.asarray(d.inv_cdf(u), dtype=float) for d in self._components])
        if self.dependency is Dependency.PERFECTLY_NEGATIVE and D == 2:
            values[1] = values[1][::-1]
        cause = values.argmin(axis=0) if self.minimum_of_random_variables else values.argmax(axis=0)
        outcome = values[cause, np.arange(u.size)]
        return np.array([
            np.mean((cause == i)[None, :] & (outcome[None, :] <= x[:, None]), axis=1)
            for i in range(D)
        ])

    # ---------------------------- estimation ----------------------------

    def parameter_constraints(self, sample):
        """Concatenated bounds of each cause fitted to the whole sample."""
        x = _as_sample(sample)
        parts = [d.parameter_constraints(x) for d in self._components]
        return tuple(np.concatenate([p[j] for p in parts]) for j in range(3))

    # ---------------------------- random values ----------------------------

    def sample(self, n_samples: int, *, seed: int | None = None,
               rng: np.random.Generator | None = None) -> NDArray[np.floating]:
        """Component-wise minimum or maximum under independence; inversion otherwise."""
        rng = rng or np.random.default_rng(seed)
        if self.dependency is not Dependency.INDEPENDENT or not self.parameters_valid:
            return super().sample(n_samples, rng=rng)
        draws = np.array([d.sample(n_samples, rng=rng) for d in self._components])
        return draws.min(axis=0) if self.minimum_of_random_variables else draws.max(axis=0)

    rvs = sample

    # ------------------------------- misc -------------------------------

    def clone(self) -> "CompetingRisks":
        return CompetingRisks(self._components, self.dependency, self.minimum_of_random_variables)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return (
            [type(d) for d in self._components] == [type(d) for d in other._components]
            and self.dependency is other.dependency
            and self.minimum_of_random_variables == other.minimum_of_random_variables
            and bool(np.array_equal(self.parameters, other.parameters, equal_nan=True))
        )

    __hash__ = None

    def __repr__(self) -> str:
        components = ", ".join(repr(d) for d in self._components)
        return (f"CompetingRisks([{components}], dependency={self.dependency.value!r}, "
                f"minimum_of_random_variables={self.minimum_of_random_variables})")
