# uncertainty/replicates.py
from __future__ import annotations

from typing import Any, Callable

import numpy as np

from ..array_backend.utils import _as_array, _ensure_vector
from ..custom_types import Array, PRNG
from ..distributions.base import UnivariateDistribution
from ..distributions.empirical import Empirical
from ..distributions.kernel_density import KernelDensity, KernelType
from ..distributions.normal import Normal

__all__ = ["BootstrapDistribution"]


def _as_rows(x: Array) -> Array:
    """(n,) -> (n, 1); (n, d) unchanged."""
    X = _as_array(x)
    if X.ndim == 0:
        return X.reshape(1, 1)
    if X.ndim == 1:
        return X.reshape(-1, 1)
    if X.ndim == 2:
        return X
    raise ValueError(f"replicates must be 1-D or 2-D; got shape {X.shape}.")


class BootstrapDistribution:
    """Container for (weighted) bootstrap replicates of a statistic.

    The discrete distribution defined by `B`, potentially weighted,
    replicates θ* of a k-vector statistic. Summaries are weighted
    *population* moments of the replicates.

    Args:
        replicates: array-like, shape (B, k) or (B,)
            The replicates defining the distribution.
        weights: array-like, shape (B,), optional
            Nonnegative weights; will be normalized to sum to 1. If None,
            uniform weights are assigned.
        rng: np.random.Generator, optional
            Random number generator for resampling.
    """

    def __init__(
        self,
        replicates: Array,
        weights: Array | None = None,
        *,
        rng: PRNG | None = None,
    ):
        X = _as_rows(replicates)
        n, d = X.shape
        if n < 1:
            raise ValueError("BootstrapDistribution requires at least one replicate.")

        if weights is None:
            w = np.full(n, 1.0 / n)
        else:
            w = _ensure_vector(weights, length=n)
            if np.any(w < 0):
                raise ValueError("weights must be nonnegative.")
            s = w.sum()
            if s <= 0:
                raise ValueError("weights cannot all be zero.")
            w = w / s

        self._X = X.astype(float)
        self._w = w.astype(float)
        self._n = int(n)
        self._d = int(d)
        self._rng = rng or np.random.default_rng()

        self._mean = (self._w[:, np.newaxis] * self._X).sum(axis=0)
        diff = self._X - self._mean
        self._cov = diff.T @ (diff * self._w[:, np.newaxis])

    @property
    def n(self) -> int:
        """Number of stored replicates."""
        return self._n

    @property
    def d(self) -> int:
        """Dimension of the statistic."""
        return self._d

    @property
    def replicates(self) -> Array:
        """A view of the stored replicates, shape (B, k)."""
        return self._X

    @property
    def weights(self) -> Array:
        """A view of normalized weights, shape (B,)."""
        return self._w

    def mean(self) -> Array:
        """Weighted mean, shape (k,)."""
        return self._mean

    def cov(self) -> Array:
        """Weighted population covariance, shape (k, k)."""
        return self._cov

    def var(self) -> Array:
        """Weighted population variance per component, shape (k,)."""
        return np.diag(self._cov).copy()

    def std(self) -> Array:
        return np.sqrt(np.maximum(self.var(), 0.0))

    def sample(self, n_samples: int, *, replace: bool = True) -> Array:
        """
        Resample replicates using the stored weights. Returns shape (n_samples, k).
        """
        n_samples = int(n_samples)
        if not replace and n_samples > self._n:
            raise ValueError("Cannot sample more than n without replacement.")
        idx = self._rng.choice(self._n, size=n_samples, replace=replace, p=self._w)
        return self._X[idx]

    rvs = sample

    def expectation(
        self,
        func: Callable[[Array], Array],
        *,
        n_mc: int = 2048,
    ) -> Normal:
        """Normal distribution over the Monte-Carlo mean of ``func(θ*)``.

        `func` maps the (B, k) replicate array to one value per replicate.
        The returned normal has the weighted mean of those values and a
        standard error of sd / √n_mc.

        Raises:
            ValueError: If `func` does not return one scalar per replicate.
        """
        Y = np.asarray(func(self._X), dtype=float).reshape(-1)
        if Y.size != self._n:
            raise ValueError("func must return one value per replicate.")
        m = float((self._w * Y).sum())
        var = float((self._w * (Y - m) ** 2).sum())
        se = np.sqrt(max(var, 0.0)) / np.sqrt(n_mc)
        return Normal(m, max(se, 1e-12))

    def _component(self, component: int) -> tuple[Array, Array]:
        values = self._X[:, int(component)]
        keep = np.isfinite(values) & (self._w > 0.0)
        if np.count_nonzero(keep) < 2:
            raise ValueError("at least two finite replicates are required.")
        return values[keep], self._w[keep] / self._w[keep].sum()

    def empirical(self, component: int = 0) -> Empirical:
        """Empirical distribution of one component of the replicates.

        Sorted values are paired with the midpoints of their cumulative
        weights, which are i / B - 1 / 2B for uniform weights. Non-finite
        replicates are dropped.
        """
        values, w = self._component(component)
        order = np.argsort(values, kind="stable")
        values, w = values[order], w[order]
        return Empirical(values, np.cumsum(w) - 0.5 * w)

    def kernel_density(self, component: int = 0, kernel: KernelType | str = KernelType.GAUSSIAN) -> KernelDensity:
        """Kernel density estimate of one component of the replicates.

        Raises:
            ValueError: If the replicates carry non-uniform weights.
        """
        values, w = self._component(component)
        if not np.allclose(w, 1.0 / w.size):
            raise ValueError("a kernel density needs uniformly weighted replicates.")
        return KernelDensity(values, kernel)

    @classmethod
    def from_distribution(
        cls,
        other: UnivariateDistribution,
        **fit_kwargs: Any,
    ) -> BootstrapDistribution:
        rng = fit_kwargs.get("rng") or np.random.default_rng(fit_kwargs.get("seed"))
        samples = other.sample(fit_kwargs.get("num_samples", 2048), rng=rng)
        return cls(samples, rng=rng)

    @classmethod
    def from_data(
        cls,
        data: Array,
        stat_fn: Callable[[Array], Array],
        *,
        B: int = 1000,
        axis: int = 0,
        rng: PRNG | None = None,
    ) -> BootstrapDistribution:
        """
        Classic i.i.d. bootstrap for a statistic.

        Args:
            data: Observations (samples along `axis`).
            stat_fn: Function mapping a resampled dataset (samples on axis 0)
                to a statistic vector (shape (k,) or scalar).
            B: Number of bootstrap replicates.
            axis: Axis of `data` that indexes samples; moved to 0 before
                calling `stat_fn`.
            rng: RNG for resampling indices.

        Returns:
            Container of `B` replicates of the statistic.
        """
        rng = rng or np.random.default_rng()
        X = np.asarray(data, dtype=float)
        X = np.moveaxis(X, axis, 0)
        n = X.shape[0]

        reps = []
        for _ in range(int(B)):
            idx = rng.integers(0, n, size=n)
            theta = np.asarray(stat_fn(X[idx]), dtype=float).reshape(-1)
            reps.append(theta)

        return cls(np.vstack(reps), rng=rng)

    def __repr__(self) -> str:
        return f"BootstrapDistribution(n={self._n}, d={self._d})"
