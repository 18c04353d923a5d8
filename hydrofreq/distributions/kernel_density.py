"""Kernel density estimate of a sample."""
from __future__ import annotations

from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from ..array_backend.utils import _as_sample
from ..custom_types import ArrayLike
from .base import DistributionType, UnivariateDistribution, parameter

__all__ = ["KernelDensity", "KernelType"]


class KernelType(str, Enum):
    EPANECHNIKOV = "epanechnikov"
    GAUSSIAN = "gaussian"
    TRIANGULAR = "triangular"
    UNIFORM = "uniform"


def _epanechnikov_pdf(u):
    return np.where(np.abs(u) <= 1.0, 0.75 * (1.0 - u * u), 0.0)


def _epanechnikov_cdf(u):
    u = np.clip(u, -1.0, 1.0)
    return 0.25 * (2.0 + 3.0 * u - u ** 3)


def _triangular_pdf(u):
    return np.maximum(1.0 - np.abs(u), 0.0)


def _triangular_cdf(u):
    u = np.clip(u, -1.0, 1.0)
    return np.where(u < 0.0, 0.5 * (1.0 + u) ** 2, 1.0 - 0.5 * (1.0 - u) ** 2)


def _uniform_pdf(u):
    return np.where(np.abs(u) <= 1.0, 0.5, 0.0)


def _uniform_cdf(u):
    return 0.5 * (np.clip(u, -1.0, 1.0) + 1.0)


# Compact kernels on [-1, 1]: (pdf, cdf).
_COMPACT_KERNELS = {
    KernelType.EPANECHNIKOV: (_epanechnikov_pdf, _epanechnikov_cdf),
    KernelType.TRIANGULAR: (_triangular_pdf, _triangular_cdf),
    KernelType.UNIFORM: (_uniform_pdf, _uniform_cdf),
}

# Second and fourth moments of each standardized kernel.
_KERNEL_MOMENTS = {
    KernelType.EPANECHNIKOV: (1.0 / 5.0, 3.0 / 35.0),
    KernelType.GAUSSIAN: (1.0, 3.0),
    KernelType.TRIANGULAR: (1.0 / 6.0, 1.0 / 15.0),
    KernelType.UNIFORM: (1.0 / 3.0, 1.0 / 5.0),
}


def bandwidth_rule(sample: ArrayLike) -> float:
    """Silverman's rule of thumb σ·(4 / 3n)^(1/5)."""
    x = _as_sample(sample)
    return float(np.std(x, ddof=1) * (4.0 / (3.0 * x.size)) ** 0.2)


class KernelDensity(UnivariateDistribution):
    """Kernel density estimate f(x) = Σ K((x - xᵢ)/h) / (n h).

    The Gaussian kernel is evaluated through :class:`scipy.stats.gaussian_kde`;
    the compact kernels in closed form. The only parameter is the bandwidth h;
    the sample is data held by the distribution.

    Args:
        sample: The data. Defaults to 30 standard normal values drawn with
            seed 12345.
        kernel: Kernel shape. Defaults to Gaussian.
        bandwidth: Bandwidth h > 0. Defaults to :func:`bandwidth_rule`.
    """

    distribution_type = DistributionType.KERNEL_DENSITY
    display_name = "Kernel Density"
    short_display_name = "KDE"
    parameter_names = ("Bandwidth (h)",)
    parameter_symbols = ("h",)
    supported_methods = frozenset()
    _positive_parameters = (0,)

    bandwidth = parameter(0, "Bandwidth h.")

    def __init__(self, sample: ArrayLike | None = None, kernel: KernelType | str = KernelType.GAUSSIAN,
                 bandwidth: float | None = None):
        if sample is None:
            sample = np.random.default_rng(12345).standard_normal(30)
        self._data = np.sort(_as_sample(sample))
        self.kernel = KernelType(kernel)
        super().__init__([bandwidth_rule(self._data) if bandwidth is None else bandwidth])

    @property
    def sample_data(self) -> NDArray[np.floating]:
        return self._data.copy()

    @property
    def sample_size(self) -> int:
        return self._data.size

    def set_sample_data(self, sample: ArrayLike) -> None:
        """Replace the data and reset the bandwidth by :func:`bandwidth_rule`."""
        self._data = np.sort(_as_sample(sample))
        self.set_parameters([bandwidth_rule(self._data)])

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is None and values[0] <= 0.0:
            return "The bandwidth must be a positive number."
        return reason

    def _gaussian_kde(self) -> stats.gaussian_kde:
        if "kde" not in self._cache:
            factor = self.bandwidth / np.std(self._data, ddof=1)
            self._cache["kde"] = stats.gaussian_kde(self._data, bw_method=factor)
        return self._cache["kde"]

    # ----------------------------- evaluation -----------------------------

    def _support(self):
        if self.kernel is KernelType.GAUSSIAN:
            return -np.inf, np.inf
        return float(self._data[0] - self.bandwidth), float(self._data[-1] + self.bandwidth)

    def _pdf(self, x):
        if self.kernel is KernelType.GAUSSIAN:
            return self._gaussian_kde().evaluate(x)
        pdf, _ = _COMPACT_KERNELS[self.kernel]
        h = self.bandwidth
        return pdf((x[:, np.newaxis] - self._data) / h).sum(axis=1) / (self._data.size * h)

    def _cdf(self, x):
        if self.kernel is KernelType.GAUSSIAN:
            kde = self._gaussian_kde()
            return np.array([kde.integrate_box_1d(-np.inf, xi) for xi in x])
        _, cdf = _COMPACT_KERNELS[self.kernel]
        return cdf((x[:, np.newaxis] - self._data) / self.bandwidth).mean(axis=1)

    def _quantile_guess(self, p):
        return float(self._data[0]), float(self._data[-1])

    def central_moments(self):
        """Moments of xᵢ + h·ε with xᵢ drawn from the data and ε from the kernel."""
        if not self.parameters_valid:
            return np.full(4, np.nan)
        k2, k4 = _KERNEL_MOMENTS[self.kernel]
        h = self.bandwidth
        d = self._data - self._data.mean()
        m2, m3, m4 = (np.mean(d ** k) for k in (2, 3, 4))
        var = m2 + h * h * k2
        fourth = m4 + 6.0 * m2 * h * h * k2 + h ** 4 * k4
        return np.array([self._data.mean(), np.sqrt(var), m3 / var ** 1.5, fourth / var ** 2])

    def _mode(self):
        return np.nan

    def sample(self, n_samples, *, seed=None, rng=None):
        """Smoothed bootstrap: a resampled data value plus h times a kernel draw."""
        if not self.parameters_valid:
            return np.full(int(n_samples), np.nan)
        rng = rng or np.random.default_rng(seed)
        n = int(n_samples)
        if self.kernel is KernelType.GAUSSIAN:
            return self._gaussian_kde().resample(n, seed=rng).reshape(-1)
        centers = self._data[rng.integers(self._data.size, size=n)]
        if self.kernel is KernelType.UNIFORM:
            eps = rng.uniform(-1.0, 1.0, n)
        elif self.kernel is KernelType.TRIANGULAR:
            eps = rng.triangular(-1.0, 0.0, 1.0, n)
        else:
            # Devroye: of three uniforms, u2 if |u3| is the largest, else u3
            u1, u2, u3 = rng.uniform(-1.0, 1.0, (3, n))
            eps = np.where((np.abs(u3) >= np.abs(u2)) & (np.abs(u3) >= np.abs(u1)), u2, u3)
        return centers + self.bandwidth * eps

    def clone(self) -> "KernelDensity":
        other = super().clone()
        other._data = self._data.copy()
        return other

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return (self.kernel is other.kernel and np.array_equal(self._data, other._data)
                and bool(np.array_equal(self.parameters, other.parameters, equal_nan=True)))

    __hash__ = None

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(<{self._data.size} values>, kernel={self.kernel.value!r}, "
                f"bandwidth={self.bandwidth!r})")
