"""Empirical distribution defined by tabulated (x, p) pairs."""
from __future__ import annotations

from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from ..array_backend.utils import _as_sample
from ..config import DEFAULT_INTEGRATION
from ..custom_types import ArrayLike
from ..numerics.integration import integrate
from ..numerics.special import standard_normal_cdf, standard_normal_pdf, standard_z
from .base import DistributionType, UnivariateDistribution

__all__ = ["Empirical"]


class Empirical(UnivariateDistribution):
    """Piecewise distribution through a table of quantiles.

    The CDF is interpolated linearly in x against the standard normal
    variate of p, so a table read off a normal probability plot reproduces
    the straight segments drawn on it. Below the first tabulated value the
    CDF is 0 and from the last one on it is 1, so the end points carry the
    probability mass outside the table.

    The parameter vector is the x values followed by the p values.

    Args:
        x_values: Ascending values. Defaults to (-0.5, 0, 0.5).
        p_values: Strictly ascending non-exceedance probabilities in [0, 1],
            one per value. Defaults to (0.1, 0.5, 0.9).

    Raises:
        ValueError: If the two sequences differ in length.
    """

    distribution_type = DistributionType.EMPIRICAL
    display_name = "Empirical"
    short_display_name = "EMP"
    supported_methods = frozenset()

    def __init__(self, x_values: ArrayLike = (-0.5, 0.0, 0.5), p_values: ArrayLike = (0.1, 0.5, 0.9)):
        x = np.asarray(x_values, dtype=float).reshape(-1)
        p = np.asarray(p_values, dtype=float).reshape(-1)
        if x.size != p.size:
            raise ValueError("The x and probability arrays must have the same length.")
        self._size = x.size
        super().__init__(np.concatenate([x, p]))

    @classmethod
    def from_sample(cls, sample: ArrayLike) -> "Empirical":
        """Sorted sample against its Weibull plotting positions i / (n + 1)."""
        x = np.sort(_as_sample(sample))
        return cls(x, np.arange(1, x.size + 1) / (x.size + 1.0))

    # ----------------------------- parameters -----------------------------

    @property
    def parameter_names(self) -> Tuple[str, ...]:
        n = self._size
        return tuple(f"X{i + 1}" for i in range(n)) + tuple(f"P{i + 1}" for i in range(n))

    @property
    def parameter_symbols(self) -> Tuple[str, ...]:
        return self.parameter_names

    @property
    def x_values(self) -> NDArray[np.floating]:
        return self._params[: self._size].copy()

    @property
    def p_values(self) -> NDArray[np.floating]:
        return self._params[self._size:].copy()

    def validate_parameters(self, values):
        reason = super().validate_parameters(values)
        if reason is not None:
            return reason
        x, p = values[: self._size], values[self._size:]
        if x.size < 2:
            return "At least two points are required."
        if np.any(np.diff(x) < 0.0):
            return "The x values must be in ascending order."
        if np.any(np.diff(p) <= 0.0):
            return "The probability values must be strictly ascending."
        if p[0] < 0.0 or p[-1] > 1.0:
            return "The probability values must be between 0 and 1."
        return None

    def _z_values(self) -> NDArray[np.floating]:
        if "z" not in self._cache:
            self._cache["z"] = np.asarray(standard_z(self._params[self._size:]), dtype=float)
        return self._cache["z"]

    # ----------------------------- evaluation -----------------------------

    def _support(self):
        x = self._params[: self._size]
        return float(x[0]), float(x[-1])

    def _cdf(self, x):
        xs = self._params[: self._size]
        return standard_normal_cdf(np.interp(x, xs, self._z_values()))

    def _pdf(self, x):
        xs, zs = self._params[: self._size], self._z_values()
        i = np.clip(np.searchsorted(xs, x, side="right") - 1, 0, xs.size - 2)
        with np.errstate(divide="ignore", invalid="ignore"):
            slope = (zs[i + 1] - zs[i]) / (xs[i + 1] - xs[i])
        slope = np.where(np.isfinite(slope), slope, 0.0)
        return np.asarray(standard_normal_pdf(np.interp(x, xs, zs)), dtype=float) * slope

    def _ppf(self, p):
        xs = self._params[: self._size]
        return np.interp(np.asarray(standard_z(p), dtype=float), self._z_values(), xs)

    def _mode(self):
        return np.nan

    def central_moments(self):
        """Moments as integrals of the quantile function over (0, 1)."""
        if not self.parameters_valid:
            return np.full(4, np.nan)
        if "moments" not in self._cache:
            points = [float(p) for p in self._params[self._size:] if 0.0 < p < 1.0]

            def raw(k, center=0.0):
                return integrate(lambda u: (float(self._ppf(np.array([u]))[0]) - center) ** k,
                                 0.0, 1.0, DEFAULT_INTEGRATION, points)

            mean = raw(1)
            m2, m3, m4 = raw(2, mean), raw(3, mean), raw(4, mean)
            sd = np.sqrt(m2)
            with np.errstate(divide="ignore", invalid="ignore"):
                self._cache["moments"] = np.array([mean, sd, m3 / sd ** 3, m4 / m2 ** 2])
        return self._cache["moments"].copy()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(x_values={self.x_values.tolist()!r}, p_values={self.p_values.tolist()!r})"
