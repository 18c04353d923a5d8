"""Information criteria and fit error for comparing fitted models."""
from __future__ import annotations

import numpy as np

from ..array_backend.utils import _ensure_vector
from ..custom_types import ArrayLike

__all__ = ["aic", "bic", "rmse"]


def aic(number_of_parameters: int, log_likelihood: float) -> float:
    """Akaike information criterion, 2k - 2 ln L."""
    return 2.0 * number_of_parameters - 2.0 * float(log_likelihood)


def bic(sample_size: int, number_of_parameters: int, log_likelihood: float) -> float:
    """Bayesian information criterion, k ln n - 2 ln L."""
    return np.log(sample_size) * number_of_parameters - 2.0 * float(log_likelihood)


def rmse(observed: ArrayLike, modeled: ArrayLike, number_of_parameters: int = 0) -> float:
    """Root mean squared error with the denominator reduced by the parameter count."""
    o = _ensure_vector(observed)
    m = _ensure_vector(modeled, length=o.size)
    dof = o.size - number_of_parameters
    if dof <= 0:
        raise ValueError("sample size must exceed the number of parameters.")
    return float(np.sqrt(np.sum((o - m) ** 2) / dof))
