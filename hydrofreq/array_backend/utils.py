# array_backend/utils.py
"""
Input canonicalization used by the hydrofreq evaluation and estimation paths.

Distribution methods accept either a scalar or an array. The helpers here turn
such an input into a flat float array plus a flag recording whether the caller
passed a scalar, so results can be handed back in the same form:

    values, scalar = _as_float_array(x)
    out = ...  # vectorized work on `values`
    return _restore(out, scalar)

Samples passed to estimation routines go through `_as_sample`, which enforces
the minimal requirements shared by every estimator.
"""

from __future__ import annotations

import numpy as np
from typing import Any, Tuple

from ..custom_types import Array, ArrayLike, FloatOrArray


def _as_array(x: Any) -> Array:
    try:
        return np.asarray(x, dtype=float)
    except (TypeError, ValueError) as e:
        raise TypeError(
            f"Could not convert input to a float array.\n"
            f"Input type: {type(x).__name__}\n"
            f"Input value: {repr(x)}\n"
            f"Original error: {e}"
        ) from e


def _is_numpy_scalar(x: Any) -> bool:
    """Return true if object is a numpy generic or Python scalar"""
    return np.isscalar(x) or isinstance(x, np.generic)


def _as_float_array(x: Any) -> Tuple[Array, bool]:
    """Return ``(values, is_scalar)`` where ``values`` is a float array.

    0-D inputs are promoted to shape (1,) so vectorized code can index them;
    the flag lets `_restore` give back a Python float.
    """
    if np.iscomplexobj(np.asarray(x)):
        raise ValueError("_as_float_array: input is complex-valued.")
    arr = _as_array(x)
    if arr.ndim == 0:
        return arr.reshape(1), True
    return arr, False


def _restore(values: Array, scalar: bool) -> FloatOrArray:
    """Inverse of `_as_float_array` for the output side."""
    if scalar:
        return float(np.asarray(values).reshape(-1)[0])
    return np.asarray(values, dtype=float)


def _ensure_real_scalar(x: Any) -> float:
    """
    Return a Python float for inputs that contain a single real value.

    Raises:
      ValueError if input contains more than one element or is complex.
    """
    if _is_numpy_scalar(x):
        if np.iscomplexobj(x):
            raise ValueError(f"_ensure_real_scalar: input is complex-valued: {x!r}")
        return float(x)

    arr = _as_array(x)
    if arr.size != 1:
        raise ValueError(f"_ensure_real_scalar: input must contain exactly one element; got size={arr.size}, shape={arr.shape}")
    return float(arr.reshape(()))


def _ensure_vector(x: ArrayLike, *, length: int | None = None, copy: bool = True) -> Array:
    """
    Ensure input is returned as a 1-D float vector of shape (n,).

    Accepts 0-D scalars, 1-D arrays and 2-D arrays shaped (n, 1) or (1, n).

    Raises:
      ValueError for incompatible shapes or when `length` does not match.
    """
    arr = _as_array(x)

    if arr.ndim == 0:
        out = arr.reshape((1,))
    elif arr.ndim == 1:
        out = arr
    elif arr.ndim == 2 and (arr.shape[0] == 1 or arr.shape[1] == 1):
        out = np.ravel(arr)
    else:
        raise ValueError(f"_ensure_vector: input with shape {arr.shape} is not a vector.")

    if length is not None and out.size != length:
        raise ValueError(f"_ensure_vector: required length {length}. Got {out.size}.")

    return out.copy() if copy else out


def _ensure_probabilities(p: Any) -> Tuple[Array, bool]:
    """Validate probabilities for quantile evaluation.

    Raises:
      ValueError if any value is NaN or outside [0, 1].
    """
    values, scalar = _as_float_array(p)
    if np.any(np.isnan(values)) or np.any(values < 0.0) or np.any(values > 1.0):
        raise ValueError("Probability must be between 0 and 1.")
    return values, scalar


def _as_sample(sample: ArrayLike, *, min_size: int = 2) -> Array:
    """Canonicalize an observed sample for parameter estimation.

    Returns a flat float copy. Raises ValueError when the sample is empty,
    contains NaN or infinite values, or is shorter than `min_size`.
    """
    arr = _ensure_vector(sample)
    if arr.size < min_size:
        raise ValueError(f"sample must contain at least {min_size} values; got {arr.size}.")
    if not np.all(np.isfinite(arr)):
        raise ValueError("sample contains NaN or infinite values.")
    return arr
