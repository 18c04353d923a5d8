# custom_types.py
"""
Type definitions and aliases shared across hydrofreq.

We generally follow the conventions:
- Annotate function input with `ArrayLike`
- Annotate function output with `Array`
- Scalar-or-array evaluation results are annotated `FloatOrArray`
"""
from __future__ import annotations
from typing import TypeAlias, Union
from numpy.random import Generator as NumpyRNG

from numpy.typing import (
    NDArray as NumpyArray,
    ArrayLike as NumpyArrayLike
)


Array = NumpyArray
ArrayLike: TypeAlias = NumpyArrayLike
FloatOrArray: TypeAlias = Union[float, NumpyArray]
PRNG: TypeAlias = NumpyRNG
