"""Sample statistics: product moments, L-moments, percentiles and model selection."""
from .moments import (
    product_moments,
    probability_weighted_moments,
    linear_moments,
    percentile,
    jackknife,
)
from .goodness_of_fit import aic, bic, rmse

__all__ = [
    "product_moments",
    "probability_weighted_moments",
    "linear_moments",
    "percentile",
    "jackknife",
    "aic",
    "bic",
    "rmse",
]
