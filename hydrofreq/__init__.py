"""hydrofreq: univariate distributions for flood-frequency analysis."""
from hydrofreq.config import (
    BootstrapSettings,
    IntegrationSettings,
    OptimizerSettings,
    SolverSettings,
)
from hydrofreq.exceptions import (
    ConfigValidationError,
    ConvergenceError,
    EstimationError,
    HydroFreqError,
)
from hydrofreq.distributions import *  # noqa: F401,F403
from hydrofreq.distributions import __all__ as _distribution_names
from hydrofreq.uncertainty import (
    BootstrapAnalysis,
    BootstrapDistribution,
    IntervalMethod,
    UncertaintyAnalysisResults,
)

__version__ = "0.1.0"

__all__ = [
    "BootstrapSettings",
    "IntegrationSettings",
    "OptimizerSettings",
    "SolverSettings",
    "ConfigValidationError",
    "ConvergenceError",
    "EstimationError",
    "HydroFreqError",
    "BootstrapAnalysis",
    "BootstrapDistribution",
    "IntervalMethod",
    "UncertaintyAnalysisResults",
    *_distribution_names,
]
