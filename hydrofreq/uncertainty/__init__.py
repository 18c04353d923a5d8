"""Bootstrap quantile uncertainty: the analysis engine, interval reductions and results."""
from .bootstrap import BootstrapAnalysis, IntervalMethod
from .replicates import BootstrapDistribution
from .results import UncertaintyAnalysisResults
from . import intervals

__all__ = [
    "BootstrapAnalysis",
    "IntervalMethod",
    "BootstrapDistribution",
    "UncertaintyAnalysisResults",
    "intervals",
]
