"""Project-wide exception types."""


class HydroFreqError(Exception):
    """Base exception for all hydrofreq errors."""


class ConfigValidationError(HydroFreqError, ValueError):
    """Raised when validation fails for supplied settings."""


class EstimationError(HydroFreqError):
    """Raised when a sample cannot be turned into a valid parameter set."""


class ConvergenceError(HydroFreqError):
    """Raised when an iterative solver fails to bracket or converge on a root."""
