"""Solver, optimizer, integration and bootstrap settings with validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from hydrofreq.exceptions import ConfigValidationError


@dataclass(slots=True)
class SolverSettings:
    tolerance: float = 1e-10
    max_iterations: int = 500
    bracket_expansions: int = 60

    def __post_init__(self) -> None:
        if not self.tolerance > 0:
            raise ConfigValidationError("tolerance must be > 0")
        if self.max_iterations <= 0:
            raise ConfigValidationError("max_iterations must be > 0")
        if self.bracket_expansions <= 0:
            raise ConfigValidationError("bracket_expansions must be > 0")

    @classmethod
    def from_dict(cls, data: dict) -> "SolverSettings":
        return cls(**data)

    def to_dict(self) -> dict:
        return {
            "tolerance": self.tolerance,
            "max_iterations": self.max_iterations,
            "bracket_expansions": self.bracket_expansions,
        }


@dataclass(slots=True)
class OptimizerSettings:
    max_iterations: int = 10000
    x_tolerance: float = 1e-8
    f_tolerance: float = 1e-10

    def __post_init__(self) -> None:
        if self.max_iterations <= 0:
            raise ConfigValidationError("max_iterations must be > 0")
        if not self.x_tolerance > 0 or not self.f_tolerance > 0:
            raise ConfigValidationError("tolerances must be > 0")

    @classmethod
    def from_dict(cls, data: dict) -> "OptimizerSettings":
        return cls(**data)

    def to_dict(self) -> dict:
        return {
            "max_iterations": self.max_iterations,
            "x_tolerance": self.x_tolerance,
            "f_tolerance": self.f_tolerance,
        }


@dataclass(slots=True)
class IntegrationSettings:
    limit: int = 200
    tail_probability: float = 1e-12
    quadrature_nodes: int = 200

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise ConfigValidationError("limit must be > 0")
        if not 0.0 < self.tail_probability < 0.5:
            raise ConfigValidationError("tail_probability must be in (0, 0.5)")
        if self.quadrature_nodes < 2:
            raise ConfigValidationError("quadrature_nodes must be >= 2")

    @classmethod
    def from_dict(cls, data: dict) -> "IntegrationSettings":
        return cls(**data)

    def to_dict(self) -> dict:
        return {
            "limit": self.limit,
            "tail_probability": self.tail_probability,
            "quadrature_nodes": self.quadrature_nodes,
        }


@dataclass(slots=True)
class BootstrapSettings:
    replications: int = 10000
    seed: int = 12345
    max_retries: int = 20
    max_workers: Optional[int] = None
    alpha: float = 0.1

    def __post_init__(self) -> None:
        if self.replications < 100:
            raise ConfigValidationError("replications must be >= 100")
        if self.seed is None:
            raise ConfigValidationError("seed is required for reproducibility")
        if self.max_retries < 0:
            raise ConfigValidationError("max_retries must be >= 0")
        if self.max_workers is not None and self.max_workers <= 0:
            raise ConfigValidationError("max_workers must be positive when set")
        if not 0.0 < self.alpha < 1.0:
            raise ConfigValidationError("alpha must be in (0, 1)")

    @classmethod
    def from_dict(cls, data: dict) -> "BootstrapSettings":
        return cls(**data)

    def to_dict(self) -> dict:
        return {
            "replications": self.replications,
            "seed": self.seed,
            "max_retries": self.max_retries,
            "max_workers": self.max_workers,
            "alpha": self.alpha,
        }


DEFAULT_SOLVER = SolverSettings()
DEFAULT_OPTIMIZER = OptimizerSettings()
DEFAULT_INTEGRATION = IntegrationSettings()
