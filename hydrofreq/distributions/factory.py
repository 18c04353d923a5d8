"""Construct distributions from their :class:`DistributionType` tag or name."""
from __future__ import annotations

from typing import Dict, Type

from .base import DistributionType, UnivariateDistribution
from .bernoulli import Bernoulli
from .beta import Beta
from .binomial import Binomial
from .cauchy import Cauchy
from .chi_squared import ChiSquared
from .competing_risks import CompetingRisks
from .deterministic import Deterministic
from .empirical import Empirical
from .exponential import Exponential
from .gamma import Gamma
from .generalized_beta import GeneralizedBeta
from .generalized_extreme_value import GeneralizedExtremeValue
from .generalized_logistic import GeneralizedLogistic
from .generalized_normal import GeneralizedNormal
from .generalized_pareto import GeneralizedPareto
from .geometric import Geometric
from .gumbel import Gumbel
from .inverse_chi_squared import InverseChiSquared
from .inverse_gamma import InverseGamma
from .kappa_four import KappaFour
from .kernel_density import KernelDensity
from .ln_normal import LnNormal
from .log_normal import LogNormal
from .log_pearson_type_iii import LogPearsonTypeIII
from .logistic import Logistic
from .mixture import Mixture
from .noncentral_t import NoncentralT
from .normal import Normal
from .pareto import Pareto
from .pearson_type_iii import PearsonTypeIII
from .pert import Pert
from .pert_percentile import PertPercentile, PertPercentileZ
from .poisson import Poisson
from .rayleigh import Rayleigh
from .student_t import StudentT
from .triangular import Triangular
from .truncated_normal import TruncatedNormal
from .uniform import Uniform
from .uniform_discrete import UniformDiscrete
from .weibull import Weibull

__all__ = ["DISTRIBUTION_CLASSES", "create_distribution", "distribution_type_from_name"]

DISTRIBUTION_CLASSES: Dict[DistributionType, Type[UnivariateDistribution]] = {
    cls.distribution_type: cls
    for cls in (
        Bernoulli, Beta, Binomial, Cauchy, ChiSquared, CompetingRisks, Deterministic, Empirical,
        Exponential, Gamma, GeneralizedBeta, GeneralizedExtremeValue, GeneralizedLogistic,
        GeneralizedNormal, GeneralizedPareto, Geometric, Gumbel, InverseChiSquared, InverseGamma,
        KappaFour, KernelDensity, LnNormal, LogNormal, LogPearsonTypeIII, Logistic, Mixture,
        NoncentralT, Normal, Pareto, PearsonTypeIII, Pert, PertPercentile, PertPercentileZ,
        Poisson, Rayleigh, StudentT, Triangular, TruncatedNormal, Uniform, UniformDiscrete,
        Weibull,
    )
}

_COMPOSITES = frozenset({DistributionType.MIXTURE, DistributionType.COMPETING_RISKS})


def distribution_type_from_name(name: str) -> DistributionType:
    """Resolve a family tag from its enum value, member name, display name or short name.

    Matching ignores case and surrounding whitespace.

    Raises:
        ValueError: If no family matches.
    """
    key = name.strip().casefold()
    for member in DistributionType:
        if key in (member.value.casefold(), member.name.casefold()):
            return member
    for dist_type, cls in DISTRIBUTION_CLASSES.items():
        if key in (cls.display_name.casefold(), cls.short_display_name.casefold()):
            return dist_type
    raise ValueError(f"unknown distribution {name!r}.")


def create_distribution(distribution_type: DistributionType | str) -> UnivariateDistribution:
    """New distribution of the given family with its default parameters.

    Args:
        distribution_type: A :class:`DistributionType` or any name accepted by
            :func:`distribution_type_from_name`.

    Raises:
        ValueError: For an unknown name, or for the composite families, which
            need their components and are built with their constructors.
    """
    if not isinstance(distribution_type, DistributionType):
        distribution_type = distribution_type_from_name(distribution_type)
    if distribution_type in _COMPOSITES:
        raise ValueError(
            f"{distribution_type.value} needs component distributions; construct it directly."
        )
    return DISTRIBUTION_CLASSES[distribution_type]()
