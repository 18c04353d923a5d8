"""Univariate distribution families, composites and the family factory."""
from .base import DistributionType, EstimationMethod, UnivariateDistribution
from .bernoulli import Bernoulli
from .beta import Beta
from .binomial import Binomial
from .cauchy import Cauchy
from .chi_squared import ChiSquared
from .competing_risks import CompetingRisks, Dependency
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
from .kernel_density import KernelDensity, KernelType
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
from .factory import DISTRIBUTION_CLASSES, create_distribution, distribution_type_from_name

__all__ = [
    "DistributionType",
    "EstimationMethod",
    "UnivariateDistribution",
    "Bernoulli",
    "Beta",
    "Binomial",
    "Cauchy",
    "ChiSquared",
    "CompetingRisks",
    "Dependency",
    "Deterministic",
    "Empirical",
    "Exponential",
    "Gamma",
    "GeneralizedBeta",
    "GeneralizedExtremeValue",
    "GeneralizedLogistic",
    "GeneralizedNormal",
    "GeneralizedPareto",
    "Geometric",
    "Gumbel",
    "InverseChiSquared",
    "InverseGamma",
    "KappaFour",
    "KernelDensity",
    "KernelType",
    "LnNormal",
    "LogNormal",
    "LogPearsonTypeIII",
    "Logistic",
    "Mixture",
    "NoncentralT",
    "Normal",
    "Pareto",
    "PearsonTypeIII",
    "Pert",
    "PertPercentile",
    "PertPercentileZ",
    "Poisson",
    "Rayleigh",
    "StudentT",
    "Triangular",
    "TruncatedNormal",
    "Uniform",
    "UniformDiscrete",
    "Weibull",
    "DISTRIBUTION_CLASSES",
    "create_distribution",
    "distribution_type_from_name",
]
