import numpy as np
import pytest

from hydrofreq.distributions import (
    CompetingRisks,
    Dependency,
    EstimationMethod,
    Exponential,
    GeneralizedExtremeValue,
    Gumbel,
    Mixture,
    Normal,
    Weibull,
)
from hydrofreq.numerics.differentiation import derivative


# ------------------------------- Mixture -------------------------------

@pytest.fixture
def mixture():
    return Mixture([0.3, 0.7], [Normal(0.0, 1.0), Normal(5.0, 2.0)])


def test_mixture_parameters(mixture):
    assert mixture.number_of_parameters == 6
    np.testing.assert_allclose(mixture.weights, [0.3, 0.7])
    assert mixture.parameter_names[:2] == ("Weight (w1)", "Weight (w2)")
    assert mixture.parameters_valid


def test_mixture_normalizes_weights():
    m = Mixture([1.0, 3.0], [Normal(), Normal(2.0, 1.0)])
    np.testing.assert_allclose(m.weights, [0.25, 0.75])
    assert m.parameters_valid


def test_mixture_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        Mixture([0.5, 0.5], [Normal()])
    with pytest.raises(ValueError):
        Mixture([], [])


def test_mixture_invalid_component_gives_nan():
    m = Mixture([0.5, 0.5], [Normal(), Normal(0.0, -1.0)])
    assert not m.parameters_valid
    assert np.isnan(m.cdf(0.0))


def test_mixture_evaluation(mixture):
    x = np.array([-1.0, 0.5, 3.0, 8.0])
    a, b = Normal(0.0, 1.0), Normal(5.0, 2.0)
    np.testing.assert_allclose(mixture.density(x), 0.3 * a.density(x) + 0.7 * b.density(x))
    np.testing.assert_allclose(mixture.cdf(x), 0.3 * a.cdf(x) + 0.7 * b.cdf(x))
    np.testing.assert_allclose(mixture.log_density(x), np.log(mixture.density(x)))
    p = np.array([0.01, 0.3, 0.5, 0.99])
    np.testing.assert_allclose(mixture.cdf(mixture.inv_cdf(p)), p, atol=1e-8)


def test_mixture_moments(mixture):
    mean = 0.3 * 0.0 + 0.7 * 5.0
    second = 0.3 * 1.0 + 0.7 * (4.0 + 25.0)
    assert mixture.mean() == pytest.approx(mean, rel=1e-5)
    assert mixture.standard_deviation() == pytest.approx(np.sqrt(second - mean ** 2), rel=1e-5)


def test_mixture_sampling(mixture):
    x = mixture.sample(20000, seed=1)
    assert x.shape == (20000,)
    assert np.mean(x < 2.5) == pytest.approx(float(mixture.cdf(2.5)), abs=0.02)
    np.testing.assert_array_equal(x, mixture.sample(20000, seed=1))


def test_mixture_clone_is_independent(mixture):
    other = mixture.clone()
    assert other == mixture
    values = other.parameters
    values[2] = 1.0
    other.set_parameters(values)
    assert other != mixture
    assert mixture.distributions[0].mu == 0.0


def test_mixture_mle_recovers_components():
    rng = np.random.default_rng(2)
    x = np.concatenate([rng.normal(0.0, 1.0, 300), rng.normal(8.0, 1.5, 700)])
    m = Mixture([0.5, 0.5], [Normal(), Normal()]).estimate(x, EstimationMethod.MAXIMUM_LIKELIHOOD)
    assert m.parameters_valid
    np.testing.assert_allclose(m.weights, [0.3, 0.7], atol=0.05)
    assert m.distributions[0].mu == pytest.approx(0.0, abs=0.3)
    assert m.distributions[1].mu == pytest.approx(8.0, abs=0.3)


def test_mixture_mle_beats_generating_parameters():
    truth = Mixture([0.7, 0.3], [Normal(0.0, 1.0), Normal(3.0, 0.1)])
    x = truth.sample(500, seed=12)
    assert np.isfinite(truth.log_likelihood(x))
    fitted = truth.clone().estimate(x, EstimationMethod.MAXIMUM_LIKELIHOOD)
    assert fitted.log_likelihood(x) >= truth.log_likelihood(x)


def test_mixture_only_supports_mle(mixture):
    with pytest.raises(NotImplementedError):
        mixture.estimate(np.arange(10.0), EstimationMethod.METHOD_OF_MOMENTS)


# ---------------------------- Competing risks ----------------------------

@pytest.fixture
def causes():
    return [Exponential(0.0, 10.0), Exponential(0.0, 20.0)]


def test_independent_minimum_of_exponentials(causes):
    cr = CompetingRisks(causes)
    # min of independent exponentials with rates 1/10 and 1/20 has rate 3/20
    x = np.array([1.0, 5.0, 20.0])
    np.testing.assert_allclose(cr.cdf(x), 1.0 - np.exp(-0.15 * x))
    np.testing.assert_allclose(cr.density(x), 0.15 * np.exp(-0.15 * x))
    assert cr.inv_cdf(0.5) == pytest.approx(np.log(2.0) / 0.15, rel=1e-8)


def test_independent_maximum(causes):
    cr = CompetingRisks(causes, minimum_of_random_variables=False)
    x = np.array([2.0, 10.0, 40.0])
    expected = (1.0 - np.exp(-x / 10.0)) * (1.0 - np.exp(-x / 20.0))
    np.testing.assert_allclose(cr.cdf(x), expected)
    for xi in x:
        assert cr.density(xi) == pytest.approx(derivative(lambda t: cr.cdf(t), xi), rel=1e-5)


@pytest.mark.parametrize("dependency", [Dependency.PERFECTLY_POSITIVE, Dependency.PERFECTLY_NEGATIVE])
@pytest.mark.parametrize("minimum", [True, False])
def test_dependent_cdfs(causes, dependency, minimum):
    cr = CompetingRisks(causes, dependency, minimum)
    x = np.array([3.0, 12.0])
    F = np.array([c.cdf(x) for c in causes])
    if minimum:
        expected = F.max(axis=0) if dependency is Dependency.PERFECTLY_POSITIVE else np.minimum(1.0, F.sum(axis=0))
    else:
        expected = F.min(axis=0) if dependency is Dependency.PERFECTLY_POSITIVE else np.maximum(0.0, F.sum(axis=0) - 1.0)
    np.testing.assert_allclose(cr.cdf(x), expected)


@pytest.mark.parametrize("dependency", list(Dependency))
@pytest.mark.parametrize("minimum", [True, False])
@pytest.mark.parametrize("n_causes", [2, 3])
def test_inverse_cdf_round_trip(dependency, minimum, n_causes):
    causes = [Exponential(0.0, 10.0), Exponential(0.0, 20.0), Gumbel(15.0, 4.0)][:n_causes]
    cr = CompetingRisks(causes, dependency, minimum)
    p = np.array([0.01, 0.5, 0.99])
    q = cr.inv_cdf(p)
    assert np.all(np.diff(q) > 0.0)
    np.testing.assert_allclose(cr.cdf(q), p, atol=1e-7)


def test_negative_dependence_minimum_quantile():
    cr = CompetingRisks([Exponential(0.0, 10.0), Exponential(0.0, 20.0)], Dependency.PERFECTLY_NEGATIVE)
    # min(1, F1 + F2) = 0.8 has its root below both component quantiles
    q = cr.inv_cdf(0.8)
    assert q < min(Exponential(0.0, 10.0).inv_cdf(0.8), Exponential(0.0, 20.0).inv_cdf(0.8))
    assert cr.cdf(q) == pytest.approx(0.8, abs=1e-8)


def test_dependent_density_is_numerical_derivative(causes):
    cr = CompetingRisks(causes, Dependency.PERFECTLY_POSITIVE)
    # comonotone minimum of these exponentials is the one with the smaller scale
    assert cr.density(5.0) == pytest.approx(causes[0].density(5.0), rel=1e-6)


def test_cumulative_incidence_sums_to_cdf(causes):
    cr = CompetingRisks(causes)
    x = np.linspace(0.0, 60.0, 601)
    cif = cr.cumulative_incidence_functions(x)
    assert cif.shape == (2, x.size)
    np.testing.assert_allclose(cif.sum(axis=0), cr.cdf(x), atol=1e-4)
    # cause 1 wins with probability rate1 / (rate1 + rate2) = 2/3
    assert cif[0, -1] == pytest.approx(2.0 / 3.0, abs=1e-3)


def test_cumulative_incidence_comonotone(causes):
    cr = CompetingRisks(causes, Dependency.PERFECTLY_POSITIVE)
    cif = cr.cumulative_incidence_functions([5.0, 1000.0])
    np.testing.assert_allclose(cif[:, -1], [1.0, 0.0])


def test_cumulative_incidence_negative_dependence_limits():
    cr = CompetingRisks([Exponential(0.0, 1.0)] * 3, Dependency.PERFECTLY_NEGATIVE)
    with pytest.raises(NotImplementedError):
        cr.cumulative_incidence_functions([1.0, 2.0])


def test_competing_risks_parameters_and_clone():
    cr = CompetingRisks([Gumbel(100.0, 10.0), GeneralizedExtremeValue(120.0, 15.0, 0.1)])
    assert cr.number_of_parameters == 5
    np.testing.assert_allclose(cr.parameters, [100.0, 10.0, 120.0, 15.0, 0.1])
    other = cr.clone()
    assert other == cr
    other.set_parameters([100.0, 10.0, 120.0, -1.0, 0.1])
    assert not other.parameters_valid
    assert cr.parameters_valid


def test_competing_risks_sampling(causes):
    cr = CompetingRisks(causes)
    x = cr.sample(20000, seed=4)
    assert np.mean(x) == pytest.approx(1.0 / 0.15, rel=0.03)


def test_competing_risks_mle_improves_likelihood():
    truth = CompetingRisks([Weibull(10.0, 3.0), Weibull(14.0, 1.5)])
    x = truth.sample(300, seed=8)
    fitted = CompetingRisks([Weibull(), Weibull()])
    start = fitted.clone()
    start.set_parameters(fitted.parameter_constraints(x)[0])
    fitted.estimate(x, EstimationMethod.MAXIMUM_LIKELIHOOD)
    assert fitted.parameters_valid
    assert fitted.log_likelihood(x) >= start.log_likelihood(x)
