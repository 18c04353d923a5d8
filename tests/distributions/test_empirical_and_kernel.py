import numpy as np
import pytest
from scipy import stats

from hydrofreq.distributions import (
    Deterministic,
    Empirical,
    EstimationMethod,
    KernelDensity,
    KernelType,
    Normal,
)
from hydrofreq.numerics.differentiation import derivative
from hydrofreq.numerics.integration import integrate


# ------------------------------ Deterministic ------------------------------

def test_deterministic_point_mass():
    d = Deterministic(3.0)
    assert d.cdf(2.999) == 0.0
    assert d.cdf(3.0) == 1.0
    assert d.density(3.0) == 1.0
    assert d.density(2.0) == 0.0
    np.testing.assert_array_equal(d.inv_cdf([0.0, 0.3, 1.0]), [3.0, 3.0, 3.0])
    assert d.mean() == d.median() == d.mode() == 3.0
    assert d.standard_deviation() == 0.0
    np.testing.assert_array_equal(d.sample(5, seed=1), np.full(5, 3.0))


def test_deterministic_invalid_and_estimate():
    assert np.isnan(Deterministic(np.inf).cdf(0.0))
    d = Deterministic().estimate([1.0, 2.0, 6.0], EstimationMethod.METHOD_OF_MOMENTS)
    assert d.value == pytest.approx(3.0)


# -------------------------------- Empirical --------------------------------

@pytest.fixture
def table():
    return Empirical([10.0, 20.0, 35.0, 60.0], [0.1, 0.5, 0.9, 0.99])


def test_empirical_reproduces_table(table):
    np.testing.assert_allclose(table.cdf(table.x_values[:-1]), table.p_values[:-1])
    # the mass above the last tabulated probability sits on the last value
    assert table.cdf(60.0) == 1.0
    np.testing.assert_allclose(table.inv_cdf(table.p_values), table.x_values)
    assert table.number_of_parameters == 8
    assert table.parameter_names[0] == "X1"
    assert table.minimum == 10.0
    assert table.maximum == 60.0


def test_empirical_interpolates_on_normal_scale(table):
    # halfway between 20 and 35 is halfway between z(0.5) = 0 and z(0.9)
    assert table.cdf(27.5) == pytest.approx(stats.norm.cdf(0.5 * stats.norm.ppf(0.9)))
    assert table.inv_cdf(stats.norm.cdf(0.5 * stats.norm.ppf(0.9))) == pytest.approx(27.5)


def test_empirical_tails_sit_on_the_end_points(table):
    assert table.cdf(9.0) == 0.0
    assert table.cdf(61.0) == 1.0
    assert table.inv_cdf(0.05) == 10.0
    assert table.inv_cdf(0.995) == 60.0


@pytest.mark.parametrize("x", [12.0, 27.5, 50.0])
def test_empirical_density_is_cdf_slope(table, x):
    assert table.density(x) == pytest.approx(derivative(lambda t: table.cdf(t), x), rel=1e-6)


def test_empirical_mean_is_integral_of_quantile(table):
    expected = integrate(lambda u: float(table.inv_cdf(u)), 0.0, 1.0, points=[0.1, 0.5, 0.9, 0.99])
    assert table.mean() == pytest.approx(expected, rel=1e-6)
    assert table.minimum < table.mean() < table.maximum


def test_empirical_validation():
    with pytest.raises(ValueError):
        Empirical([1.0, 2.0], [0.5])
    assert not Empirical([2.0, 1.0], [0.2, 0.8]).parameters_valid
    assert not Empirical([1.0, 2.0], [0.8, 0.2]).parameters_valid
    assert not Empirical([1.0, 2.0], [0.2, 1.2]).parameters_valid
    assert not Empirical([1.0], [0.5]).parameters_valid


def test_empirical_from_sample_uses_weibull_positions():
    d = Empirical.from_sample([5.0, 1.0, 3.0])
    np.testing.assert_array_equal(d.x_values, [1.0, 3.0, 5.0])
    np.testing.assert_allclose(d.p_values, [0.25, 0.5, 0.75])
    assert d.median() == pytest.approx(3.0)


def test_empirical_clone_and_equality(table):
    other = table.clone()
    assert other == table
    values = other.parameters
    values[0] = 5.0
    other.set_parameters(values)
    assert other != table


# ------------------------------ Kernel density ------------------------------

@pytest.fixture
def data():
    return Normal(10.0, 2.0).sample(200, seed=3)


def test_kernel_density_bandwidth_rule(data):
    kde = KernelDensity(data)
    expected = np.std(data, ddof=1) * (4.0 / (3.0 * data.size)) ** 0.2
    assert kde.bandwidth == pytest.approx(expected)
    assert kde.sample_size == 200


def test_gaussian_kernel_matches_scipy(data):
    kde = KernelDensity(data, bandwidth=0.5)
    x = np.array([6.0, 10.0, 13.0])
    manual = stats.norm.pdf((x[:, None] - data) / 0.5).mean(axis=1) / 0.5
    np.testing.assert_allclose(kde.density(x), manual, rtol=1e-8)
    np.testing.assert_allclose(kde.cdf(x), stats.norm.cdf((x[:, None] - data) / 0.5).mean(axis=1), rtol=1e-8)


@pytest.mark.parametrize("kernel", list(KernelType))
def test_kernel_cdf_density_and_quantiles_agree(data, kernel):
    kde = KernelDensity(data, kernel, bandwidth=0.8)
    assert kde.cdf(data.min() - 10.0) == pytest.approx(0.0, abs=1e-12)
    assert kde.cdf(data.max() + 10.0) == pytest.approx(1.0, abs=1e-12)
    for x in (8.0, 11.0):
        assert kde.density(x) == pytest.approx(derivative(lambda t: kde.cdf(t), x), rel=1e-5)
    p = np.array([0.05, 0.5, 0.95])
    np.testing.assert_allclose(kde.cdf(kde.inv_cdf(p)), p, atol=1e-8)


@pytest.mark.parametrize("kernel", list(KernelType))
def test_kernel_density_moments(data, kernel):
    kde = KernelDensity(data, kernel, bandwidth=0.8)
    x = kde.sample(200_000, seed=11)
    assert kde.mean() == pytest.approx(np.mean(data))
    assert kde.standard_deviation() == pytest.approx(np.std(x), rel=0.01)
    assert kde.mean() == pytest.approx(np.mean(x), abs=0.02)


def test_compact_kernel_support(data):
    kde = KernelDensity(data, "epanechnikov", bandwidth=0.5)
    assert kde.minimum == pytest.approx(data.min() - 0.5)
    assert kde.maximum == pytest.approx(data.max() + 0.5)
    assert kde.cdf(kde.minimum) == 0.0


def test_kernel_density_equality_and_data(data):
    kde = KernelDensity(data)
    assert kde == kde.clone()
    assert kde != KernelDensity(data, KernelType.UNIFORM, bandwidth=kde.bandwidth)
    assert KernelDensity() == KernelDensity()
    kde.set_sample_data(data[:50])
    assert kde.sample_size == 50
    assert not KernelDensity(data, bandwidth=-1.0).parameters_valid
