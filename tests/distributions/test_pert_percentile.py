import numpy as np
import pytest
from scipy.integrate import trapezoid

from hydrofreq.distributions import (
    EstimationMethod,
    Pert,
    PertPercentile,
    PertPercentileZ,
    create_distribution,
)
from hydrofreq.exceptions import EstimationError

LEVELS = np.array([0.05, 0.5, 0.95])


@pytest.mark.parametrize("percentiles", [(0.05, 0.5, 0.95), (10.0, 20.0, 50.0), (-3.0, 4.0, 5.0)])
def test_quantiles_reproduce_percentiles(percentiles):
    d = PertPercentile(*percentiles)
    width = percentiles[2] - percentiles[0]
    np.testing.assert_allclose(d.inv_cdf(LEVELS), percentiles, atol=0.01 * width)
    assert d.minimum < percentiles[0]
    assert d.maximum > percentiles[2]


def test_skewed_percentiles_give_skewed_distribution():
    d = PertPercentile(10.0, 20.0, 50.0)
    assert d.skewness() > 0.0
    assert d.mean() > d.median()
    p = np.array([0.01, 0.3, 0.99])
    np.testing.assert_allclose(d.cdf(d.inv_cdf(p)), p, atol=1e-8)


def test_to_pert_uses_fitted_bounds():
    d = PertPercentile(10.0, 20.0, 50.0)
    pert = d.to_pert()
    assert isinstance(pert, Pert)
    assert pert.min == pytest.approx(d.minimum)
    assert pert.max == pytest.approx(d.maximum)


def test_percentile_validation():
    assert not PertPercentile(5.0, 1.0, 10.0).parameters_valid
    assert not PertPercentile(5.0, 5.0, 5.0).parameters_valid
    assert np.isnan(PertPercentile(10.0, 5.0, 1.0).mean())


def test_percentile_solution_is_refreshed_on_assignment():
    d = PertPercentile(10.0, 20.0, 50.0)
    first = d.inv_cdf(0.95)
    d.ninety_fifth = 80.0
    assert d.inv_cdf(0.95) == pytest.approx(80.0, abs=0.7)
    assert d.inv_cdf(0.95) > first


def test_estimate_from_sample_percentiles():
    x = np.linspace(0.0, 100.0, 201)
    d = PertPercentile().estimate(x, EstimationMethod.METHOD_OF_PERCENTILES)
    np.testing.assert_allclose(d.parameters, [5.0, 50.0, 95.0])
    with pytest.raises(NotImplementedError):
        d.estimate(x, EstimationMethod.METHOD_OF_MOMENTS)


def test_z_variant_reproduces_probability_percentiles():
    d = PertPercentileZ(0.01, 0.1, 0.5)
    np.testing.assert_allclose(d.inv_cdf(LEVELS), [0.01, 0.1, 0.5], rtol=0.02)
    assert 0.0 < d.minimum < 0.01
    assert 0.5 < d.maximum < 1.0
    p = np.array([0.2, 0.5, 0.8])
    np.testing.assert_allclose(d.cdf(d.inv_cdf(p)), p, atol=1e-8)


def test_z_variant_density_integrates_to_one():
    d = PertPercentileZ(0.01, 0.1, 0.5)
    x = np.asarray(d.inv_cdf(np.linspace(0.001, 0.999, 4001)))
    area = trapezoid(d.density(x), x)
    assert area == pytest.approx(0.998, abs=2e-3)


def test_z_variant_validation_and_estimation():
    assert not PertPercentileZ(0.0, 0.5, 0.9).parameters_valid
    assert not PertPercentileZ(0.1, 0.5, 1.0).parameters_valid
    with pytest.raises(EstimationError):
        PertPercentileZ().estimate(np.linspace(0.0, 10.0, 50), EstimationMethod.METHOD_OF_PERCENTILES)


def test_factory_names():
    assert isinstance(create_distribution("PERT-Percentile"), PertPercentile)
    assert isinstance(create_distribution("PERT-% Z"), PertPercentileZ)
