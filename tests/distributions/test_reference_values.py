"""Published parameter estimates, quantiles and standard errors.

Sources: Hosking & Wallis (1997) for the L-moment fits of the 31-year
series and the wind speeds, Rao & Hamed (2000) for the Harricana River and
the maximum likelihood examples.
"""
import numpy as np
import pytest

from hydrofreq.distributions import (
    EstimationMethod,
    Exponential,
    Gamma,
    GeneralizedExtremeValue,
    GeneralizedLogistic,
    GeneralizedNormal,
    Gumbel,
    LogNormal,
    LogPearsonTypeIII,
    Normal,
    PearsonTypeIII,
    Weibull,
)
from hydrofreq.statistics import aic

MOM = EstimationMethod.METHOD_OF_MOMENTS
LMOM = EstimationMethod.METHOD_OF_LINEAR_MOMENTS
MLE = EstimationMethod.MAXIMUM_LIKELIHOOD


# ------------------------------ L-moments ------------------------------

def test_normal_lmom(wind):
    d = Normal().estimate(wind, LMOM)
    np.testing.assert_allclose(d.parameters, [9.957516, 3.513431], atol=1e-4)


def test_exponential_lmom(sample31):
    d = Exponential().estimate(sample31, LMOM)
    np.testing.assert_allclose(d.parameters, [1372.333, 276.4731], rtol=1e-5)


def test_gumbel_lmom(sample31):
    d = Gumbel().estimate(sample31, LMOM)
    np.testing.assert_allclose(d.parameters, [1533.69, 199.4332], rtol=1e-5)


def test_generalized_logistic_lmom(sample31):
    d = GeneralizedLogistic().estimate(sample31, LMOM)
    np.testing.assert_allclose(d.parameters, [1625.42, 135.8186, -0.1033903], rtol=1e-5, atol=1e-4)


def test_generalized_extreme_value_lmom(sample31):
    d = GeneralizedExtremeValue().estimate(sample31, LMOM)
    np.testing.assert_allclose(d.parameters[:2], [1543.933, 218.1148], rtol=1e-3)
    assert d.kappa == pytest.approx(0.1068473, abs=1e-3)


def test_pearson_type_iii_lmom(sample31):
    d = PearsonTypeIII().estimate(sample31, LMOM)
    assert d.xi == pytest.approx(863.4104, rel=1e-3)
    assert d.alpha == pytest.approx(10.02196, rel=1e-3)
    assert d.beta == pytest.approx(78.36751, rel=1e-3)


def test_generalized_normal_lmom(wind):
    d = GeneralizedNormal().estimate(wind, LMOM)
    np.testing.assert_allclose(d.parameters, [9.7285364, 3.4885029, -0.1307169], atol=1e-3)


def test_gamma_lmom(wind):
    d = Gamma().estimate(wind, LMOM)
    assert d.theta == pytest.approx(1.280143, rel=1e-3)
    assert d.kappa == pytest.approx(7.778442, rel=1e-3)


def test_generalized_normal_cdf():
    d = GeneralizedNormal(9.7, 3.5, -0.1)
    x = np.array([5.0, 10.0, 12.0, 15.0, 18.0])
    expected = np.array([0.07465069, 0.53400804, 0.73775928, 0.92073519, 0.98333335])
    np.testing.assert_allclose(d.cdf(x), expected, atol=1e-6)
    np.testing.assert_allclose(d.inv_cdf(expected), x, rtol=1e-6)


# --------------------------- product moments ---------------------------

def test_pearson_type_iii_mom(harricana):
    d = PearsonTypeIII().estimate(harricana, MOM)
    np.testing.assert_allclose(d.parameters, [191.31739, 47.96161, 0.86055], rtol=1e-3)
    assert d.alpha == pytest.approx(5.40148, rel=1e-3)
    assert d.xi == pytest.approx(79.84941, rel=1e-3)


def test_log_pearson_type_iii_mom_uses_log_moments(harricana):
    d = LogPearsonTypeIII().estimate(harricana, MOM)
    logs = np.log10(harricana)
    assert d.mu == pytest.approx(np.mean(logs))
    assert d.sigma == pytest.approx(np.std(logs, ddof=1))


def test_normal_mom_and_mle(normal_sample):
    mom = Normal().estimate(normal_sample, MOM)
    np.testing.assert_allclose(mom.parameters, [12665, 4710], rtol=1e-2)
    mle = Normal().estimate(normal_sample, MLE)
    assert mle.sigma == pytest.approx(4660, rel=1e-2)


def test_gumbel_mom_and_mle(gumbel_sample):
    mom = Gumbel().estimate(gumbel_sample, MOM)
    np.testing.assert_allclose(mom.parameters, [8074.4, 4441.4], rtol=1e-2)
    mle = Gumbel().estimate(gumbel_sample, MLE)
    np.testing.assert_allclose(mle.parameters, [8049.6, 4478.6], rtol=1e-2)


def test_weibull_mle(weibull_sample):
    d = Weibull().estimate(weibull_sample, MLE)
    np.testing.assert_allclose(d.parameters, [9.589, 1.907], rtol=1e-2)
    assert aic(d.number_of_parameters, d.log_likelihood(weibull_sample)) == pytest.approx(294.5878, rel=2e-2)


def test_generalized_extreme_value_mle_beats_lmom(white_river):
    lmom = GeneralizedExtremeValue().estimate(white_river, LMOM)
    mle = GeneralizedExtremeValue().estimate(white_river, MLE)
    assert mle.log_likelihood(white_river) >= lmom.log_likelihood(white_river)


# ------------------------------ quantiles ------------------------------

@pytest.mark.parametrize(
    "dist, expected",
    [
        (GeneralizedExtremeValue(10849, 5745.6, 0.005), 36977),
        (Weibull(9.589, 1.907), 21.358),
        (Gumbel(8049.6, 4478.6), 28652),
        (GeneralizedLogistic(31892, 9030, -0.05515), 79117),
        (Exponential(27421, 25200), 143471),
        (Normal(12665, 4710), 23624),
        (LogNormal(10.7676, 0.4544, base=np.e), 136611),
    ],
)
def test_quantile_at_99_percent(dist, expected):
    assert dist.inv_cdf(0.99) == pytest.approx(expected, rel=1e-3)


def test_gamma_quantile():
    assert Gamma(1.0 / 0.08833, 16.89937).inv_cdf(0.99) == pytest.approx(315.87, rel=1e-2)


# --------------------------- standard errors ---------------------------

def test_normal_standard_error():
    se = Normal(12665, 4710).quantile_standard_error(0.99, 48, MLE)
    assert se == pytest.approx(1309, rel=1e-2)


def test_gumbel_standard_error():
    se = Gumbel(8049.6, 4478.6).quantile_standard_error(0.99, 53, MLE)
    assert se == pytest.approx(2486.5, rel=1e-2)


def test_pearson_type_iii_standard_error():
    se = PearsonTypeIII(191.31739, 47.96161, 0.86055).quantile_standard_error(0.99, 69, MOM)
    assert se == pytest.approx(27.175, rel=2e-2)


def test_exponential_quantile_gradient():
    np.testing.assert_allclose(Exponential(27421, 25200).quantile_gradient(0.99), [1.0, 4.60517], rtol=1e-6)


def test_standard_error_shrinks_with_sample_size():
    d = GeneralizedExtremeValue(100.0, 10.0, 0.1)
    small = d.quantile_standard_error(0.99, 30, MLE)
    large = d.quantile_standard_error(0.99, 120, MLE)
    assert large == pytest.approx(small / 2.0, rel=1e-6)


def test_quantile_variance_without_closed_form_raises():
    with pytest.raises(NotImplementedError):
        GeneralizedNormal(100.0, 10.0, 0.1).quantile_variance(0.99, 50, LMOM)
