import numpy as np
import pytest
from scipy import stats

from hydrofreq.statistics import jackknife, linear_moments, percentile, probability_weighted_moments, product_moments


def test_product_moments_harricana(harricana):
    pm = product_moments(harricana)
    np.testing.assert_allclose(pm[:3], [191.31739, 47.96161, 0.86055], rtol=1e-3)
    assert pm[3] == pytest.approx(stats.kurtosis(harricana, fisher=False, bias=False))


def test_product_moments_small_sample():
    pm = product_moments([1.0, 2.0])
    assert pm[0] == 1.5
    assert np.isnan(pm[2]) and np.isnan(pm[3])


def test_linear_moments_sample31(sample31):
    lm = linear_moments(sample31)
    assert lm[0] == pytest.approx(1648.806, rel=1e-6)
    assert lm[1] == pytest.approx(138.2366, rel=1e-5)
    assert lm[2] == pytest.approx(0.1033903, abs=1e-5)


def test_linear_moments_are_location_scale_equivariant(sample31):
    lm = linear_moments(sample31)
    shifted = linear_moments(3.0 * sample31 + 10.0)
    np.testing.assert_allclose(shifted, [3.0 * lm[0] + 10.0, 3.0 * lm[1], lm[2], lm[3]], rtol=1e-10)


def test_linear_moments_need_four_values():
    with pytest.raises(ValueError):
        linear_moments([1.0, 2.0, 3.0])


def test_probability_weighted_moments_b0_is_mean(sample31):
    b = probability_weighted_moments(sample31, order=3)
    assert b.shape == (3,)
    assert b[0] == pytest.approx(np.mean(sample31))


def test_percentile_interpolates_and_filters():
    x = [4.0, np.nan, 1.0, 3.0, 2.0, np.inf]
    assert percentile(x, 0.5) == pytest.approx(2.5)
    np.testing.assert_allclose(percentile(x, [0.0, 1.0]), [1.0, 4.0])
    assert np.isnan(percentile([np.nan], 0.5))
    assert np.isnan(percentile([], [0.1, 0.9])).all()


def test_jackknife_of_mean():
    x = np.array([1.0, 2.0, 3.0, 6.0])
    values = jackknife(x, np.mean)
    np.testing.assert_allclose(values, [11 / 3, 10 / 3, 3.0, 2.0])
