import numpy as np
import pytest

from hydrofreq.numerics.special import standard_z
from hydrofreq.uncertainty import intervals


@pytest.fixture
def ranks():
    return np.arange(1.0, 100.0).reshape(-1, 1)


def test_percentile_interval(ranks):
    ci = intervals.percentile_interval(ranks, alpha=0.1)
    assert ci.shape == (1, 2)
    np.testing.assert_allclose(ci[0], np.quantile(ranks[:, 0], [0.05, 0.95]))


def test_percentile_interval_skips_failed_replicates(ranks):
    R = np.vstack([ranks, np.full((5, 1), np.nan)])
    np.testing.assert_allclose(intervals.percentile_interval(R), intervals.percentile_interval(ranks))


def test_normal_interval_is_symmetric_on_cube_root_scale():
    rng = np.random.default_rng(0)
    R = rng.lognormal(5.0, 0.2, size=(500, 2))
    theta = np.median(R, axis=0)
    ci = intervals.normal_interval(theta, R, alpha=0.05)
    lo, hi = np.cbrt(ci[:, 0]), np.cbrt(ci[:, 1])
    np.testing.assert_allclose((lo + hi) / 2.0, np.cbrt(theta))
    half = standard_z(0.975) * np.std(np.cbrt(R), axis=0, ddof=1)
    np.testing.assert_allclose((hi - lo) / 2.0, half)


def test_bias_correction_is_zero_at_the_median(ranks):
    assert intervals.bias_correction(50.0, ranks[:, 0]) == pytest.approx(0.0, abs=1e-12)
    assert intervals.bias_correction(80.0, ranks[:, 0]) > 0.0


def test_bias_corrected_reduces_to_percentile_without_bias(ranks):
    np.testing.assert_allclose(
        intervals.bias_corrected_interval([50.0], ranks), intervals.percentile_interval(ranks)
    )


def test_bca_without_acceleration_is_bias_corrected(ranks):
    np.testing.assert_allclose(
        intervals.bca_interval([70.0], ranks, [0.0]), intervals.bias_corrected_interval([70.0], ranks)
    )


def test_acceleration_shifts_the_interval_up(ranks):
    plain = intervals.bca_interval([50.0], ranks, [0.0])
    accelerated = intervals.bca_interval([50.0], ranks, [0.1])
    assert accelerated[0, 0] > plain[0, 0]
    assert accelerated[0, 1] > plain[0, 1]


def test_acceleration():
    # d = θ̂ - θ₍ⱼ₎ = [-1, -1, 2]: Σd² = 6, Σd³ = 6
    J = np.array([[1.0, 5.0], [1.0, 5.0], [-2.0, 5.0], [np.nan, np.nan]])
    a = intervals.acceleration([0.0, 5.0], J)
    np.testing.assert_allclose(a, [1.0 / (6.0 ** 1.5), 0.0])


def test_bootstrap_t_interval():
    rng = np.random.default_rng(1)
    theta = np.array([1000.0])
    t = rng.standard_normal(400)
    R = ((np.cbrt(theta) + 0.5 * t) ** 3).reshape(-1, 1)
    S = np.full_like(R, 0.5)
    ci = intervals.bootstrap_t_interval(theta, R, S, alpha=0.1)
    t_lo, t_hi = np.quantile(t, [0.05, 0.95])
    se = np.std(np.cbrt(R[:, 0]), ddof=1)
    expected = [(np.cbrt(1000.0) - se * t_hi) ** 3, (np.cbrt(1000.0) - se * t_lo) ** 3]
    np.testing.assert_allclose(ci[0], expected, rtol=1e-10)
    assert ci[0, 0] < 1000.0 < ci[0, 1]


def test_bootstrap_t_shape_mismatch():
    with pytest.raises(ValueError):
        intervals.bootstrap_t_interval([1.0], np.ones((10, 1)), np.ones((9, 1)))


@pytest.mark.parametrize("alpha", [0.0, 1.0, -0.1, 1.5])
def test_alpha_must_be_inside_unit_interval(ranks, alpha):
    with pytest.raises(ValueError):
        intervals.percentile_interval(ranks, alpha)
    with pytest.raises(ValueError):
        intervals.normal_interval([50.0], ranks, alpha)
