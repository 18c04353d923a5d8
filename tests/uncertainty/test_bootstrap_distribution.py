import numpy as np
import pytest

from hydrofreq.distributions import Gumbel, Normal
from hydrofreq.uncertainty import BootstrapDistribution


# ------------------------------ Helpers ------------------------------

def _pop_cov(X: np.ndarray, w: np.ndarray | None = None) -> np.ndarray:
    """Weighted population covariance: sum w (x - m)(x - m)^T."""
    X = np.asarray(X, dtype=float)
    if X.ndim == 1:
        X = X.reshape(-1, 1)
    n, d = X.shape
    if w is None:
        w = np.full(n, 1.0 / n, dtype=float)
    else:
        w = np.asarray(w, dtype=float).reshape(-1)
        w = w / w.sum()
    m = (w[:, None] * X).sum(axis=0)
    diff = X - m
    return diff.T @ (diff * w[:, None])


# ------------------------------- Basics --------------------------------

def test_init_rejects_bad_weights_shape_and_values():
    Theta = np.array([[0.0], [1.0], [2.0]], dtype=float)

    # Wrong shape
    with pytest.raises(ValueError):
        BootstrapDistribution(Theta, weights=np.array([0.2, 0.8]))

    # Negative weights
    with pytest.raises(ValueError):
        BootstrapDistribution(Theta, weights=np.array([0.5, -0.2, 0.7]))

    # Sum to zero
    with pytest.raises(ValueError):
        BootstrapDistribution(Theta, weights=np.array([0.0, 0.0, 0.0]))


def test_rejects_three_dimensional_replicates():
    with pytest.raises(ValueError):
        BootstrapDistribution(np.zeros((2, 2, 2)))


def test_properties_and_summaries_univariate():
    Theta = np.array([1.0, 3.0, 5.0], dtype=float)  # (B,) -> (B,1)
    w = np.array([0.2, 0.3, 0.5], dtype=float)
    boot = BootstrapDistribution(Theta, weights=w, rng=np.random.default_rng(0))

    assert boot.n == 3
    assert boot.d == 1
    assert boot.replicates.shape == (3, 1)
    assert boot.weights.shape == (3,)

    m_expected = (w * Theta).sum()
    cov_expected = _pop_cov(Theta, w)

    assert np.allclose(boot.mean()[0], m_expected, atol=1e-12)
    assert np.allclose(boot.cov()[0, 0], cov_expected[0, 0], atol=1e-12)
    assert np.allclose(boot.var()[0], cov_expected[0, 0], atol=1e-12)
    assert np.allclose(boot.std()[0], np.sqrt(cov_expected[0, 0]), atol=1e-12)


def test_mean_and_cov_of_quantile_replicates():
    # two quantiles per replicate
    Theta = np.array([[100.0, 150.0],
                      [110.0, 170.0],
                      [120.0, 160.0]], dtype=float)
    w = np.array([0.2, 0.3, 0.5], dtype=float)
    boot = BootstrapDistribution(Theta, weights=w, rng=np.random.default_rng(1))

    assert np.allclose(boot.mean(), (w[:, None] * Theta).sum(axis=0), atol=1e-12)
    assert np.allclose(boot.cov(), _pop_cov(Theta, w), atol=1e-12)


# ------------------------------- Sampling -------------------------------

def test_sample_shape_and_weight_bias():
    Theta = np.array([[-1.0, 0.0],
                      [ 1.0, 0.0]], dtype=float)
    w = np.array([0.9, 0.1], dtype=float)
    boot = BootstrapDistribution(Theta, weights=w, rng=np.random.default_rng(42))

    n = 40_000
    draws = boot.sample(n)
    prop_pos = (draws[:, 0] > 0).mean()

    assert draws.shape == (n, 2)
    assert abs(prop_pos - 0.1) < 0.02


def test_sample_without_replacement_guard():
    Theta = np.array([[0.0], [1.0], [2.0]], dtype=float)
    boot = BootstrapDistribution(Theta, rng=np.random.default_rng(0))
    with pytest.raises(ValueError):
        boot.sample(4, replace=False)


def test_rvs_alias_matches_sample():
    Theta = np.array([[10.0], [20.0], [30.0]], dtype=float)
    boot = BootstrapDistribution(Theta, rng=np.random.default_rng(123))
    assert boot.sample(5).shape == boot.rvs(5).shape == (5, 1)


# ----------------------------- expectation() -----------------------------

def test_expectation_returns_normal():
    Theta = np.array([[0.0, 1.0],
                      [2.0, 3.0],
                      [4.0, 5.0]], dtype=float)
    w = np.array([0.2, 0.3, 0.5], dtype=float)
    boot = BootstrapDistribution(Theta, weights=w, rng=np.random.default_rng(7))

    n_mc = 4096
    out = boot.expectation(lambda thetas: thetas[:, 0], n_mc=n_mc)
    assert isinstance(out, Normal)

    y = Theta[:, 0]
    m = float((w * y).sum())
    var = float((w * (y - m) ** 2).sum())
    assert np.isclose(out.mu, m, atol=1e-12)
    assert np.isclose(out.sigma, np.sqrt(var) / np.sqrt(n_mc), atol=1e-12)


def test_expectation_rejects_vector_valued_function():
    boot = BootstrapDistribution(np.ones((3, 2)))
    with pytest.raises(ValueError):
        boot.expectation(lambda thetas: thetas)


# --------------------------- constructors ---------------------------

def test_from_data_mean_matches_sample_mean():
    rng = np.random.default_rng(123)
    data = rng.normal(loc=2.5, scale=1.0, size=200)

    B = 5000
    boot = BootstrapDistribution.from_data(data, stat_fn=np.mean, B=B, rng=np.random.default_rng(999))

    assert boot.replicates.shape == (B, 1)
    assert abs(boot.mean()[0] - float(np.mean(data))) < 0.05


def test_from_data_quantile_statistic(harricana):
    def stat(x):
        d = Gumbel().estimate(x, "method_of_linear_moments")
        return d.inv_cdf(np.array([0.5, 0.99]))

    boot = BootstrapDistribution.from_data(harricana, stat, B=200, rng=np.random.default_rng(5))
    assert boot.replicates.shape == (200, 2)
    assert np.all(boot.mean()[1] > boot.mean()[0])


def test_from_distribution():
    boot = BootstrapDistribution.from_distribution(Normal(10.0, 2.0), seed=3, num_samples=4000)
    assert boot.n == 4000
    assert boot.mean()[0] == pytest.approx(10.0, abs=0.15)


# ------------------------- smooth summaries -------------------------

def test_empirical_summary_of_replicates():
    Theta = np.array([[3.0, 30.0], [1.0, np.nan], [2.0, 20.0], [4.0, 40.0]])
    boot = BootstrapDistribution(Theta)
    first = boot.empirical()
    np.testing.assert_array_equal(first.x_values, [1.0, 2.0, 3.0, 4.0])
    np.testing.assert_allclose(first.p_values, [0.125, 0.375, 0.625, 0.875])
    second = boot.empirical(1)
    np.testing.assert_array_equal(second.x_values, [20.0, 30.0, 40.0])
    assert second.median() == pytest.approx(30.0)


def test_empirical_summary_uses_weights():
    boot = BootstrapDistribution(np.array([2.0, 1.0, 3.0]), weights=np.array([0.5, 0.25, 0.25]))
    d = boot.empirical()
    np.testing.assert_allclose(d.p_values, [0.125, 0.5, 0.875])


def test_kernel_density_summary_of_replicates():
    boot = BootstrapDistribution.from_distribution(Normal(10.0, 2.0), seed=3, num_samples=500)
    kde = boot.kernel_density()
    assert kde.sample_size == 500
    assert kde.mean() == pytest.approx(boot.mean()[0])
    assert kde.inv_cdf(0.5) == pytest.approx(10.0, abs=0.3)
    with pytest.raises(ValueError):
        BootstrapDistribution(np.arange(3.0), weights=np.array([0.2, 0.3, 0.5])).kernel_density()
