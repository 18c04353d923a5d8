import logging

import numpy as np
import pytest

from hydrofreq.config import BootstrapSettings
from hydrofreq.distributions import EstimationMethod, Gumbel, Normal
from hydrofreq.statistics import aic
from hydrofreq.uncertainty import (
    BootstrapAnalysis,
    BootstrapDistribution,
    IntervalMethod,
    UncertaintyAnalysisResults,
)

LMOM = EstimationMethod.METHOD_OF_LINEAR_MOMENTS
PROBABILITIES = np.array([0.5, 0.9, 0.99])


@pytest.fixture
def settings():
    return BootstrapSettings(replications=100, seed=2024)


@pytest.fixture
def analysis(settings):
    return BootstrapAnalysis(Gumbel(100.0, 20.0), LMOM, 30, settings)


# ---- construction ----

def test_rejects_small_samples(settings):
    with pytest.raises(ValueError):
        BootstrapAnalysis(Gumbel(), LMOM, 9, settings)


def test_rejects_unsupported_method(settings):
    with pytest.raises(NotImplementedError):
        BootstrapAnalysis(Gumbel(), EstimationMethod.METHOD_OF_PERCENTILES, 30, settings)


def test_nonparametric_needs_sample(settings):
    with pytest.raises(ValueError):
        BootstrapAnalysis(Gumbel(), LMOM, 30, settings, parametric=False)


def test_parent_is_copied(settings):
    parent = Gumbel(100.0, 20.0)
    a = BootstrapAnalysis(parent, LMOM, 30, settings)
    parent.xi = 0.0
    assert a.distribution.xi == 100.0


def test_default_settings():
    a = BootstrapAnalysis(Normal(), LMOM, 20)
    assert a.replications == 10000
    assert a.settings.alpha == 0.1


# ---- replicates ----

def test_replicates_are_reproducible(settings):
    first = BootstrapAnalysis(Gumbel(100.0, 20.0), LMOM, 30, settings).parameters()
    second = BootstrapAnalysis(Gumbel(100.0, 20.0), LMOM, 30, settings).parameters()
    np.testing.assert_array_equal(first, second)
    assert first.shape == (100, 2)
    assert np.all(np.isfinite(first))


def test_threaded_run_matches_serial():
    serial = BootstrapAnalysis(Gumbel(100.0, 20.0), LMOM, 30, BootstrapSettings(replications=100, max_workers=None))
    threaded = BootstrapAnalysis(Gumbel(100.0, 20.0), LMOM, 30, BootstrapSettings(replications=100, max_workers=4))
    np.testing.assert_array_equal(serial.parameters(), threaded.parameters())


def test_different_seeds_differ():
    a = BootstrapAnalysis(Gumbel(100.0, 20.0), LMOM, 30, BootstrapSettings(replications=100, seed=1))
    b = BootstrapAnalysis(Gumbel(100.0, 20.0), LMOM, 30, BootstrapSettings(replications=100, seed=2))
    assert not np.array_equal(a.parameters(), b.parameters())


def test_replicate_parameters_scatter_around_parent(analysis):
    params = analysis.parameters()
    np.testing.assert_allclose(params.mean(axis=0), [100.0, 20.0], rtol=0.05)


def test_replicate_sample_statistics(analysis):
    pm = analysis.product_moments()
    lm = analysis.linear_moments()
    assert pm.shape == lm.shape == (100, 4)
    # the Gumbel mean is ξ + 0.5772 α
    assert pm[:, 0].mean() == pytest.approx(100.0 + 0.5772 * 20.0, rel=0.03)
    assert lm[:, 0].mean() == pytest.approx(pm[:, 0].mean())


def test_run_is_logged(analysis, caplog):
    with caplog.at_level(logging.INFO, logger="hydrofreq.uncertainty.bootstrap"):
        analysis.distributions()
    assert "100 of 100 replicates valid" in caplog.text


def test_quantiles_and_probabilities(analysis):
    Q = analysis.quantiles(PROBABILITIES)
    assert Q.shape == (100, 3)
    assert np.all(np.diff(Q, axis=1) > 0.0)
    P = analysis.probabilities([120.0, 150.0])
    assert P.shape == (100, 2)
    assert np.all((P >= 0.0) & (P <= 1.0))


def test_quantile_distribution(analysis):
    boot = analysis.quantile_distribution(PROBABILITIES)
    assert isinstance(boot, BootstrapDistribution)
    assert boot.n == 100
    assert boot.d == 3


def test_expected_probabilities(analysis):
    x = np.array([180.0, 100.0, 140.0])
    ep = analysis.expected_probabilities(x)
    assert ep.shape == (3,)
    assert np.all(np.diff(ep) > 0.0)
    assert ep[0] == pytest.approx(float(analysis.distribution.cdf(100.0)), abs=0.05)


def test_compute_min_max_quantiles(analysis):
    lo, hi = analysis.compute_min_max_quantiles(0.01, 0.99)
    Q = analysis.quantiles([0.01, 0.99])
    assert lo == Q[:, 0].min()
    assert hi == Q[:, 1].max()


def test_distributions_from_parameters(analysis):
    ds = analysis.distributions_from_parameters([[100.0, 20.0], [90.0, -1.0], [110.0, 25.0]])
    assert ds[0] == Gumbel(100.0, 20.0)
    assert ds[1] is None
    assert isinstance(ds[2], Gumbel)
    Q = analysis.quantiles([0.5], ds)
    assert np.isnan(Q[1, 0])
    assert Q[2, 0] == pytest.approx(float(Gumbel(110.0, 25.0).inv_cdf(0.5)))


# ---- intervals and summary ----

def test_estimate_percentile(analysis):
    result = analysis.estimate(PROBABILITIES)
    assert isinstance(result, UncertaintyAnalysisResults)
    assert result.alpha == 0.1
    assert result.mode_curve.shape == result.mean_curve.shape == (3,)
    assert result.confidence_intervals.shape == (3, 2)
    assert result.parameter_sets.shape == (100, 2)
    np.testing.assert_allclose(result.mode_curve, analysis.distribution.inv_cdf(PROBABILITIES))
    assert np.all(result.lower_curve < result.mode_curve)
    assert np.all(result.mode_curve < result.upper_curve)
    assert np.all(np.diff(result.mean_curve) > 0.0)
    assert result.mean_curve[0] == pytest.approx(result.mode_curve[0], rel=0.05)


def test_estimate_is_reproducible(settings):
    a = BootstrapAnalysis(Gumbel(100.0, 20.0), LMOM, 30, settings).estimate(PROBABILITIES)
    b = BootstrapAnalysis(Gumbel(100.0, 20.0), LMOM, 30, settings).estimate(PROBABILITIES)
    np.testing.assert_array_equal(a.confidence_intervals, b.confidence_intervals)
    np.testing.assert_array_equal(a.mean_curve, b.mean_curve)


@pytest.mark.parametrize("interval", [IntervalMethod.NORMAL, IntervalMethod.BIAS_CORRECTED, "percentile"])
def test_estimate_interval_methods(analysis, interval):
    result = analysis.estimate(PROBABILITIES, alpha=0.2, interval=interval, record_parameter_sets=False)
    assert result.alpha == 0.2
    assert result.parameter_sets is None
    ci = result.confidence_intervals
    assert np.all(ci[:, 0] < ci[:, 1])
    assert np.all(np.diff(ci, axis=0) > 0.0)


def test_narrower_interval_at_larger_alpha(analysis):
    wide = analysis.percentile_quantile_ci(PROBABILITIES, alpha=0.05)
    narrow = analysis.percentile_quantile_ci(PROBABILITIES, alpha=0.3)
    assert np.all(wide[:, 0] <= narrow[:, 0])
    assert np.all(wide[:, 1] >= narrow[:, 1])


def test_bca_needs_sample(analysis):
    with pytest.raises(ValueError):
        analysis.bca_quantile_ci(PROBABILITIES)


def test_bca_from_sample(harricana, settings):
    analysis = BootstrapAnalysis.from_sample(harricana, Gumbel(), LMOM, settings)
    assert analysis.sample_size == harricana.size
    np.testing.assert_array_equal(analysis.sample, harricana)
    ci = analysis.estimate(PROBABILITIES, interval=IntervalMethod.BCA).confidence_intervals
    assert ci.shape == (3, 2)
    assert np.all(ci[:, 0] < ci[:, 1])


def test_bca_with_new_sample_refits_parent(analysis, harricana):
    ci = analysis.bca_quantile_ci(PROBABILITIES, sample=harricana)
    assert analysis.sample_size == harricana.size
    assert analysis.distribution == Gumbel().estimate(harricana, LMOM)
    assert np.all(ci[:, 0] < ci[:, 1])


def test_bootstrap_t(harricana, settings):
    analysis = BootstrapAnalysis.from_sample(harricana, Gumbel(), LMOM, settings)
    ci = analysis.bootstrap_t_quantile_ci(PROBABILITIES)
    assert ci.shape == (3, 2)
    assert np.all(np.isfinite(ci))
    assert np.all(ci[:, 0] < analysis.distribution.inv_cdf(PROBABILITIES))
    assert np.all(analysis.distribution.inv_cdf(PROBABILITIES) < ci[:, 1])


def test_nonparametric_resamples_observations(harricana, settings):
    analysis = BootstrapAnalysis.from_sample(harricana, Normal(), LMOM, settings, parametric=False)
    assert not analysis.parametric
    params = analysis.parameters()
    assert np.all(np.isfinite(params))
    assert params[:, 0].mean() == pytest.approx(np.mean(harricana), rel=0.03)


def test_goodness_of_fit(harricana, settings):
    analysis = BootstrapAnalysis.from_sample(harricana, Gumbel(), LMOM, settings)
    result = analysis.estimate(PROBABILITIES)
    assert np.isnan(result.aic)
    result.goodness_of_fit(harricana)
    parent = analysis.distribution
    assert result.aic == pytest.approx(aic(2, parent.log_likelihood(harricana)))
    assert result.bic > result.aic
    assert 0.0 < result.rmse < np.std(harricana)


# ---- coverage ----

def test_intervals_cover_the_true_quantile_near_nominal_rate():
    truth = Normal(100.0, 15.0)
    q99 = truth.inv_cdf(0.99)
    trials = 150
    covered = {"percentile": 0, "normal": 0}
    for trial in range(trials):
        x = truth.sample(30, seed=1000 + trial)
        a = BootstrapAnalysis.from_sample(
            x, Normal(), EstimationMethod.METHOD_OF_MOMENTS, BootstrapSettings(replications=300, seed=trial)
        )
        lo, hi = a.percentile_quantile_ci([0.99], alpha=0.1)[0]
        covered["percentile"] += lo <= q99 <= hi
        lo, hi = a.normal_quantile_ci([0.99], alpha=0.1)[0]
        covered["normal"] += lo <= q99 <= hi
    for name, hits in covered.items():
        # nominal 0.9; small-sample bootstrap intervals run a little narrow
        assert 0.75 <= hits / trials <= 0.98, name
