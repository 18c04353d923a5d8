import numpy as np
import pytest

from hydrofreq.statistics import aic, bic, rmse


def test_aic_and_bic():
    assert aic(2, -100.0) == pytest.approx(204.0)
    assert bic(50, 2, -100.0) == pytest.approx(2 * np.log(50) + 200.0)


def test_rmse_degrees_of_freedom():
    observed = np.array([1.0, 2.0, 3.0, 4.0])
    modeled = np.array([1.5, 2.0, 2.5, 4.0])
    assert rmse(observed, modeled) == pytest.approx(np.sqrt(0.5 / 4))
    assert rmse(observed, modeled, 2) == pytest.approx(np.sqrt(0.5 / 2))


def test_rmse_rejects_mismatch_and_no_dof():
    with pytest.raises(ValueError):
        rmse([1.0, 2.0], [1.0])
    with pytest.raises(ValueError):
        rmse([1.0, 2.0], [1.0, 2.0], 2)
