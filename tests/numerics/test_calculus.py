import numpy as np
import pytest

from hydrofreq.config import IntegrationSettings
from hydrofreq.numerics.differentiation import derivative, gradient, hessian, jacobian
from hydrofreq.numerics.integration import integrate, unit_gauss_legendre


# ---------------------------- differentiation ----------------------------

def test_derivative():
    assert derivative(np.sin, 0.3) == pytest.approx(np.cos(0.3), rel=1e-8)


def test_gradient_of_quadratic():
    f = lambda x: x[0] ** 2 + 3.0 * x[0] * x[1] + np.exp(x[1])
    x = np.array([1.5, -0.5])
    expected = [2 * x[0] + 3 * x[1], 3 * x[0] + np.exp(x[1])]
    np.testing.assert_allclose(gradient(f, x), expected, rtol=1e-7)


def test_jacobian_shape_and_values():
    f = lambda x: np.array([x[0] * x[1], x[0] + 2.0 * x[1], np.sin(x[0])])
    J = jacobian(f, np.array([2.0, 3.0]))
    assert J.shape == (3, 2)
    np.testing.assert_allclose(J, [[3.0, 2.0], [1.0, 2.0], [np.cos(2.0), 0.0]], atol=1e-7)


def test_hessian_is_symmetric():
    f = lambda x: x[0] ** 2 * x[1] + x[1] ** 3
    H = hessian(f, np.array([1.0, 2.0]))
    np.testing.assert_allclose(H, [[4.0, 2.0], [2.0, 12.0]], rtol=1e-4)
    np.testing.assert_array_equal(H, H.T)


# ------------------------------ integration ------------------------------

def test_integrate_finite_and_infinite():
    assert integrate(lambda x: x ** 2, 0.0, 3.0) == pytest.approx(9.0)
    assert integrate(lambda x: np.exp(-x), 0.0, np.inf) == pytest.approx(1.0)
    assert integrate(lambda x: 1.0, 2.0, 2.0) == 0.0


def test_integrate_with_break_points():
    f = lambda x: np.exp(-1e4 * (x - 0.7) ** 2)
    value = integrate(f, 0.0, 10.0, IntegrationSettings(limit=100), points=[0.7, 20.0])
    assert value == pytest.approx(np.sqrt(np.pi / 1e4), rel=1e-6)


def test_unit_gauss_legendre():
    u, w = unit_gauss_legendre(20)
    assert np.all((u > 0) & (u < 1))
    assert w.sum() == pytest.approx(1.0)
    assert np.sum(w * u ** 5) == pytest.approx(1.0 / 6.0)
    # callers receive copies of the cached nodes
    u[:] = 0.0
    assert unit_gauss_legendre(20)[0].min() > 0.0
