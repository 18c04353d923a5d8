# tests/array_backend/test_array_backend_utils.py
import numpy as np
import pytest

from hydrofreq.array_backend import utils as U


def test_ensure_real_scalar_from_python_scalar():
    assert U._ensure_real_scalar(3) == 3
    assert U._ensure_real_scalar(3.5) == 3.5


def test_ensure_real_scalar_from_numpy_scalar_and_0d():
    a = np.float32(2.0)
    assert isinstance(U._ensure_real_scalar(a), float)
    assert U._ensure_real_scalar(np.array(4.0)) == 4.0
    assert U._ensure_real_scalar(np.array([[4.0]])) == 4.0


@pytest.mark.parametrize(
    "non_scalar_input",
    [[1, 2], np.arange(2), np.identity(2)]
)
def test_ensure_real_scalar_rejects_multiple_elements(non_scalar_input):
    with pytest.raises(ValueError):
        U._ensure_real_scalar(non_scalar_input)


def test_ensure_real_scalar_rejects_complex():
    with pytest.raises(ValueError):
        U._ensure_real_scalar(1 + 2j)


def test_as_float_array_flags_scalars():
    values, scalar = U._as_float_array(2)
    assert scalar
    assert values.shape == (1,)

    values, scalar = U._as_float_array([1, 2, 3])
    assert not scalar
    assert values.shape == (3,)

    with pytest.raises(ValueError):
        U._as_float_array(np.array([1 + 1j]))


def test_restore_matches_input_form():
    assert isinstance(U._restore(np.array([1.5]), True), float)
    out = U._restore(np.array([1.0, 2.0]), False)
    assert isinstance(out, np.ndarray)
    assert out.shape == (2,)


def test_as_array_rejects_unconvertible():
    with pytest.raises(TypeError):
        U._as_array("not a number")


def test_ensure_vector_scalar_and_1d_and_2d():
    v0 = U._ensure_vector(5)
    assert v0.shape == (1,)
    v1 = U._ensure_vector([1, 2, 3])
    assert v1.shape == (3,)
    v2 = U._ensure_vector(np.array([[1, 2, 3]]), length=3)
    assert v2.shape == (3,)
    v3 = U._ensure_vector(np.array([[1], [2]]))
    assert v3.shape == (2,)


def test_ensure_vector_length_check():
    with pytest.raises(ValueError):
        U._ensure_vector([1, 2, 3], length=2)


def test_ensure_vector_rejects_matrix():
    with pytest.raises(ValueError):
        U._ensure_vector(np.ones((2, 2)))


def test_ensure_vector_copies_by_default():
    x = np.array([1.0, 2.0])
    v = U._ensure_vector(x)
    v[0] = 10.0
    assert x[0] == 1.0


@pytest.mark.parametrize("bad", [-0.1, 1.1, np.nan, [0.5, 2.0]])
def test_ensure_probabilities_rejects_out_of_range(bad):
    with pytest.raises(ValueError):
        U._ensure_probabilities(bad)


def test_ensure_probabilities_accepts_bounds():
    values, scalar = U._ensure_probabilities([0.0, 0.5, 1.0])
    assert not scalar
    np.testing.assert_array_equal(values, [0.0, 0.5, 1.0])


def test_as_sample_requirements():
    np.testing.assert_array_equal(U._as_sample([3, 1, 2]), [3.0, 1.0, 2.0])
    with pytest.raises(ValueError):
        U._as_sample([1.0])
    with pytest.raises(ValueError):
        U._as_sample([1.0, np.nan, 2.0])
    with pytest.raises(ValueError):
        U._as_sample([1.0, 2.0, 3.0], min_size=4)
