import numpy as np
import pytest

from dense_net.loss import Cost


def test_quadratic_scalar_cost():
    a = np.array([0.25, 1.0, 0.4])
    expected = np.array([0.2, 1.5, 0.5])
    assert Cost.QUADRATIC.scalar_cost(a, expected) == pytest.approx(0.13125)


def test_quadratic_gradient_is_difference():
    a = np.array([0.25, 1.0, 0.4])
    expected = np.array([0.2, 1.5, 0.5])
    np.testing.assert_array_equal(Cost.QUADRATIC.gradient(a, expected),
                                  a - expected)


def test_batch_cost_is_row_mean():
    y_pred = np.array([[0.25, 1.0, 0.4], [0.0, 0.0, 0.0]])
    y_true = np.array([[0.2, 1.5, 0.5], [1.0, 0.0, 0.0]])
    assert Cost.QUADRATIC.cost(y_pred, y_true) == pytest.approx(
        (0.13125 + 0.5) / 2)


def test_cost_derivative_matches_rowwise_gradient():
    rng = np.random.default_rng(0)
    y_pred = rng.normal(size=(5, 3))
    y_true = rng.normal(size=(5, 3))

    dC_da = Cost.QUADRATIC.cost_derivative(y_pred, y_true)

    assert dC_da.shape == y_pred.shape
    for i in range(5):
        np.testing.assert_array_equal(
            dC_da[i], Cost.QUADRATIC.gradient(y_pred[i], y_true[i]))


def test_shape_mismatch_raises():
    with pytest.raises(ValueError):
        Cost.QUADRATIC.cost(np.zeros((2, 3)), np.zeros((2, 2)))

    with pytest.raises(ValueError):
        Cost.QUADRATIC.cost_derivative(np.zeros((2, 1)), np.zeros((3, 1)))
