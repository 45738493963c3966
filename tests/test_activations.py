import numpy as np
import pytest

from dense_net.activations import Activation


def test_sigmoid_known_values():
    sigmoid = Activation.SIGMOID
    assert sigmoid.apply(0) == 0.5
    assert sigmoid.apply(1) == pytest.approx(0.7310585786300049)
    assert sigmoid.apply(-1) == pytest.approx(0.2689414213699951)
    assert sigmoid.apply(100) == 1.0
    assert sigmoid.apply(-100) == 0.0
    assert sigmoid.derivative(0) == 0.25


def test_sigmoid_saturates_past_bounds():
    sigmoid = Activation.SIGMOID
    assert sigmoid.apply(45.5) == 1.0
    assert sigmoid.apply(-45.5) == 0.0
    assert sigmoid.derivative(1000.0) == 0.0
    assert sigmoid.derivative(-1000.0) == 0.0


def test_relu_values():
    relu = Activation.RELU
    assert relu.apply(4) == 4
    assert relu.apply(-4) == 0
    assert relu.derivative(4) == 1
    assert relu.derivative(-4) == 0
    assert relu.derivative(0) == 0


def test_identity_values():
    identity = Activation.IDENTITY
    assert identity.apply(-3.5) == -3.5
    assert identity.derivative(-3.5) == 1.0


@pytest.mark.parametrize("activation", list(Activation))
def test_finite_for_finite_inputs(activation):
    x = np.array([-1e300, -1e3, -45.0, -44.9, 0.0, 44.9, 45.0, 1e3, 1e300])
    assert np.all(np.isfinite(activation.apply(x)))
    assert np.all(np.isfinite(activation.derivative(x)))


@pytest.mark.parametrize("activation", list(Activation))
def test_elementwise_over_any_rank(activation):
    x = np.linspace(-3.0, 3.0, 24).reshape(2, 3, 4)

    y = activation.apply(x)
    dy = activation.derivative(x)

    assert y.shape == x.shape
    assert dy.shape == x.shape
    for index in np.ndindex(x.shape):
        assert y[index] == pytest.approx(activation.apply(float(x[index])))
        assert dy[index] == pytest.approx(
            activation.derivative(float(x[index])))


def test_scalar_input_returns_float():
    assert isinstance(Activation.SIGMOID.apply(0.3), float)
    assert isinstance(Activation.RELU.derivative(2), float)
