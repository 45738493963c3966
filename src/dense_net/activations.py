import enum
from typing import Union

import numpy as np

ArrayOrScalar = Union[float, np.ndarray]

SIGMOID_SATURATION = 45.0


class Activation(enum.Enum):

    IDENTITY = "identity"
    RELU = "relu"
    SIGMOID = "sigmoid"

    def apply(self, x: ArrayOrScalar) -> ArrayOrScalar:
        z = np.asarray(x, dtype=np.float64)

        if self is Activation.IDENTITY:
            y = z.copy()
        elif self is Activation.RELU:
            y = np.maximum(z, 0.0)
        elif self is Activation.SIGMOID:
            y = _sigmoid(z)
        else:
            raise ValueError(f"Unknown activation {self!r}.")

        return _unwrap(y)

    def derivative(self, x: ArrayOrScalar) -> ArrayOrScalar:
        z = np.asarray(x, dtype=np.float64)

        if self is Activation.IDENTITY:
            dy = np.ones_like(z)
        elif self is Activation.RELU:
            dy = np.where(z > 0.0, 1.0, 0.0)
        elif self is Activation.SIGMOID:
            s = _sigmoid(z)
            dy = s * (1.0 - s)
        else:
            raise ValueError(f"Unknown activation {self!r}.")

        return _unwrap(dy)


def _sigmoid(z: np.ndarray) -> np.ndarray:
    # exp() only sees values inside the saturation bounds.
    clipped = np.clip(z, -SIGMOID_SATURATION, SIGMOID_SATURATION)
    y = 1.0 / (1.0 + np.exp(-clipped))
    y = np.where(z > SIGMOID_SATURATION, 1.0, y)
    y = np.where(z < -SIGMOID_SATURATION, 0.0, y)
    return y


def _unwrap(y: np.ndarray) -> ArrayOrScalar:
    if y.ndim == 0:
        return float(y)
    return y
