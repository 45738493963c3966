import logging
from typing import Dict, Optional

import numpy as np

from dense_net.activations import Activation
from dense_net.initializers import Initializer, RandomNormal, ScaledNormal

logger = logging.getLogger(__name__)


class Dense:

    def __init__(self,
                 D_in: int,
                 D_out: int,
                 activation: Activation = Activation.SIGMOID,
                 W_initializer: Optional[Initializer] = None,
                 b_initializer: Optional[Initializer] = None,
                 name: Optional[str] = None) -> None:
        if D_in <= 0:
            raise ValueError(
                f"Input dimension (D_in) must be positive, got {D_in}.")

        if D_out <= 0:
            raise ValueError(
                f"Output dimension (D_out) must be positive, got {D_out}.")

        self.name = name or self.__class__.__name__
        self.D_in = D_in
        self.D_out = D_out
        self.activation = activation
        self.W_initializer = W_initializer or ScaledNormal()
        self.b_initializer = b_initializer or RandomNormal(stddev=0.1)

        self.weights = self.W_initializer.initialize((D_in, D_out))
        self.biases = self.b_initializer.initialize((1, D_out))

        logger.info(
            "%s initialized with D_in=%d, D_out=%d, activation=%s, "
            "W_initializer=%s, b_initializer=%s.", self.name, self.D_in,
            self.D_out, self.activation.name, self.W_initializer.name,
            self.b_initializer.name)

    @property
    def params(self) -> Dict[str, np.ndarray]:
        return {"weights": self.weights, "biases": self.biases}

    def forward(self, x: np.ndarray) -> np.ndarray:
        if x.ndim != 2:
            raise ValueError("Input shape mismatch. Expected 2D NumPy array, "
                             f"got {x.ndim}D array with shape {x.shape}.")

        if x.shape[-1] != self.D_in:
            raise ValueError(
                "Input feature dimension mismatch. Expected shape[-1] to be "
                f"{self.D_in}, got {x.shape[-1]} from shape {x.shape}.")

        z = x @ self.weights + self.biases

        logger.debug("%s forward pass: input_shape=%s, output_shape=%s.",
                     self.name, x.shape, z.shape)

        return z

    def predict(self, x: np.ndarray) -> np.ndarray:
        return self.activation.apply(self.forward(x))
