import logging
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from dense_net.activations import Activation
from dense_net.datasets import Dataset, get_2d_unit_square
from dense_net.initializers import RandomNormal, ScaledNormal, Seed
from dense_net.layers import Dense
from dense_net.loss import Cost
from dense_net.optimizers import Optimizer

logger = logging.getLogger(__name__)

ShapeEntry = Union[int, Tuple[Activation, int]]


class Network:

    def __init__(self,
                 shape: Sequence[ShapeEntry],
                 optimizer: Optimizer,
                 cost: Cost = Cost.QUADRATIC,
                 activation: Activation = Activation.SIGMOID,
                 seed: Seed = None,
                 name: Optional[str] = None) -> None:
        if len(shape) < 2:
            raise ValueError("Network shape needs at least an input and an "
                             f"output width, got {list(shape)}.")

        self.name = name or self.__class__.__name__
        self.cost = cost
        self.optimizer = optimizer

        entries = [_parse_entry(entry, activation) for entry in shape]
        self._widths = [width for _, width in entries]

        rng = np.random.default_rng(seed)

        self.layers: List[Dense] = []
        for i in range(len(entries) - 1):
            layer_activation, D_out = entries[i + 1]
            self.layers.append(
                Dense(self._widths[i],
                      D_out,
                      activation=layer_activation,
                      W_initializer=ScaledNormal(seed=rng),
                      b_initializer=RandomNormal(stddev=0.1, seed=rng),
                      name=f"Dense_{i}"))

        self.optimizer.initialize(self.layers)

        logger.info("%s initialized with shape %s, optimizer=%s, cost=%s.",
                    self.name, self._widths, self.optimizer.describe(),
                    self.cost.name)

    @property
    def input_size(self) -> int:
        return self._widths[0]

    @property
    def output_size(self) -> int:
        return self._widths[-1]

    @property
    def widths(self) -> List[int]:
        return list(self._widths)

    def predict(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        if x.ndim == 1:
            x = x.reshape(1, -1)

        logger.debug("Generating predictions for input shape: %s", x.shape)

        a = x
        for layer in self.layers:
            a = layer.predict(a)

        return a

    def backprop(
            self, x: np.ndarray,
            y: np.ndarray) -> Tuple[List[np.ndarray], List[np.ndarray]]:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        activations = [x]
        zs = []
        for layer in self.layers:
            z = layer.forward(activations[-1])
            zs.append(z)
            activations.append(layer.activation.apply(z))

        dC_da = self.cost.cost_derivative(activations[-1], y)
        delta = dC_da * self.layers[-1].activation.derivative(zs[-1])

        dW = [activations[-2].T @ delta]
        dB = [np.sum(delta, axis=0, keepdims=True)]

        for i in range(len(self.layers) - 2, -1, -1):
            layer = self.layers[i]
            delta = ((delta @ self.layers[i + 1].weights.T) *
                     layer.activation.derivative(zs[i]))

            dW.append(activations[i].T @ delta)
            dB.append(np.sum(delta, axis=0, keepdims=True))

        dW.reverse()
        dB.reverse()

        batch_size = x.shape[0]
        dW = [dW_i / batch_size for dW_i in dW]
        dB = [dB_i / batch_size for dB_i in dB]

        logger.debug("%s backward pass: batch_size=%d, layers=%d.",
                     self.name, batch_size, len(self.layers))

        return dW, dB

    def train_minibatch(self, x: np.ndarray, y: np.ndarray) -> None:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        if x.ndim != 2 or y.ndim != 2:
            raise ValueError("Minibatch inputs and outputs must be 2D, got "
                             f"shapes {x.shape} and {y.shape}.")

        if x.shape[1] != self.input_size:
            raise ValueError(
                f"Input shape does not match data: network expects "
                f"{self.input_size} features, got {x.shape[1]}.")

        if y.shape[1] != self.output_size:
            raise ValueError(
                f"Output shape does not match data: network expects "
                f"{self.output_size} outputs, got {y.shape[1]}.")

        if x.shape[0] != y.shape[0]:
            raise ValueError(
                f"Batch size mismatch between inputs ({x.shape[0]}) and "
                f"outputs ({y.shape[0]}).")

        dW, dB = self.backprop(x, y)

        self.optimizer.pre_update()
        self.optimizer.update_params(self.layers, dW, dB)
        self.optimizer.post_update()

    def train_and_log(self, dataset: Dataset, batch_size: int,
                      eval_sample_size: int,
                      epochs: int) -> List[Tuple[int, float]]:
        if batch_size <= 0:
            raise ValueError("Batch size must be positive.")

        if eval_sample_size <= 0:
            raise ValueError("Evaluation sample size must be positive.")

        if epochs <= 0:
            raise ValueError("Number of epochs must be positive.")

        log_interval = epochs // 100 + 1
        history: List[Tuple[int, float]] = []

        logger.info(
            "Starting training for %s on %s: %d epochs, batch_size=%d, "
            "log_interval=%d.", self.name, dataset.name, epochs, batch_size,
            log_interval)

        for epoch in range(epochs):
            x, y = dataset.get_batch(batch_size)
            self.train_minibatch(x, y)

            if epoch % log_interval == 0:
                cost = self.eval(dataset, eval_sample_size)
                history.append((epoch, cost))

                logger.info("Epoch %d/%d - Cost: %.8f", epoch, epochs, cost)

        logger.info("Training finished for %s.", self.name)

        return history

    def eval(self, dataset: Dataset, n: int) -> float:
        x, y = dataset.get_batch(n)

        return self.cost.cost(self.predict(x), y)

    def predict_unit_square(
            self,
            resolution: int) -> Tuple[Tuple[int, int], List[List[float]]]:
        unit_square = get_2d_unit_square(resolution)
        predictions = self.predict(unit_square)

        return (resolution, resolution), predictions.tolist()

    def summarize(self) -> str:
        widths = ",".join(str(width) for width in self._widths)
        return f"{self.optimizer.describe()}_[{widths}]"


def _parse_entry(entry: ShapeEntry,
                 default: Activation) -> Tuple[Activation, int]:
    if isinstance(entry, tuple):
        activation, width = entry
        if not isinstance(activation, Activation):
            raise ValueError(
                f"Expected an Activation in shape entry {entry!r}.")
    else:
        activation, width = default, entry

    if isinstance(width, bool) or not isinstance(width, (int, np.integer)):
        raise ValueError(f"Layer width must be an integer, got {width!r}.")

    if width <= 0:
        raise ValueError(f"Layer width must be positive, got {width}.")

    return activation, int(width)
