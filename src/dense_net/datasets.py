import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple

import numpy as np

from dense_net.initializers import Seed

logger = logging.getLogger(__name__)

Batch = Tuple[np.ndarray, np.ndarray]


class Dataset(ABC):

    def __init__(self,
                 name: str,
                 input_size: int,
                 output_size: int,
                 seed: Seed = None) -> None:
        if input_size <= 0 or output_size <= 0:
            raise ValueError(
                "Dataset input and output sizes must be positive, got "
                f"{input_size} and {output_size}.")

        self.name = name
        self.input_size = input_size
        self.output_size = output_size
        self._rng = np.random.default_rng(seed)

    @abstractmethod
    def get_batch(self, n: int) -> Batch:
        pass

    def get_full(self) -> Batch:
        raise NotImplementedError(
            f"Dataset '{self.name}' is sampled on demand and cannot be "
            "materialized in full.")

    def _check_batch_size(self, n: int) -> None:
        if n <= 0:
            raise ValueError(f"Batch size must be positive, got {n}.")


class StaticDataset(Dataset):

    def __init__(self,
                 name: str,
                 x: np.ndarray,
                 y: np.ndarray,
                 seed: Seed = None) -> None:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        if x.ndim != 2 or y.ndim != 2:
            raise ValueError("Samples and labels must be 2D arrays, got "
                             f"shapes {x.shape} and {y.shape}.")

        if x.shape[0] != y.shape[0]:
            raise ValueError(f"Number of samples mismatch between inputs "
                             f"({x.shape[0]}) and outputs ({y.shape[0]}).")

        if x.shape[0] == 0:
            raise ValueError("Static dataset must contain samples.")

        super().__init__(name, x.shape[1], y.shape[1], seed)

        self._x = x
        self._y = y

        logger.info("%s dataset created with %d samples, input_size=%d, "
                    "output_size=%d.", self.name, x.shape[0],
                    self.input_size, self.output_size)

    def get_batch(self, n: int) -> Batch:
        self._check_batch_size(n)

        indices = self._rng.integers(0, self._x.shape[0], size=n)

        return self._x[indices], self._y[indices]

    def get_full(self) -> Batch:
        return self._x.copy(), self._y.copy()


class DynamicDataset(Dataset):

    def __init__(self,
                 name: str,
                 target_fn: Callable[[np.ndarray], np.ndarray],
                 input_size: int,
                 output_size: int,
                 seed: Seed = None) -> None:
        super().__init__(name, input_size, output_size, seed)
        self.target_fn = target_fn

        logger.info("%s dataset created with input_size=%d, output_size=%d.",
                    self.name, self.input_size, self.output_size)

    def get_batch(self, n: int) -> Batch:
        self._check_batch_size(n)

        x = self._rng.uniform(0.0, 1.0, size=(n, self.input_size))

        y = np.zeros((n, self.output_size))
        for i, x_i in enumerate(x):
            y[i] = self.target_fn(x_i)

        return x, y


def get_2d_unit_square(resolution: int) -> np.ndarray:
    if resolution <= 0:
        raise ValueError(f"Resolution must be positive, got {resolution}.")

    linspace = np.linspace(0.0, 1.0, resolution)
    xs, ys = np.meshgrid(linspace, linspace)

    return np.column_stack((xs.ravel(), ys.ravel()))


def _distance_from_center(x: np.ndarray) -> float:
    return float(np.sqrt((x[0] - 0.5)**2 + (x[1] - 0.5)**2))


def _circle(x: np.ndarray) -> np.ndarray:
    return np.array([1.0 if _distance_from_center(x) < 0.25 else 0.0])


def _rgb(x: np.ndarray) -> np.ndarray:
    return np.array([x[0], x[1], 1.0 - x[0]])


def _rgb_donut(x: np.ndarray) -> np.ndarray:
    if 0.25 < _distance_from_center(x) < 0.45:
        return _rgb(x)
    return np.zeros(3)


def xor(seed: Seed = None) -> StaticDataset:
    x = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])
    y = np.array([[0.0], [1.0], [1.0], [0.0]])
    return StaticDataset("XOR", x, y, seed=seed)


def circle(seed: Seed = None) -> DynamicDataset:
    return DynamicDataset("Circle", _circle, 2, 1, seed=seed)


def rgb_test(seed: Seed = None) -> DynamicDataset:
    return DynamicDataset("RGB_TEST", _rgb, 2, 3, seed=seed)


def rgb_donut(seed: Seed = None) -> DynamicDataset:
    return DynamicDataset("RGB_DONUT", _rgb_donut, 2, 3, seed=seed)
