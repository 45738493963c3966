import logging
from abc import ABC, abstractmethod
from typing import Optional, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

Seed = Union[None, int, np.random.Generator]


class Initializer(ABC):

    def __init__(self, seed: Seed = None, name: Optional[str] = None) -> None:
        self.name = name or self.__class__.__name__
        self._rng = np.random.default_rng(seed)

    @abstractmethod
    def initialize(
        self, shape: Tuple[int, ...], dtype: np.dtype = np.dtype("float64")
    ) -> np.ndarray:
        pass


class RandomNormal(Initializer):

    def __init__(self,
                 mean: float = 0.0,
                 stddev: float = 0.1,
                 seed: Seed = None,
                 name: Optional[str] = None) -> None:
        super().__init__(seed, name)

        if stddev < 0.0:
            raise ValueError("Standard deviation must be non-negative.")

        self.mean = mean
        self.stddev = stddev

        logger.debug("%s initializer created with mean=%.4f, stddev=%.4f.",
                     self.name, self.mean, self.stddev)

    def initialize(
        self, shape: Tuple[int, ...], dtype: np.dtype = np.dtype("float64")
    ) -> np.ndarray:
        weights = self._rng.normal(self.mean, self.stddev,
                                   shape).astype(dtype)

        logger.debug(
            "%s initialized weights with shape %s from normal "
            "distribution.", self.name, shape)

        return weights


class ScaledNormal(Initializer):

    def initialize(
        self, shape: Tuple[int, ...], dtype: np.dtype = np.dtype("float64")
    ) -> np.ndarray:
        if len(shape) < 2:
            raise ValueError("ScaledNormal requires at least 2D shape, "
                             f"got {len(shape)}D.")

        fan_in = shape[-2]
        scale = 1.0 / np.sqrt(fan_in)

        weights = (self._rng.standard_normal(shape) * scale).astype(dtype)

        logger.debug("%s initialized weights with shape %s, fan_in=%d, "
                     "scale=%.4f.", self.name, shape, fan_in, scale)

        return weights
