import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from dense_net.layers import Dense

logger = logging.getLogger(__name__)

Slots = Dict[str, Dict[str, np.ndarray]]


class Optimizer(ABC):

    slot_names: Tuple[str, ...] = ()

    def __init__(self,
                 learning_rate: float,
                 decay: float = 0.0,
                 name: Optional[str] = None) -> None:
        if learning_rate <= 0:
            raise ValueError("Learning rate must be positive.")

        if decay < 0:
            raise ValueError("Decay must be non-negative.")

        self.name = name or self.__class__.__name__
        self.learning_rate = learning_rate
        self.decay = decay
        self.current_learning_rate = learning_rate

        self.iteration = 0
        self.slots: List[Slots] = []
        self._initialized = False

    def initialize(self, layers: Sequence[Dense]) -> None:
        if not layers:
            raise ValueError("No layers provided to initialize.")

        self.iteration = 0
        self.current_learning_rate = self.learning_rate

        self.slots = []
        for layer in layers:
            self.slots.append({
                slot_name: {
                    param_name: np.zeros_like(param_value)
                    for param_name, param_value in layer.params.items()
                }
                for slot_name in self.slot_names
            })

        self._initialized = True

        logger.debug("%s allocated %s slots for %d layers.", self.name,
                     list(self.slot_names), len(layers))

    def pre_update(self) -> None:
        if self.decay > 0:
            self.current_learning_rate = self.learning_rate / (
                1.0 + self.decay * self.iteration)

    def update_params(self, layers: Sequence[Dense],
                      dW: Sequence[np.ndarray],
                      dB: Sequence[np.ndarray]) -> None:
        if not self._initialized:
            raise RuntimeError(
                f"{self.name} has not been initialized. Call "
                "initialize(layers) before updating parameters.")

        if not len(layers) == len(dW) == len(dB) == len(self.slots):
            raise ValueError(
                f"Length mismatch: {len(layers)} layers, {len(dW)} weight "
                f"gradients, {len(dB)} bias gradients and "
                f"{len(self.slots)} optimizer slots.")

        for i, (layer, dW_i, dB_i) in enumerate(zip(layers, dW, dB)):
            grads = {"weights": dW_i, "biases": dB_i}

            for param_name, param_value in layer.params.items():
                grad = grads[param_name]

                if param_value.shape != grad.shape:
                    raise ValueError(
                        f"Shape mismatch between parameter '{param_name}' "
                        f"({param_value.shape}) and its gradient "
                        f"({grad.shape}) in layer {i} ('{layer.name}').")

                self._update_param(self.slots[i], param_name, param_value,
                                   grad)

        logger.debug("%s step %d completed with learning_rate=%.6f.",
                     self.name, self.iteration, self.current_learning_rate)

    def post_update(self) -> None:
        self.iteration += 1

    def describe(self) -> str:
        return self.name

    @abstractmethod
    def _update_param(self, slots: Slots, param_name: str,
                      param_value: np.ndarray, grad: np.ndarray) -> None:
        pass


class SGD(Optimizer):

    slot_names = ("momentum",)

    def __init__(self,
                 learning_rate: float = 0.1,
                 momentum: float = 0.5,
                 decay: float = 5e-4,
                 name: Optional[str] = None) -> None:
        super().__init__(learning_rate, decay, name)

        if not 0.0 <= momentum < 1.0:
            raise ValueError("Momentum must be in [0, 1).")

        self.momentum = momentum

        logger.info("%s initialized with learning_rate=%.0e, momentum=%.3f, "
                    "decay=%.0e.", self.name, self.learning_rate,
                    self.momentum, self.decay)

    def _update_param(self, slots: Slots, param_name: str,
                      param_value: np.ndarray, grad: np.ndarray) -> None:
        update = -self.current_learning_rate * grad

        if self.momentum > 0:
            update += self.momentum * slots["momentum"][param_name]
            slots["momentum"][param_name] = update

        param_value += update


class RMSProp(Optimizer):

    slot_names = ("cache",)

    def __init__(self,
                 learning_rate: float = 0.001,
                 decay: float = 1e-4,
                 epsilon: float = 1e-7,
                 rho: float = 0.9,
                 name: Optional[str] = None) -> None:
        super().__init__(learning_rate, decay, name)

        if not 0.0 < rho < 1.0:
            raise ValueError("rho must be between 0 and 1.")

        if epsilon <= 0:
            raise ValueError("epsilon must be positive.")

        self.epsilon = epsilon
        self.rho = rho

        logger.info(
            "%s initialized with learning_rate=%.0e, decay=%.0e, "
            "epsilon=%.0e, rho=%.3f.", self.name, self.learning_rate,
            self.decay, self.epsilon, self.rho)

    def _update_param(self, slots: Slots, param_name: str,
                      param_value: np.ndarray, grad: np.ndarray) -> None:
        cache = slots["cache"]
        cache[param_name] = (self.rho * cache[param_name] +
                             (1 - self.rho) * grad**2)

        param_value += (-self.current_learning_rate * grad /
                        (np.sqrt(cache[param_name]) + self.epsilon))


class Adam(Optimizer):

    slot_names = ("momentum", "cache")

    def __init__(self,
                 learning_rate: float = 0.002,
                 decay: float = 1e-5,
                 epsilon: float = 1e-7,
                 beta1: float = 0.9,
                 beta2: float = 0.999,
                 name: Optional[str] = None) -> None:
        super().__init__(learning_rate, decay, name)

        if not 0.0 < beta1 < 1.0:
            raise ValueError("beta1 must be between 0 and 1.")

        if not 0.0 < beta2 < 1.0:
            raise ValueError("beta2 must be between 0 and 1.")

        if epsilon <= 0:
            raise ValueError("epsilon must be positive.")

        self.epsilon = epsilon
        self.beta1 = beta1
        self.beta2 = beta2

        logger.info(
            "%s initialized with learning_rate=%.0e, decay=%.0e, "
            "beta1=%.3f, beta2=%.3f, epsilon=%.0e.", self.name,
            self.learning_rate, self.decay, self.beta1, self.beta2,
            self.epsilon)

    def _update_param(self, slots: Slots, param_name: str,
                      param_value: np.ndarray, grad: np.ndarray) -> None:
        m = slots["momentum"]
        v = slots["cache"]

        m[param_name] = self.beta1 * m[param_name] + (1 - self.beta1) * grad
        v[param_name] = (self.beta2 * v[param_name] +
                         (1 - self.beta2) * grad**2)

        t = self.iteration + 1
        m_hat = m[param_name] / (1 - self.beta1**t)
        v_hat = v[param_name] / (1 - self.beta2**t)

        param_value -= (self.current_learning_rate * m_hat /
                        (np.sqrt(v_hat) + self.epsilon))
