import enum
import logging

import numpy as np

logger = logging.getLogger(__name__)


class Cost(enum.Enum):

    QUADRATIC = "quadratic"

    def scalar_cost(self, a: np.ndarray, expected: np.ndarray) -> float:
        a, expected = _check_pair(a, expected)

        if self is Cost.QUADRATIC:
            return float(0.5 * np.sum((a - expected)**2))

        raise ValueError(f"Unknown cost function {self!r}.")

    def gradient(self, a: np.ndarray, expected: np.ndarray) -> np.ndarray:
        a, expected = _check_pair(a, expected)

        if self is Cost.QUADRATIC:
            return a - expected

        raise ValueError(f"Unknown cost function {self!r}.")

    def cost(self, y_pred: np.ndarray, y_true: np.ndarray) -> float:
        y_pred, y_true = _check_batch(y_pred, y_true)

        costs = [
            self.scalar_cost(a, expected)
            for a, expected in zip(y_pred, y_true)
        ]
        mean_cost = float(np.mean(costs))

        logger.debug("%s cost: y_pred_shape=%s, cost=%.6f.", self.name,
                     y_pred.shape, mean_cost)

        return mean_cost

    def cost_derivative(self, y_pred: np.ndarray,
                        y_true: np.ndarray) -> np.ndarray:
        y_pred, y_true = _check_batch(y_pred, y_true)

        dC_da = np.empty_like(y_pred)
        for i, (a, expected) in enumerate(zip(y_pred, y_true)):
            dC_da[i] = self.gradient(a, expected)

        logger.debug("%s cost derivative: y_pred_shape=%s.", self.name,
                     y_pred.shape)

        return dC_da


def _check_pair(a: np.ndarray, expected: np.ndarray):
    a = np.asarray(a, dtype=np.float64)
    expected = np.asarray(expected, dtype=np.float64)

    if a.shape != expected.shape:
        raise ValueError(f"Shape mismatch between output ({a.shape}) and "
                         f"expected output ({expected.shape}).")

    return a, expected


def _check_batch(y_pred: np.ndarray, y_true: np.ndarray):
    y_pred, y_true = _check_pair(y_pred, y_true)

    if y_pred.ndim != 2:
        raise ValueError(
            "Predictions ndim mismatch. Expected 2D NumPy array, got "
            f"{y_pred.ndim}D array with shape {y_pred.shape}.")

    if y_pred.shape[0] == 0:
        raise ValueError("Cannot compute cost over an empty batch.")

    return y_pred, y_true
