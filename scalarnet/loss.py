"""
loss.py
~~~~~~~

Squared-error loss and its gradient.
"""

from typing import Sequence, Tuple

import numpy as np

from scalarnet.exceptions import ContractViolation


def _as_pair(
    expected: Sequence[float],
    actual: Sequence[float]
) -> Tuple[np.ndarray, np.ndarray]:
    expected = np.asarray(expected, dtype=float)
    actual = np.asarray(actual, dtype=float)
    if expected.shape != actual.shape:
        raise ContractViolation(
            f"expected has shape {expected.shape}, actual has shape {actual.shape}"
        )
    return expected, actual


def squared_error(expected: Sequence[float], actual: Sequence[float]) -> np.ndarray:
    """Elementwise (expected - actual)^2."""
    expected, actual = _as_pair(expected, actual)
    return (expected - actual) ** 2


def sum_squared_error(expected: Sequence[float], actual: Sequence[float]) -> float:
    return float(np.sum(squared_error(expected, actual)))


def squared_error_gradient(expected: Sequence[float], actual: Sequence[float]) -> np.ndarray:
    """Derivative of the summed squared error with respect to ``actual``."""
    expected, actual = _as_pair(expected, actual)
    return 2.0 * (actual - expected)
