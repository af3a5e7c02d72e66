"""
neuron.py
~~~~~~~~~

A single neuron: weighted sum, activation, and its own gradient
descent step.

The gradient computation and the parameter update are plain functions
so they can be checked without a Neuron. ``Neuron.backward`` chains
them and writes the result back into the neuron's own parameters.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from scalarnet.activations import Activation
from scalarnet.exceptions import ContractViolation

DEFAULT_LEARNING_RATE = 0.001

# Initial weights and bias are drawn uniformly from [0, INIT_SCALE)
INIT_SCALE = 0.01


@dataclass(frozen=True)
class ForwardCache:
    """What a forward pass saw: the input and the pre-activation sum."""

    inputs: np.ndarray
    weighted_sum: float


@dataclass(frozen=True)
class NeuronGradients:
    """Gradients of the loss with respect to one neuron's parameters and input."""

    d_weights: np.ndarray
    d_bias: float
    d_inputs: np.ndarray


def compute_gradients(
    cache: ForwardCache,
    weights: np.ndarray,
    gradient: float,
    activation: Activation
) -> NeuronGradients:
    """
    Backpropagate ``gradient`` (dLoss/dOutput) through one neuron.

    Args:
        cache: Forward cache of the pass being differentiated
        weights: Weights used during that pass (before any update)
        gradient: Derivative of the loss with respect to the neuron output
        activation: Activation used during the pass

    Returns:
        NeuronGradients for weights, bias and inputs
    """
    local = gradient * activation.derivative(cache.weighted_sum)
    return NeuronGradients(
        d_weights=local * cache.inputs,
        d_bias=local,
        d_inputs=local * weights
    )


def gradient_step(
    weights: np.ndarray,
    bias: float,
    gradients: NeuronGradients,
    learning_rate: float
) -> Tuple[np.ndarray, float]:
    """Return new (weights, bias) after one plain gradient descent step."""
    new_weights = weights - learning_rate * gradients.d_weights
    new_bias = bias - learning_rate * gradients.d_bias
    return new_weights, new_bias


class Neuron:
    """
    A neuron owning its weight vector and bias.

    ``backward`` depends on the cache left by the preceding ``forward``
    and consumes it, so every ``backward`` needs its own ``forward``
    unless a cache is passed explicitly.
    """

    def __init__(
        self,
        n_inputs: int,
        activation: Activation,
        learning_rate: float = DEFAULT_LEARNING_RATE,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Create a neuron with small random parameters.

        Args:
            n_inputs: Number of inputs (length of the weight vector)
            activation: Activation applied to the weighted sum
            learning_rate: Step size of the parameter update
            rng: Random generator for initialization

        Raises:
            ContractViolation: If n_inputs is not a positive integer
            ValueError: If learning_rate is not a positive finite number
        """
        if not isinstance(n_inputs, (int, np.integer)) or n_inputs < 1:
            raise ContractViolation(
                f"n_inputs must be a positive integer, got {n_inputs!r}"
            )
        if not np.isfinite(learning_rate) or learning_rate <= 0:
            raise ValueError(
                f"learning_rate must be positive, got {learning_rate}"
            )

        rng = rng if rng is not None else np.random.default_rng()

        self.weights: np.ndarray = rng.uniform(0.0, INIT_SCALE, size=n_inputs)
        self.bias: float = float(rng.uniform(0.0, INIT_SCALE))
        self.activation = activation
        self.learning_rate = learning_rate

        self.cache: Optional[ForwardCache] = None
        self.d_weights: Optional[np.ndarray] = None
        self.d_bias: Optional[float] = None
        self.d_inputs: Optional[np.ndarray] = None

    @property
    def n_inputs(self) -> int:
        return len(self.weights)

    def forward_cached(self, inputs: Sequence[float]) -> Tuple[float, ForwardCache]:
        """
        Compute the output without touching the neuron's stored state.

        Returns:
            Tuple of (output, cache); pass the cache to ``backward``
        """
        # private read-only copy, so later edits to the caller's array
        # cannot change what backward differentiates
        inputs = np.array(inputs, dtype=float)
        inputs.setflags(write=False)
        if inputs.shape != self.weights.shape:
            raise ContractViolation(
                f"Neuron expects {len(self.weights)} inputs, "
                f"got shape {inputs.shape}"
            )

        weighted_sum = self.bias + float(np.dot(inputs, self.weights))
        cache = ForwardCache(inputs=inputs, weighted_sum=weighted_sum)
        return self.activation.activate(weighted_sum), cache

    def forward(self, inputs: Sequence[float]) -> float:
        output, self.cache = self.forward_cached(inputs)
        return output

    def backward(self, gradient: float, cache: Optional[ForwardCache] = None) -> np.ndarray:
        """
        Apply one gradient descent step and return dLoss/dInput.

        Args:
            gradient: Derivative of the loss with respect to this neuron's output
            cache: Explicit forward cache; defaults to the one stored by ``forward``

        Returns:
            Gradient with respect to the inputs, computed from the
            weights as they were before the update

        Raises:
            ContractViolation: If there is no forward pass to differentiate
        """
        if cache is None:
            cache = self.cache
            if cache is None:
                raise ContractViolation(
                    "Neuron.backward called without a preceding forward"
                )
            self.cache = None
        elif cache.inputs.shape != self.weights.shape:
            raise ContractViolation(
                f"Cache holds {cache.inputs.shape} inputs, "
                f"neuron expects {len(self.weights)}"
            )

        gradients = compute_gradients(
            cache, self.weights, gradient, self.activation
        )
        self.weights, self.bias = gradient_step(
            self.weights, self.bias, gradients, self.learning_rate
        )

        self.d_weights = gradients.d_weights
        self.d_bias = gradients.d_bias
        self.d_inputs = gradients.d_inputs
        return gradients.d_inputs

    def __repr__(self) -> str:
        return (
            f"Neuron(n_inputs={self.n_inputs}, "
            f"activation={self.activation.value}, bias={self.bias:.6f})"
        )
