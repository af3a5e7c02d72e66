"""
layer.py
~~~~~~~~

Layers of neurons. Every layer answers ``forward`` with its outputs and
``backward`` with the gradient of the loss with respect to its inputs,
so the network can drive any mix of layers the same way.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import numpy as np

from scalarnet.activations import Activation
from scalarnet.exceptions import ContractViolation
from scalarnet.neuron import DEFAULT_LEARNING_RATE, Neuron


class Layer(ABC):
    """Two-method contract shared by every layer type."""

    d_inputs: Optional[np.ndarray] = None

    @property
    @abstractmethod
    def n_inputs(self) -> int:
        pass

    @property
    @abstractmethod
    def n_outputs(self) -> int:
        pass

    @abstractmethod
    def forward(self, inputs: Sequence[float]) -> np.ndarray:
        pass

    @abstractmethod
    def backward(self, gradients: Sequence[float]) -> np.ndarray:
        pass


class DenseLayer(Layer):
    """
    Fully-connected layer: every input feeds every neuron.

    Because each input reaches the loss through all neurons, its gradient
    is the sum of the per-neuron input gradients.
    """

    def __init__(
        self,
        n_inputs: int,
        n_neurons: int,
        activation: Activation,
        learning_rate: float = DEFAULT_LEARNING_RATE,
        rng: Optional[np.random.Generator] = None
    ):
        if not isinstance(n_neurons, (int, np.integer)) or n_neurons < 1:
            raise ContractViolation(
                f"n_neurons must be a positive integer, got {n_neurons!r}"
            )

        rng = rng if rng is not None else np.random.default_rng()

        self.activation = activation
        self.neurons: List[Neuron] = [
            Neuron(n_inputs, activation, learning_rate=learning_rate, rng=rng)
            for _ in range(n_neurons)
        ]
        self.d_inputs = None

    @property
    def n_inputs(self) -> int:
        return self.neurons[0].n_inputs

    @property
    def n_outputs(self) -> int:
        return len(self.neurons)

    def forward(self, inputs: Sequence[float]) -> np.ndarray:
        inputs = np.asarray(inputs, dtype=float)
        return np.array([neuron.forward(inputs) for neuron in self.neurons])

    def backward(self, gradients: Sequence[float]) -> np.ndarray:
        """
        Update every neuron and return the summed input gradient.

        Args:
            gradients: dLoss/dOutput for each neuron, in neuron order

        Returns:
            dLoss/dInput for this layer (also kept as ``d_inputs``)

        Raises:
            ContractViolation: If the gradient count does not match the
                neuron count, or a neuron has no forward pass to differentiate
        """
        gradients = np.asarray(gradients, dtype=float)
        if gradients.shape != (len(self.neurons),):
            raise ContractViolation(
                f"Layer has {len(self.neurons)} neurons, "
                f"got gradient of shape {gradients.shape}"
            )

        d_inputs = np.zeros(self.n_inputs)
        for neuron, gradient in zip(self.neurons, gradients):
            d_inputs += neuron.backward(float(gradient))

        self.d_inputs = d_inputs
        return d_inputs

    def __repr__(self) -> str:
        return (
            f"DenseLayer(n_inputs={self.n_inputs}, n_neurons={self.n_outputs}, "
            f"activation={self.activation.value})"
        )
