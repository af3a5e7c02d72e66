"""
network.py
~~~~~~~~~~

A feedforward network of stacked layers trained one sample at a time
with plain gradient descent.

Example:
    >>> net = Network.from_specs([
    ...     LayerSpec(n_inputs=1, n_neurons=3, activation="relu"),
    ...     LayerSpec(n_inputs=3, n_neurons=1, activation="linear"),
    ... ])
    >>> output = net.forward([4.0])
    >>> net.backward([6.0], output)
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

import numpy as np

from scalarnet.activations import Activation
from scalarnet.exceptions import ContractViolation
from scalarnet.layer import DenseLayer, Layer
from scalarnet.loss import squared_error, squared_error_gradient, sum_squared_error
from scalarnet.neuron import DEFAULT_LEARNING_RATE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayerSpec:
    """Shape and activation of one dense layer."""

    n_inputs: int
    n_neurons: int
    activation: Union[str, Activation] = Activation.LINEAR

    def resolve_activation(self) -> Activation:
        if isinstance(self.activation, Activation):
            return self.activation
        return Activation.from_name(self.activation)


class Network:
    """
    Ordered stack of layers.

    ``backward`` must be given the output of the immediately preceding
    ``forward``; each forward output can be trained on once.
    """

    def __init__(self, layers: Sequence[Layer]):
        """
        Args:
            layers: Pre-built layers, input side first

        Raises:
            ContractViolation: If there are no layers, or a layer's output
                width differs from the next layer's input width
        """
        if not layers:
            raise ContractViolation("A network needs at least one layer")

        for index, (current, following) in enumerate(zip(layers, layers[1:])):
            if current.n_outputs != following.n_inputs:
                raise ContractViolation(
                    f"Layer {index} produces {current.n_outputs} outputs but "
                    f"layer {index + 1} expects {following.n_inputs} inputs"
                )

        self.layers: List[Layer] = list(layers)
        self._last_output: Optional[np.ndarray] = None

        logger.debug(f"Created network with sizes {self.sizes}")

    @classmethod
    def from_specs(
        cls,
        specs: Sequence[LayerSpec],
        learning_rate: float = DEFAULT_LEARNING_RATE,
        rng: Optional[np.random.Generator] = None
    ) -> "Network":
        """
        Build dense layers from specifications and wrap them in a network.

        Args:
            specs: One LayerSpec per layer, input side first
            learning_rate: Step size shared by every neuron
            rng: Random generator for parameter initialization

        Returns:
            A ready-to-train Network
        """
        rng = rng if rng is not None else np.random.default_rng()
        layers = [
            DenseLayer(
                spec.n_inputs,
                spec.n_neurons,
                spec.resolve_activation(),
                learning_rate=learning_rate,
                rng=rng
            )
            for spec in specs
        ]
        return cls(layers)

    @property
    def sizes(self) -> List[int]:
        """Input width followed by each layer's output width."""
        return [self.layers[0].n_inputs] + [layer.n_outputs for layer in self.layers]

    def forward(self, inputs: Sequence[float]) -> np.ndarray:
        data = np.array(inputs, dtype=float)
        for layer in self.layers:
            data = layer.forward(data)

        self._last_output = data
        return data.copy()

    def backward(self, expected: Sequence[float], actual: Sequence[float]) -> None:
        """
        Run one gradient descent step over every neuron.

        Args:
            expected: Target output
            actual: Output returned by the preceding ``forward``

        Raises:
            ContractViolation: If no forward output is pending, ``actual``
                is not that output, or the widths disagree
        """
        if self._last_output is None:
            raise ContractViolation(
                "Network.backward called without a preceding forward"
            )

        expected = np.asarray(expected, dtype=float)
        actual = np.asarray(actual, dtype=float)

        if expected.shape != (self.layers[-1].n_outputs,):
            raise ContractViolation(
                f"Network produces {self.layers[-1].n_outputs} outputs, "
                f"expected has shape {expected.shape}"
            )
        if actual.shape != expected.shape:
            raise ContractViolation(
                f"expected has shape {expected.shape}, actual has shape {actual.shape}"
            )
        if not np.array_equal(actual, self._last_output, equal_nan=True):
            raise ContractViolation(
                "actual does not match the output of the preceding forward"
            )

        self._last_output = None

        gradient = squared_error_gradient(expected, actual)
        for layer in reversed(self.layers):
            gradient = layer.backward(gradient)

    def loss(self, expected: Sequence[float], actual: Sequence[float]) -> np.ndarray:
        return squared_error(expected, actual)

    def total_loss(self, expected: Sequence[float], actual: Sequence[float]) -> float:
        return sum_squared_error(expected, actual)

    def __repr__(self) -> str:
        return f"Network(sizes={self.sizes})"
