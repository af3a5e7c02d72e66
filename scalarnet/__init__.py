"""
scalarnet package
~~~~~~~~~~~~~~~~~

Minimal feedforward neural network trained with hand-derived
backpropagation. Contains the activation functions, the neuron, layer
and network engine, and a small training driver.
"""

from scalarnet.activations import Activation
from scalarnet.exceptions import ContractViolation
from scalarnet.layer import DenseLayer, Layer
from scalarnet.network import LayerSpec, Network
from scalarnet.neuron import ForwardCache, Neuron, NeuronGradients

__version__ = "1.0.0"

__all__ = [
    "Activation",
    "ContractViolation",
    "DenseLayer",
    "ForwardCache",
    "Layer",
    "LayerSpec",
    "Network",
    "Neuron",
    "NeuronGradients",
]
