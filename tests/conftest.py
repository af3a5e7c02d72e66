"""
conftest.py
~~~~~~~~~~~

Shared fixtures for the scalarnet test suite.
"""

import numpy as np
import pytest

from scalarnet.network import LayerSpec, Network


@pytest.fixture
def rng():
    """Seeded generator so initial weights are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def offset_network(rng):
    """The 1 -> 3 (relu) -> 1 (linear) network used for y = x + 2."""
    return Network.from_specs(
        [
            LayerSpec(n_inputs=1, n_neurons=3, activation="relu"),
            LayerSpec(n_inputs=3, n_neurons=1, activation="linear"),
        ],
        rng=rng
    )
