"""
test_neuron.py
~~~~~~~~~~~~~~

Unit tests for Neuron and its gradient helpers.
"""

import numpy as np
import pytest

from scalarnet.activations import Activation
from scalarnet.exceptions import ContractViolation
from scalarnet.neuron import (
    DEFAULT_LEARNING_RATE,
    ForwardCache,
    Neuron,
    NeuronGradients,
    compute_gradients,
    gradient_step,
)


def make_neuron(weights, bias, activation=Activation.LINEAR, learning_rate=DEFAULT_LEARNING_RATE):
    neuron = Neuron(len(weights), activation, learning_rate=learning_rate)
    neuron.weights = np.array(weights, dtype=float)
    neuron.bias = float(bias)
    return neuron


@pytest.mark.unit
class TestNeuronInit:
    """Construction and parameter initialization."""

    def test_initial_parameters_in_range(self, rng):
        for _ in range(50):
            neuron = Neuron(4, Activation.RELU, rng=rng)
            assert neuron.weights.shape == (4,)
            assert np.all(neuron.weights >= 0.0)
            assert np.all(neuron.weights < 0.01)
            assert 0.0 <= neuron.bias < 0.01

    def test_default_learning_rate(self):
        assert Neuron(2, Activation.LINEAR).learning_rate == 0.001

    def test_neurons_are_initialized_independently(self, rng):
        first = Neuron(3, Activation.RELU, rng=rng)
        second = Neuron(3, Activation.RELU, rng=rng)
        assert not np.array_equal(first.weights, second.weights)

    @pytest.mark.parametrize("n_inputs", [0, -2, 1.5])
    def test_invalid_input_width(self, n_inputs):
        with pytest.raises(ContractViolation):
            Neuron(n_inputs, Activation.LINEAR)

    @pytest.mark.parametrize("learning_rate", [0.0, -0.1, float("nan"), float("inf")])
    def test_invalid_learning_rate(self, learning_rate):
        with pytest.raises(ValueError):
            Neuron(1, Activation.LINEAR, learning_rate=learning_rate)


@pytest.mark.unit
class TestNeuronForward:
    """Weighted sum and activation."""

    def test_weighted_sum_plus_bias(self):
        neuron = make_neuron([0.5, -2.0, 1.0], 0.25)
        assert neuron.forward([2.0, 1.0, 3.0]) == pytest.approx(2.25)

    def test_relu_clips_negative_sum(self):
        neuron = make_neuron([-1.0], 0.0, Activation.RELU)
        assert neuron.forward([3.0]) == 0.0

    def test_forward_is_deterministic(self, rng):
        neuron = Neuron(3, Activation.RELU, rng=rng)
        inputs = [0.3, 1.2, -0.7]
        assert neuron.forward(inputs) == neuron.forward(inputs)

    def test_forward_stores_cache(self):
        neuron = make_neuron([1.0, 2.0], 0.5)
        neuron.forward([3.0, 4.0])
        assert np.array_equal(neuron.cache.inputs, [3.0, 4.0])
        assert neuron.cache.weighted_sum == pytest.approx(11.5)

    def test_forward_cached_leaves_state_alone(self):
        neuron = make_neuron([1.0], 0.0)
        output, cache = neuron.forward_cached([2.0])
        assert output == 2.0
        assert cache.weighted_sum == 2.0
        assert neuron.cache is None

    @pytest.mark.parametrize("inputs", [[1.0], [1.0, 2.0, 3.0], []])
    def test_wrong_input_width(self, inputs):
        neuron = make_neuron([1.0, 1.0], 0.0)
        with pytest.raises(ContractViolation):
            neuron.forward(inputs)


@pytest.mark.unit
class TestNeuronBackward:
    """Gradients and the in-place descent step."""

    def test_gradients_and_update(self):
        neuron = make_neuron([2.0, -1.0], 0.5, learning_rate=0.1)
        neuron.forward([3.0, 4.0])

        d_inputs = neuron.backward(2.0)

        assert np.allclose(neuron.d_weights, [6.0, 8.0])
        assert neuron.d_bias == pytest.approx(2.0)
        assert np.allclose(d_inputs, [4.0, -2.0])
        assert np.allclose(neuron.weights, [2.0 - 0.6, -1.0 - 0.8])
        assert neuron.bias == pytest.approx(0.5 - 0.2)

    def test_input_gradient_uses_weights_before_update(self):
        neuron = make_neuron([2.0], 0.0)
        neuron.forward([3.0])
        d_inputs = neuron.backward(1.0)

        assert neuron.weights[0] == pytest.approx(2.0 - 0.001 * 3.0)
        assert np.allclose(d_inputs, [2.0])

    def test_inactive_relu_passes_no_gradient(self):
        neuron = make_neuron([-1.0, 1.0], -5.0, Activation.RELU)
        neuron.forward([1.0, 1.0])
        d_inputs = neuron.backward(3.0)

        assert np.allclose(d_inputs, [0.0, 0.0])
        assert np.allclose(neuron.weights, [-1.0, 1.0])
        assert neuron.bias == -5.0

    def test_step_reduces_output_when_too_high(self):
        neuron = make_neuron([0.8, 0.3], 0.2, Activation.RELU)
        inputs = [1.0, 2.0]
        expected = 0.5

        before = neuron.forward(inputs)
        assert before > expected
        neuron.backward(2.0 * (before - expected))

        assert neuron.forward(inputs) < before

    def test_backward_without_forward(self):
        neuron = make_neuron([1.0], 0.0)
        with pytest.raises(ContractViolation):
            neuron.backward(1.0)

    def test_backward_consumes_cache(self):
        neuron = make_neuron([1.0], 0.0)
        neuron.forward([1.0])
        neuron.backward(1.0)
        with pytest.raises(ContractViolation):
            neuron.backward(1.0)

    def test_explicit_cache(self):
        neuron = make_neuron([2.0], 1.0, learning_rate=0.5)
        output, cache = neuron.forward_cached([1.0])
        assert output == 3.0

        neuron.backward(1.0, cache=cache)

        assert np.allclose(neuron.weights, [1.5])
        assert neuron.bias == pytest.approx(0.5)

    def test_editing_input_after_forward_does_not_change_update(self):
        inputs = np.array([3.0, -1.0])
        edited = make_neuron([0.5, 0.25], 0.1)
        edited.forward(inputs)
        inputs[0] = 100.0
        edited.backward(2.0)

        clean = make_neuron([0.5, 0.25], 0.1)
        clean.forward(np.array([3.0, -1.0]))
        clean.backward(2.0)

        assert np.array_equal(edited.weights, clean.weights)
        assert np.array_equal(edited.d_weights, clean.d_weights)

    def test_cached_inputs_are_read_only(self):
        neuron = make_neuron([1.0], 0.0)
        inputs = np.array([2.0])
        _, cache = neuron.forward_cached(inputs)

        assert cache.inputs is not inputs
        with pytest.raises(ValueError):
            cache.inputs[0] = 5.0

    def test_explicit_cache_with_wrong_width(self):
        neuron = make_neuron([1.0, 1.0], 0.0)
        cache = ForwardCache(inputs=np.array([1.0]), weighted_sum=1.0)
        with pytest.raises(ContractViolation):
            neuron.backward(1.0, cache=cache)


@pytest.mark.unit
class TestGradientHelpers:
    """The pure functions behind Neuron.backward."""

    def test_compute_gradients_linear(self):
        cache = ForwardCache(inputs=np.array([1.0, -2.0]), weighted_sum=-4.0)
        grads = compute_gradients(cache, np.array([0.5, 3.0]), 2.0, Activation.LINEAR)

        assert np.allclose(grads.d_weights, [2.0, -4.0])
        assert grads.d_bias == 2.0
        assert np.allclose(grads.d_inputs, [1.0, 6.0])

    def test_compute_gradients_relu_inactive(self):
        cache = ForwardCache(inputs=np.array([1.0]), weighted_sum=0.0)
        grads = compute_gradients(cache, np.array([0.5]), 2.0, Activation.RELU)
        assert grads.d_bias == 0.0
        assert np.allclose(grads.d_weights, [0.0])

    def test_gradient_step_returns_new_arrays(self):
        weights = np.array([1.0, 2.0])
        grads = NeuronGradients(
            d_weights=np.array([10.0, -10.0]),
            d_bias=5.0,
            d_inputs=np.array([0.0, 0.0])
        )

        new_weights, new_bias = gradient_step(weights, 1.0, grads, 0.1)

        assert np.allclose(new_weights, [0.0, 3.0])
        assert new_bias == pytest.approx(0.5)
        assert np.array_equal(weights, [1.0, 2.0])
