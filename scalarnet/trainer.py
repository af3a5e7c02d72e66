"""
trainer.py
~~~~~~~~~~

Drives a Network through training epochs and evaluates it on held-out
samples. Training is one sample at a time: forward, then backward.
"""

import time
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

from scalarnet.datasets import Sample
from scalarnet.network import Network

logger = logging.getLogger(__name__)

EpochCallback = Callable[[Dict[str, Any]], None]


@dataclass
class TrainingHistory:
    """Per-sample total loss recorded on each reported epoch."""

    losses: Dict[int, List[float]] = field(default_factory=dict)
    elapsed_time: float = 0.0

    @property
    def epochs(self) -> List[int]:
        return sorted(self.losses)

    def epoch_loss(self, epoch: int) -> float:
        """Summed loss over all samples for one reported epoch."""
        return float(sum(self.losses[epoch]))


@dataclass(frozen=True)
class Prediction:
    """Network output for one evaluated sample."""

    inputs: List[float]
    expected: List[float]
    actual: List[float]
    total_loss: float


def train(
    network: Network,
    dataset: Sequence[Sample],
    epochs: int,
    report_every: int = 100,
    callback: Optional[EpochCallback] = None
) -> TrainingHistory:
    """
    Train ``network`` on ``dataset`` for a number of epochs.

    Losses are measured on the output of each sample's forward pass,
    before that sample's update is applied.

    Args:
        network: Network to train in place
        dataset: Sequence of (input, expected) samples
        epochs: Number of passes over the dataset
        report_every: Record and log losses every this many epochs,
            starting at epoch 0
        callback: Called after each epoch with a progress dict

    Returns:
        TrainingHistory of the reported epochs

    Raises:
        ValueError: If epochs or report_every is not a positive integer
    """
    if not isinstance(epochs, int) or epochs < 1:
        raise ValueError(f"epochs must be a positive integer, got {epochs}")
    if not isinstance(report_every, int) or report_every < 1:
        raise ValueError(
            f"report_every must be a positive integer, got {report_every}"
        )

    logger.info(
        f"Training network {network.sizes} on {len(dataset)} samples "
        f"for {epochs} epochs"
    )

    history = TrainingHistory()
    start_time = time.time()

    for epoch in range(epochs):
        reporting = epoch % report_every == 0
        epoch_total = 0.0
        sample_losses = []

        for inputs, expected in dataset:
            actual = network.forward(inputs)
            network.backward(expected, actual)

            total_loss = network.total_loss(expected, actual)
            epoch_total += total_loss

            if reporting:
                sample_losses.append(total_loss)
                logger.debug(
                    f"Epoch {epoch} sample {inputs}: "
                    f"loss={network.loss(expected, actual).tolist()}, "
                    f"total loss={total_loss:.6f}"
                )

        if reporting:
            history.losses[epoch] = sample_losses
            logger.info(f"Epoch {epoch}/{epochs}: total loss {epoch_total:.6f}")

        if not np.isfinite(epoch_total):
            logger.warning(f"Loss is no longer finite at epoch {epoch}")

        if callback is not None:
            callback({
                'epoch': epoch + 1,
                'total_epochs': epochs,
                'total_loss': epoch_total,
                'elapsed_time': time.time() - start_time
            })

    history.elapsed_time = time.time() - start_time
    logger.info(f"Training finished in {history.elapsed_time:.2f}s")
    return history


def evaluate(network: Network, test_data: Sequence[Sample]) -> List[Prediction]:
    """
    Run ``network`` forward on each test sample without training.

    Returns:
        One Prediction per sample, in order
    """
    predictions = []
    for inputs, expected in test_data:
        actual = network.forward(inputs)
        prediction = Prediction(
            inputs=list(inputs),
            expected=list(expected),
            actual=actual.tolist(),
            total_loss=network.total_loss(expected, actual)
        )
        logger.info(
            f"Input {prediction.inputs}: expected {prediction.expected}, "
            f"actual {prediction.actual}"
        )
        predictions.append(prediction)
    return predictions
