"""
report.py
~~~~~~~~~

Loss curve rendering for training runs.
"""

import os
import logging

# Use non-GUI backend for matplotlib (no display during training runs)
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from scalarnet.trainer import TrainingHistory

logger = logging.getLogger(__name__)


def plot_loss_history(history: TrainingHistory, path: str) -> str:
    """
    Save a PNG with one loss curve per training sample.

    Args:
        history: History returned by ``trainer.train``
        path: Output file path; parent directories are created

    Returns:
        The path written

    Raises:
        ValueError: If the history has no reported epochs
    """
    epochs = history.epochs
    if not epochs:
        raise ValueError("Cannot plot an empty training history")

    out_dir = os.path.dirname(path)
    if out_dir and not os.path.exists(out_dir):
        os.makedirs(out_dir)

    n_samples = len(history.losses[epochs[0]])

    fig, ax = plt.subplots(figsize=(6, 4))
    for sample in range(n_samples):
        ax.plot(
            epochs,
            [history.losses[epoch][sample] for epoch in epochs],
            marker='o',
            label=f"sample {sample}"
        )
    ax.set_xlabel("epoch")
    ax.set_ylabel("squared error")
    ax.set_yscale('symlog')
    ax.set_title("Training loss per sample")
    if n_samples <= 10:
        ax.legend(fontsize='small')

    fig.savefig(path, format='png', bbox_inches='tight')
    plt.close(fig)

    logger.info(f"Saved loss plot to {path}")
    return path
