#!/usr/bin/env python3
"""
Train a small network on y = x + 2 and check how it extrapolates.

Usage:
    python scripts/train_offset.py [--epochs N] [--seed S] [--plot PATH]

The script will:
1. Build a 1 -> 3 (relu) -> 1 (linear) network
2. Train it on x = 0..9
3. Print the loss trend over the reported epochs
4. Evaluate it on points outside the training range

Settings fall back to the SCALARNET_* environment variables, then to
the defaults in scalarnet.config.TrainingConfig.
"""

import sys
import argparse
import traceback

import numpy as np

from scalarnet.config import TrainingConfig, configure_logging
from scalarnet.datasets import OFFSET_TEST_DATA, offset_dataset
from scalarnet.network import LayerSpec, Network
from scalarnet.report import plot_loss_history
from scalarnet.trainer import evaluate, train


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument('--epochs', type=int, help='number of training epochs')
    parser.add_argument('--report-every', type=int, help='log losses every N epochs')
    parser.add_argument('--learning-rate', type=float, help='gradient descent step size')
    parser.add_argument('--seed', type=int, help='seed for weight initialization')
    parser.add_argument('--plot', dest='plot_path', help='write a loss plot PNG here')
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> TrainingConfig:
    """Environment settings overridden by any flags given on the command line."""
    config = TrainingConfig.from_env()
    overrides = {
        key: value for key, value in vars(args).items() if value is not None
    }
    return TrainingConfig(**{**vars(config), **overrides})


def build_network(config: TrainingConfig) -> Network:
    return Network.from_specs(
        [
            LayerSpec(n_inputs=1, n_neurons=3, activation='relu'),
            LayerSpec(n_inputs=3, n_neurons=1, activation='linear'),
        ],
        learning_rate=config.learning_rate,
        rng=np.random.default_rng(config.seed)
    )


def main(argv=None) -> int:
    """Main training function."""
    configure_logging()

    print("=" * 60)
    print("Offset regression: y = x + 2")
    print("=" * 60)

    try:
        config = build_config(parse_args(argv))
        network = build_network(config)
        print(f"\n🧠 Network sizes: {network.sizes}")
        print(f"   epochs={config.epochs}, learning_rate={config.learning_rate}, "
              f"seed={config.seed}")

        history = train(
            network,
            offset_dataset(),
            epochs=config.epochs,
            report_every=config.report_every
        )

        print(f"\n📉 Loss by reported epoch ({history.elapsed_time:.2f}s):")
        for epoch in history.epochs:
            print(f"   - epoch {epoch:>4}: {history.epoch_loss(epoch):.6f}")

        print("\n🔍 Held-out predictions:")
        for prediction in evaluate(network, OFFSET_TEST_DATA):
            print(f"   - x={prediction.inputs[0]:>6.1f}  "
                  f"expected={prediction.expected[0]:>7.2f}  "
                  f"actual={prediction.actual[0]:>9.4f}")

        if config.plot_path:
            plot_loss_history(history, config.plot_path)
            print(f"\n📁 Loss plot: {config.plot_path}")

    except Exception as e:
        print(f"\n❌ Error during training: {e}")
        traceback.print_exc()
        return 1

    print("\n" + "=" * 60)
    print("✅ TRAINING COMPLETE")
    print("=" * 60)
    return 0


if __name__ == '__main__':
    sys.exit(main())
