"""
config.py
~~~~~~~~~

Logging setup and environment-driven training settings.
"""

import os
import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TypeVar

import numpy as np

from scalarnet.neuron import DEFAULT_LEARNING_RATE

T = TypeVar("T")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging() -> None:
    """
    Set up logging from the LOG_LEVEL environment variable.

    Defaults to INFO. matplotlib is held at WARNING since its font
    discovery is noisy at lower levels.
    """
    log_level_str = os.getenv('LOG_LEVEL', 'INFO').upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    logging.basicConfig(level=log_level, format=LOG_FORMAT)

    logging.getLogger('matplotlib').setLevel(logging.WARNING)
    logging.getLogger('scalarnet').setLevel(log_level)


def _read(
    env: Mapping[str, str],
    name: str,
    convert: Callable[[str], T],
    default: Optional[T]
) -> Optional[T]:
    raw = env.get(name)
    if raw is None or raw == '':
        return default
    try:
        return convert(raw)
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from None


@dataclass
class TrainingConfig:
    """Settings for a training run."""

    epochs: int = 500
    report_every: int = 100
    learning_rate: float = DEFAULT_LEARNING_RATE
    seed: Optional[int] = None
    plot_path: Optional[str] = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Raises:
            ValueError: If a setting is out of range
        """
        if not isinstance(self.epochs, int) or self.epochs < 1:
            raise ValueError(f"epochs must be a positive integer, got {self.epochs}")
        if not isinstance(self.report_every, int) or self.report_every < 1:
            raise ValueError(
                f"report_every must be a positive integer, got {self.report_every}"
            )
        if not np.isfinite(self.learning_rate) or self.learning_rate <= 0:
            raise ValueError(
                f"learning_rate must be a positive finite number, got {self.learning_rate}"
            )

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "TrainingConfig":
        """
        Build a config from SCALARNET_* environment variables.

        Args:
            env: Mapping to read instead of os.environ

        Returns:
            TrainingConfig with unset variables left at their defaults

        Raises:
            ValueError: If a variable cannot be parsed or is out of range
        """
        env = os.environ if env is None else env
        defaults = cls()
        return cls(
            epochs=_read(env, 'SCALARNET_EPOCHS', int, defaults.epochs),
            report_every=_read(
                env, 'SCALARNET_REPORT_EVERY', int, defaults.report_every
            ),
            learning_rate=_read(
                env, 'SCALARNET_LEARNING_RATE', float, defaults.learning_rate
            ),
            seed=_read(env, 'SCALARNET_SEED', int, None),
            plot_path=_read(env, 'SCALARNET_PLOT_PATH', str, None)
        )
