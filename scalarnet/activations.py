"""
activations.py
~~~~~~~~~~~~~~

Scalar activation functions paired with their derivatives.
"""

from enum import Enum


class Activation(Enum):
    """Closed set of activations; members are shared and immutable."""

    LINEAR = "linear"
    RELU = "relu"

    def activate(self, x: float) -> float:
        if self is Activation.RELU:
            return max(0.0, x)
        return x

    def derivative(self, x: float) -> float:
        # relu'(0) is taken as 0
        if self is Activation.RELU:
            return 1.0 if x > 0 else 0.0
        return 1.0

    @classmethod
    def from_name(cls, name: str) -> "Activation":
        """
        Look up an activation by its identifier.

        Args:
            name: Identifier such as ``"relu"`` (case-insensitive)

        Returns:
            The matching Activation member

        Raises:
            ValueError: If no activation has that identifier
        """
        try:
            return cls(name.lower())
        except ValueError:
            known = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unknown activation '{name}', expected one of: {known}"
            ) from None
