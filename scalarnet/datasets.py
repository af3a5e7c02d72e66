"""
datasets.py
~~~~~~~~~~~

Small literal datasets for exercising the network. Each sample is a
tuple of (input vector, expected output vector).
"""

from typing import List, Tuple

Sample = Tuple[List[float], List[float]]


def offset_dataset(start: int = 0, stop: int = 10, offset: int = 2) -> List[Sample]:
    """
    Samples of the relation y = x + offset for x in [start, stop).

    Example:
        >>> offset_dataset(0, 3)
        [([0.0], [2.0]), ([1.0], [3.0]), ([2.0], [4.0])]
    """
    return [([float(x)], [float(x + offset)]) for x in range(start, stop)]


# Held-out points for a network trained on offset_dataset(). 12..15 sit
# just past the training range; -19 and 123 are far outside it and are
# not expected to come out close.
OFFSET_TEST_DATA: List[Sample] = [
    ([float(x)], [float(x + 2)]) for x in (-19, 12, 13, 14, 15, 123)
]
