import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Dimensions:
    width: float
    height: float


def resize_threshold_exceeded(d1: Dimensions, d2: Dimensions, threshold: float) -> bool:
    """
    Reports whether the dimensions changed by more than the threshold, measured
    as the distance between the bottom-right corners of the two sizes.

    Args:
        d1: The previous dimensions
        d2: The current dimensions
        threshold: The distance threshold in pixels

    Returns:
        True if the resize threshold was exceeded
    """
    return math.hypot(d1.width - d2.width, d1.height - d2.height) > threshold
