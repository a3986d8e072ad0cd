"""Support of the signed-rank law and integer rounding."""

import math

# Distance from an integer still treated as that integer.
INTEGER_TOLERANCE = 1e-7


def nearest_integer(x: float) -> int:
    """Round half away from zero. ``x`` must be finite."""
    if x < 0:
        return -math.floor(-x + 0.5)

    return math.floor(x + 0.5)


def support_max(n: int) -> int:
    """Largest attainable rank sum, n(n+1)/2."""
    return n * (n + 1) // 2
