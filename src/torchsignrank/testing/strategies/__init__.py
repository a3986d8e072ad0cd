"""Hypothesis strategies for signed-rank operator testing."""

from ._non_integer_real_numbers import non_integer_real_numbers
from ._probabilities import probabilities
from ._sample_sizes import sample_sizes
from ._support_values import support_values

__all__ = [
    # Numeric strategies
    "non_integer_real_numbers",
    "probabilities",
    "sample_sizes",
    "support_values",
]
