"""torchsignrank: exact Wilcoxon signed-rank distribution for PyTorch."""

from . import (
    combinatorics,
    probability,
    statistics,
)

__all__ = [
    "combinatorics",
    "probability",
    "statistics",
]

__version__ = "0.1.0"
