"""Testing utilities for torchsignrank operators."""

from . import strategies

__all__ = [
    "strategies",
]
