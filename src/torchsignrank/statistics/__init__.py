from . import hypothesis_test

__all__ = [
    "hypothesis_test",
]
