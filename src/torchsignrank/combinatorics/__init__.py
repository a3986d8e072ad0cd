from ._signrank_count import signrank_count

__all__ = [
    "signrank_count",
]
