from ._wilcoxon_signed_rank import wilcoxon_signed_rank

__all__ = [
    "wilcoxon_signed_rank",
]
