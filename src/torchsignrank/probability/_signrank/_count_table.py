"""Memoised signed-rank count tables."""

import math
from functools import lru_cache
from numbers import Integral
from typing import Union

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from torchsignrank.probability._exceptions import DomainError
from torchsignrank.probability._signrank._log_scale import LN2

# Largest n whose 2^n subsets can be counted in a signed 64-bit integer.
MAX_EXACT_SAMPLE_SIZE = 62


@tensorclass(nocast=True)
class CountTable:
    """Lower half of the signed-rank law for one sample size.

    Use :func:`signrank_count_table` to construct instances. Entry ``k``
    describes the subsets of :math:`\\{1, \\ldots, n\\}` summing to ``k``
    for ``k = 0, ..., floor(U / 2)`` with :math:`U = n(n+1)/2`; the upper
    half follows from :math:`c(k) = c(U - k)`.

    Attributes
    ----------
    sample_size : int
        The ``n`` the table was built for.
    counts : Tensor
        Exact int64 counts :math:`c(k)`, shape (floor(U / 2) + 1,). Empty
        when the table is not exact.
    log_probabilities : Tensor
        :math:`\\log P(W = k) = \\log c(k) - n \\log 2` (float64).
    log_cumulative : Tensor
        :math:`\\log P(W \\le k)` (float64), accumulated in ascending ``k``.
    exact : bool
        Whether ``counts`` holds exact integers. Tables for
        ``n > MAX_EXACT_SAMPLE_SIZE`` are built on the log scale only.
    """

    sample_size: int
    counts: Tensor
    log_probabilities: Tensor
    log_cumulative: Tensor
    exact: bool

    def log_probability(self, k: int) -> float:
        """Log mass of support value ``k`` in ``[0, U]``."""
        n = int(self.sample_size)

        upper = n * (n + 1) // 2

        if 2 * k > upper:
            k = upper - k

        return self.log_probabilities[k].item()


def _sample_size(n: Union[int, float, Tensor]) -> int:
    if isinstance(n, Tensor):
        if n.numel() != 1:
            raise ValueError(
                f"n must be a scalar, got tensor of shape {tuple(n.shape)}"
            )

        n = n.item()

    if isinstance(n, Integral):
        value = int(n)
    else:
        n = float(n)

        if not math.isfinite(n) or n != math.floor(n):
            raise DomainError(f"n must be a finite integer, got {n}")

        value = int(n)

    if value < 0:
        raise DomainError(f"n must be non-negative, got {value}")

    return value


def _exact_counts(n: int, half: int) -> Tensor:
    w = torch.zeros(max(half, 1) + 1, dtype=torch.int64)

    w[0] = w[1] = 1

    for j in range(2, n + 1):
        end = min(j * (j + 1) // 2, half)

        # The shifted slice is read before the update: rank j joins each
        # subset at most once.
        w[j : end + 1] += w[: end + 1 - j].clone()

    return w[: half + 1]


def _log_counts(n: int, half: int) -> Tensor:
    lw = torch.full((max(half, 1) + 1,), -math.inf, dtype=torch.float64)

    lw[0] = lw[1] = 0.0

    for j in range(2, n + 1):
        end = min(j * (j + 1) // 2, half)

        lw[j : end + 1] = torch.logaddexp(lw[j : end + 1], lw[: end + 1 - j])

    return lw[: half + 1]


@lru_cache(maxsize=128)
def _signrank_count_table(n: int) -> CountTable:
    half = n * (n + 1) // 4

    if n <= MAX_EXACT_SAMPLE_SIZE:
        counts = _exact_counts(n, half)

        # Scaling by a power of two is exact; only the log rounds.
        scale = 2.0**-n

        log_probabilities = torch.log(counts.to(torch.float64) * scale)

        log_cumulative = torch.log(
            torch.cumsum(counts, dim=0).to(torch.float64) * scale
        )

        exact = True
    else:
        counts = torch.empty(0, dtype=torch.int64)

        log_counts = _log_counts(n, half)

        log_probabilities = log_counts - n * LN2

        log_cumulative = torch.logcumsumexp(log_counts, dim=0) - n * LN2

        exact = False

    return CountTable(
        sample_size=n,
        counts=counts,
        log_probabilities=log_probabilities,
        log_cumulative=log_cumulative,
        exact=exact,
    )


def signrank_count_table(n: Union[int, float, Tensor]) -> CountTable:
    r"""Count table of the Wilcoxon signed-rank statistic for sample size n.

    Tables are memoised per ``n``: the first call for a given ``n`` runs the
    convolution, later calls reuse it. A table is never reused for a
    different ``n``. The returned table is a copy, so writing into it leaves
    the memoised table untouched.

    Mathematical Definition
    -----------------------
    The counts are the coefficients of the generating function

    .. math::
        \prod_{j=1}^{n} (1 + t^j) = \sum_{k=0}^{U} c_n(k) t^k,
        \quad U = \frac{n(n+1)}{2}

    computed by multiplying in one factor :math:`(1 + t^j)` at a time:
    :math:`c(i) \leftarrow c(i) + c(i - j)` for :math:`i` from
    :math:`\min(j(j+1)/2, \lfloor U/2 \rfloor)` down to :math:`j`.

    Parameters
    ----------
    n : int, float or Tensor
        Sample size. Must be a non-negative finite integer.

    Returns
    -------
    CountTable
        Lower half of the count sequence.

    Raises
    ------
    DomainError
        If ``n`` is negative, non-finite or not an integer.

    Examples
    --------
    >>> signrank_count_table(3).counts
    tensor([1, 1, 1, 2])
    """
    return _signrank_count_table(_sample_size(n)).clone()


def clear_signrank_cache() -> None:
    """Drop every memoised count table."""
    _signrank_count_table.cache_clear()
