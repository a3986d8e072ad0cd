"""Wilcoxon signed-rank test with exact p-values."""

import math
import warnings
from typing import Literal

import torch
from torch import Tensor

from torchsignrank.probability import (
    SignrankPrecisionWarning,
    signrank_cumulative_distribution,
    signrank_survival,
)


def _average_ranks(a: Tensor) -> tuple[Tensor, bool]:
    _, inverse, counts = torch.unique(
        a, sorted=True, return_inverse=True, return_counts=True
    )

    ends = torch.cumsum(counts, dim=0).to(torch.float64)

    starts = ends - counts.to(torch.float64) + 1

    return ((starts + ends) / 2)[inverse], bool((counts > 1).any())


def wilcoxon_signed_rank(
    x: Tensor,
    y: Tensor | None = None,
    alternative: Literal["two-sided", "less", "greater"] = "two-sided",
    zero_method: Literal["wilcox"] = "wilcox",
) -> tuple[Tensor, Tensor]:
    r"""
    Perform the Wilcoxon signed-rank test with an exact p-value.

    Tests the null hypothesis that the distribution of a sample (or of
    paired differences) is symmetric about zero.

    Mathematical Definition
    -----------------------
    Given differences :math:`d_1, \ldots, d_n` (zeros removed), rank
    :math:`|d_i|` and sum the ranks of the positive differences:

    .. math::
        W^+ = \sum_{i: d_i > 0} R_i

    Under the null hypothesis every sign pattern is equally likely, and the
    p-value is read from the exact law of :math:`W^+`:

    - ``"less"``: :math:`P(W^+ \le w)`
    - ``"greater"``: :math:`P(W^+ \ge w)`
    - ``"two-sided"``: :math:`\min(1, 2 \min(P(W^+ \le w), P(W^+ \ge w)))`

    Parameters
    ----------
    x : Tensor
        First sample. Must be 1-dimensional.
    y : Tensor, optional
        Second sample. If provided, the test is performed on the differences
        ``x - y``. Must have the same shape as ``x``.
    alternative : str, optional
        The alternative hypothesis:

        - ``"two-sided"`` (default): The median is not equal to zero.
        - ``"less"``: The median is less than zero.
        - ``"greater"``: The median is greater than zero.
    zero_method : str, optional
        How to handle zero differences. Only ``"wilcox"`` (drop them) keeps
        the exact null law valid.

    Returns
    -------
    statistic : Tensor
        The W+ statistic (sum of ranks for positive differences).
    pvalue : Tensor
        The exact p-value.

    Raises
    ------
    ValueError
        If ``x`` is not 1-dimensional, shapes differ, an option is unknown,
        or every difference is zero.

    Warns
    -----
    SignrankPrecisionWarning
        If absolute differences are tied. Tied values get average ranks,
        and the exact law (which assumes distinct ranks) is then only
        approximate.

    Examples
    --------
    >>> x = torch.tensor([1.0, 2.0, 3.0, 4.0, 5.0], dtype=torch.float64)
    >>> stat, pvalue = wilcoxon_signed_rank(x)
    >>> stat
    tensor(15., dtype=torch.float64)
    >>> pvalue
    tensor(0.0625, dtype=torch.float64)

    Notes
    -----
    - **Exact law**: No normal approximation is used; the p-value comes
      from :func:`torchsignrank.probability.signrank_cumulative_distribution`.

    - **Not differentiable**: Ranks are piecewise constant.

    References
    ----------
    .. [1] Wilcoxon, F., "Individual comparisons by ranking methods,"
           Biometrics Bulletin, vol. 1, no. 6, pp. 80-83, 1945.

    See Also
    --------
    scipy.stats.wilcoxon : SciPy's Wilcoxon signed-rank test.
    """
    if x.dim() != 1:
        raise ValueError(f"x must be 1-dimensional, got {x.dim()} dimensions")

    if y is not None and y.shape != x.shape:
        raise ValueError(
            f"x and y must have the same shape, got {tuple(x.shape)} "
            f"and {tuple(y.shape)}"
        )

    if alternative not in ("two-sided", "less", "greater"):
        raise ValueError(
            "alternative must be 'two-sided', 'less' or 'greater', "
            f"got {alternative!r}"
        )

    if zero_method != "wilcox":
        raise ValueError(
            f"zero_method must be 'wilcox' for the exact test, "
            f"got {zero_method!r}"
        )

    d = x.detach() if y is None else x.detach() - y.detach()

    if not d.is_floating_point():
        d = d.to(torch.float64)

    d = d[d != 0]

    n = d.numel()

    if n == 0:
        raise ValueError("all differences are zero")

    ranks, tied = _average_ranks(d.abs())

    if tied:
        warnings.warn(
            "tied absolute differences: exact p-value assumes distinct ranks",
            SignrankPrecisionWarning,
            stacklevel=2,
        )

    statistic = ranks[d > 0].sum()

    w = statistic.item()

    # Ties can give a half-integer w: P(W <= w) = P(W <= floor(w))
    less = signrank_cumulative_distribution(
        math.floor(w + 1e-7), n, errors="raise"
    ).item()

    # P(W >= w) = P(W > ceil(w) - 1)
    greater = signrank_survival(
        math.ceil(w - 1e-7) - 1, n, errors="raise"
    ).item()

    if alternative == "less":
        pvalue = less
    elif alternative == "greater":
        pvalue = greater
    else:
        pvalue = min(1.0, 2.0 * min(less, greater))

    return (
        statistic.to(d.dtype),
        torch.tensor(pvalue, dtype=d.dtype, device=d.device),
    )
