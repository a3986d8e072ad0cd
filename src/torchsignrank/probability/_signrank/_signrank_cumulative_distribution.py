"""Signed-rank cumulative distribution function."""

import math
from typing import Literal, Union

from torch import Tensor

from torchsignrank._elementwise import map_elementwise
from torchsignrank.probability._signrank._count_table import (
    _signrank_count_table,
)
from torchsignrank.probability._signrank._log_scale import (
    tail_from_log,
    tail_one,
    tail_zero,
)
from torchsignrank.probability._signrank._outcome import (
    Outcome,
    domain_error,
    ok,
    report,
)
from torchsignrank.probability._signrank._support import (
    INTEGER_TOLERANCE,
    nearest_integer,
    support_max,
)


def cumulative(
    x: float,
    n: float,
    lower_tail: bool = True,
    log_p: bool = False,
) -> Outcome:
    """Scalar kernel: P(W <= x), or P(W > x) when ``lower_tail`` is False."""
    if math.isnan(x) or math.isnan(n):
        return ok(math.nan)

    if not math.isfinite(n):
        return domain_error()

    n = nearest_integer(n)

    if n <= 0:
        return domain_error()

    if math.isinf(x):
        if x < 0:
            return ok(tail_zero(lower_tail, log_p))

        return ok(tail_one(lower_tail, log_p))

    x = nearest_integer(x + INTEGER_TOLERANCE)

    upper = support_max(n)

    if x < 0:
        return ok(tail_zero(lower_tail, log_p))

    if x >= upper:
        return ok(tail_one(lower_tail, log_p))

    table = _signrank_count_table(n)

    if 2 * x <= upper:
        log_sum = table.log_cumulative[x].item()
    else:
        # P(W <= x) = 1 - P(W <= U - x - 1)
        log_sum = table.log_cumulative[upper - x - 1].item()

        lower_tail = not lower_tail

    return ok(tail_from_log(log_sum, lower_tail, log_p))


def signrank_cumulative_distribution(
    x: Union[Tensor, float],
    n: Union[Tensor, float],
    *,
    lower_tail: bool = True,
    log_p: bool = False,
    errors: Literal["warn", "raise", "ignore"] = "warn",
) -> Tensor:
    r"""Cumulative distribution function of the Wilcoxon signed-rank statistic.

    .. math::
        F(x; n) = P(W^+ \le x) = 2^{-n} \sum_{k=0}^{[x]} c_n(k)

    where :math:`[x]` is ``x`` rounded to the nearest integer.

    Parameters
    ----------
    x : Tensor or float
        Values of the statistic, rounded to the nearest integer (shifted by
        1e-7 first, so halves round up).
    n : Tensor or float
        Sample size, rounded to the nearest integer. Must be positive.
    lower_tail : bool, optional
        If True (default) return :math:`P(W^+ \le x)`, otherwise
        :math:`P(W^+ > x)`.
    log_p : bool, optional
        If True return the natural log of the probability.
    errors : {"warn", "raise", "ignore"}, optional
        How to report elements with invalid ``n`` (the result there is NaN).

    Returns
    -------
    Tensor
        Tail probability, broadcast over ``x`` and ``n``.

    Notes
    -----
    By symmetry :math:`c_n(k) = c_n(U - k)`, so the sum only ever runs over
    the lower half of the support: above :math:`U/2` the complementary
    tail :math:`P(W^+ \le U - x - 1)` is summed and the tail flipped.
    The partial sums are accumulated once per ``n`` in ascending ``k``, so
    results are reproducible bit for bit.

    Examples
    --------
    >>> x = torch.tensor([-1.0, 0.0, 3.0, 6.0], dtype=torch.float64)
    >>> signrank_cumulative_distribution(x, 3)
    tensor([0.0000, 0.1250, 0.6250, 1.0000], dtype=torch.float64)

    See Also
    --------
    signrank_survival : Upper tail.
    signrank_quantile : Inverse of the CDF.
    """
    values, statuses = map_elementwise(
        lambda x_, n_: cumulative(x_, n_, lower_tail, log_p), x, n
    )

    report(statuses, "signrank_cumulative_distribution", errors)

    return values
