"""Signed-rank quantile function."""

import math
import sys
from typing import Literal, Union

from torch import Tensor

from torchsignrank._elementwise import map_elementwise
from torchsignrank.probability._signrank._count_table import (
    _signrank_count_table,
)
from torchsignrank.probability._signrank._log_scale import (
    is_probability,
    lower_linear,
    tail_one,
    tail_zero,
)
from torchsignrank.probability._signrank._outcome import (
    Outcome,
    domain_error,
    ok,
    precision_warning,
    report,
)
from torchsignrank.probability._signrank._support import (
    nearest_integer,
    support_max,
)

# Slack on the target probability absorbing rounding in the running sum.
_FUZZ = 10 * sys.float_info.epsilon


def quantile(
    p: float,
    n: float,
    lower_tail: bool = True,
    log_p: bool = False,
) -> Outcome:
    """Scalar kernel: smallest x with P(W <= x) >= p."""
    if math.isnan(p) or math.isnan(n):
        return ok(math.nan)

    if not math.isfinite(p) or not math.isfinite(n):
        return domain_error()

    if not is_probability(p, log_p):
        return domain_error()

    n = nearest_integer(n)

    if n <= 0:
        return domain_error()

    upper = support_max(n)

    if p == tail_zero(lower_tail, log_p):
        return ok(0)

    if p == tail_one(lower_tail, log_p):
        return ok(upper)

    p = lower_linear(p, lower_tail, log_p)

    table = _signrank_count_table(n)

    log_cumulative = table.log_cumulative.tolist()

    def running(k: int) -> float:
        # Mass of 0..k, read the same way the CDF reads it.
        if k >= upper:
            return 1.0

        if 2 * k <= upper:
            return math.exp(log_cumulative[k])

        return -math.expm1(log_cumulative[upper - k - 1])

    if p <= 0.5:
        target = p - _FUZZ

        q = next(k for k in range(upper + 1) if running(k) >= target)
    else:
        target = 1 - p + _FUZZ

        q = upper - next(k for k in range(upper + 1) if running(k) > target)

    if min(p, 1 - p) < _FUZZ:
        # The slack on the target exceeds the tail probability itself.
        return precision_warning(q)

    return ok(q)


def signrank_quantile(
    p: Union[Tensor, float],
    n: Union[Tensor, float],
    *,
    lower_tail: bool = True,
    log_p: bool = False,
    errors: Literal["warn", "raise", "ignore"] = "warn",
) -> Tensor:
    r"""Quantile function (inverse CDF) of the Wilcoxon signed-rank statistic.

    Returns the smallest integer :math:`x` with :math:`P(W^+ \le x) \ge p`.

    Parameters
    ----------
    p : Tensor or float
        Probabilities in [0, 1], or log probabilities in [-inf, 0] when
        ``log_p`` is True.
    n : Tensor or float
        Sample size, rounded to the nearest integer. Must be positive.
    lower_tail : bool, optional
        If False, ``p`` is the upper-tail probability :math:`P(W^+ > x)`.
    log_p : bool, optional
        If True, ``p`` is given as a natural log.
    errors : {"warn", "raise", "ignore"}, optional
        How to report elements with invalid ``p`` or ``n`` (the result
        there is NaN).

    Returns
    -------
    Tensor
        Quantiles, integers in :math:`[0, n(n+1)/2]`.

    Warns
    -----
    SignrankPrecisionWarning
        If the tail probability is smaller than the :math:`10 \epsilon`
        slack, so the result may sit below the exact quantile.

    Notes
    -----
    The CDF has no closed form, so the quantile is found by a forward scan
    over the running sums of :math:`c_n(k) / 2^n`, accumulated from
    :math:`k = 0` when the count table is built. For :math:`p > 1/2` the
    scan runs against the upper tail and the index is mapped back through
    the symmetry point, which keeps the scan short and the target away
    from 1. The target is shifted by :math:`10 \epsilon` so that
    probabilities obtained from :func:`signrank_cumulative_distribution`
    invert to the point they came from.

    Examples
    --------
    >>> p = torch.tensor([0.0, 0.125, 0.5, 0.625, 1.0], dtype=torch.float64)
    >>> signrank_quantile(p, 3)
    tensor([0., 0., 3., 3., 6.], dtype=torch.float64)

    See Also
    --------
    signrank_cumulative_distribution : Inverse of the quantile function.
    """
    values, statuses = map_elementwise(
        lambda p_, n_: quantile(p_, n_, lower_tail, log_p), p, n
    )

    report(statuses, "signrank_quantile", errors)

    return values
