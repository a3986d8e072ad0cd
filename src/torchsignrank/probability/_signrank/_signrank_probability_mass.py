"""Signed-rank probability mass function."""

import math
from typing import Literal, Union

from torch import Tensor

from torchsignrank._elementwise import map_elementwise
from torchsignrank.probability._signrank._count_table import (
    _signrank_count_table,
)
from torchsignrank.probability._signrank._log_scale import (
    from_log,
    zero,
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


def density(x: float, n: float, log: bool = False) -> Outcome:
    """Scalar kernel: P(W = x) for sample size n, or its log."""
    if math.isnan(x) or math.isnan(n):
        return ok(math.nan)

    if not math.isfinite(n):
        return domain_error()

    n = nearest_integer(n)

    if n <= 0:
        return domain_error()

    if math.isinf(x) or abs(x - nearest_integer(x)) > INTEGER_TOLERANCE:
        return ok(zero(log))

    x = nearest_integer(x)

    if x < 0 or x > support_max(n):
        return ok(zero(log))

    table = _signrank_count_table(n)

    return ok(from_log(table.log_probability(x), log))


def signrank_probability_mass(
    x: Union[Tensor, float],
    n: Union[Tensor, float],
    *,
    errors: Literal["warn", "raise", "ignore"] = "warn",
) -> Tensor:
    r"""Probability mass function of the Wilcoxon signed-rank statistic.

    .. math::
        P(W^+ = x) = \frac{c_n(x)}{2^n}

    where :math:`c_n(x)` is the number of subsets of
    :math:`\{1, \ldots, n\}` summing to :math:`x`.

    Parameters
    ----------
    x : Tensor or float
        Values of the statistic. Values more than 1e-7 away from an integer
        have probability 0.
    n : Tensor or float
        Sample size, rounded to the nearest integer. Must be positive.
    errors : {"warn", "raise", "ignore"}, optional
        How to report elements with invalid ``n`` (the result there is NaN).

    Returns
    -------
    Tensor
        Probability :math:`P(W^+ = x)`, broadcast over ``x`` and ``n``.

    Notes
    -----
    The mass is evaluated as :math:`\exp(\log c_n(x) - n \log 2)` from the
    memoised count table for ``n``; see :func:`signrank_count_table`.

    Not differentiable: ``x`` and ``n`` are discrete.

    Examples
    --------
    >>> x = torch.arange(0, 7, dtype=torch.float64)
    >>> signrank_probability_mass(x, 3)
    tensor([0.1250, 0.1250, 0.1250, 0.2500, 0.1250, 0.1250, 0.1250],
           dtype=torch.float64)
    """
    values, statuses = map_elementwise(
        lambda x_, n_: density(x_, n_, log=False), x, n
    )

    report(statuses, "signrank_probability_mass", errors)

    return values
