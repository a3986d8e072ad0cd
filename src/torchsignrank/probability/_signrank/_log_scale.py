r"""Conversions between the internal log scale and requested outputs.

Every signed-rank kernel works with :math:`\log P` internally. The helpers
here turn that into the requested tail (lower :math:`P(W \le x)` or upper
:math:`P(W > x)`) on the linear or log scale.
"""

import math

LN2 = math.log(2.0)


def log1mexp(a: float) -> float:
    r"""Compute :math:`\log(1 - e^a)` for :math:`a \le 0` without cancellation.

    Uses ``log(-expm1(a))`` near zero and ``log1p(-exp(a))`` otherwise
    (Mächler, 2012).
    """
    if a >= 0.0:
        return -math.inf

    if a > -LN2:
        return math.log(-math.expm1(a))

    return math.log1p(-math.exp(a))


def zero(log_p: bool) -> float:
    return -math.inf if log_p else 0.0


def one(log_p: bool) -> float:
    return 0.0 if log_p else 1.0


def tail_zero(lower_tail: bool, log_p: bool) -> float:
    """Tail probability at the left end of the support."""
    return zero(log_p) if lower_tail else one(log_p)


def tail_one(lower_tail: bool, log_p: bool) -> float:
    """Tail probability at the right end of the support."""
    return one(log_p) if lower_tail else zero(log_p)


def from_log(log_value: float, log_p: bool) -> float:
    return log_value if log_p else math.exp(log_value)


def tail_from_log(log_value: float, lower_tail: bool, log_p: bool) -> float:
    """Convert a log lower-tail probability to the requested tail and scale."""
    if lower_tail:
        return from_log(log_value, log_p)

    if log_p:
        return log1mexp(log_value)

    return -math.expm1(log_value)


def is_probability(p: float, log_p: bool) -> bool:
    if log_p:
        return p <= 0.0

    return 0.0 <= p <= 1.0


def lower_linear(p: float, lower_tail: bool, log_p: bool) -> float:
    """Normalise a tail probability to a linear lower-tail probability."""
    if log_p:
        return math.exp(p) if lower_tail else -math.expm1(p)

    return p if lower_tail else 0.5 - p + 0.5
