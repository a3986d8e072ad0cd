"""Signed-rank log probability mass function."""

from typing import Literal, Union

from torch import Tensor

from torchsignrank._elementwise import map_elementwise
from torchsignrank.probability._signrank._outcome import report
from torchsignrank.probability._signrank._signrank_probability_mass import (
    density,
)


def signrank_log_probability_mass(
    x: Union[Tensor, float],
    n: Union[Tensor, float],
    *,
    errors: Literal["warn", "raise", "ignore"] = "warn",
) -> Tensor:
    r"""Log probability mass function of the Wilcoxon signed-rank statistic.

    .. math::
        \log P(W^+ = x) = \log c_n(x) - n \log 2

    Parameters
    ----------
    x : Tensor or float
        Values of the statistic.
    n : Tensor or float
        Sample size. Must be positive.
    errors : {"warn", "raise", "ignore"}, optional
        How to report elements with invalid ``n``.

    Returns
    -------
    Tensor
        Log probability. ``-inf`` outside the support and at non-integer
        ``x``.

    Notes
    -----
    Stays finite where :func:`signrank_probability_mass` underflows
    (:math:`2^{-n}` is below the smallest double for ``n > 1074``).

    Examples
    --------
    >>> x = torch.tensor([0.0, 3.0, 7.0], dtype=torch.float64)
    >>> signrank_log_probability_mass(x, 3)
    tensor([-2.0794, -1.3863,    -inf], dtype=torch.float64)
    """
    values, statuses = map_elementwise(
        lambda x_, n_: density(x_, n_, log=True), x, n
    )

    report(statuses, "signrank_log_probability_mass", errors)

    return values
