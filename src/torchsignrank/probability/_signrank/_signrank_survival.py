"""Signed-rank survival function."""

from typing import Literal, Union

from torch import Tensor

from torchsignrank._elementwise import map_elementwise
from torchsignrank.probability._signrank._outcome import report
from torchsignrank.probability._signrank._signrank_cumulative_distribution import (
    cumulative,
)


def signrank_survival(
    x: Union[Tensor, float],
    n: Union[Tensor, float],
    *,
    log_p: bool = False,
    errors: Literal["warn", "raise", "ignore"] = "warn",
) -> Tensor:
    r"""Survival function of the Wilcoxon signed-rank statistic.

    .. math::
        S(x; n) = P(W^+ > x) = 1 - F(x; n)

    Parameters
    ----------
    x : Tensor or float
        Values of the statistic.
    n : Tensor or float
        Sample size. Must be positive.
    log_p : bool, optional
        If True return the natural log of the probability.
    errors : {"warn", "raise", "ignore"}, optional
        How to report elements with invalid ``n``.

    Returns
    -------
    Tensor
        Survival probability :math:`P(W^+ > x)`.

    Notes
    -----
    Computed directly from the smaller of the two tails rather than as
    ``1 - cdf``, so small upper-tail probabilities keep full precision.

    Edge cases:
    - x < 0 returns 1.0
    - x >= n(n+1)/2 returns 0.0

    Examples
    --------
    >>> x = torch.tensor([0.0, 3.0, 5.0, 6.0], dtype=torch.float64)
    >>> signrank_survival(x, 3)
    tensor([0.8750, 0.3750, 0.1250, 0.0000], dtype=torch.float64)
    """
    values, statuses = map_elementwise(
        lambda x_, n_: cumulative(x_, n_, False, log_p), x, n
    )

    report(statuses, "signrank_survival", errors)

    return values
