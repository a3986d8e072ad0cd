"""Number of subsets of {1, ..., n} with a given sum."""

from typing import Optional, Union

import torch
from torch import Tensor

from torchsignrank.probability._signrank._count_table import (
    _sample_size,
    _signrank_count_table,
)
from torchsignrank.probability._signrank._log_scale import LN2


def signrank_count(
    n: Union[int, float, Tensor],
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> Tensor:
    r"""Number of subsets of :math:`\{1, \ldots, n\}` summing to each k.

    Parameters
    ----------
    n : int, float or Tensor
        Sample size. Must be a non-negative finite integer.
    dtype : torch.dtype, optional
        Data type of returned tensor. Default is torch.float64. Integer
        dtypes require an exact table (``n <= 62``).
    device : torch.device, optional
        Device of returned tensor.

    Returns
    -------
    Tensor
        1D tensor of shape (n(n+1)/2 + 1,) containing
        :math:`c_n(0), \ldots, c_n(U)`. They sum to :math:`2^n`.

    Notes
    -----
    Above ``n = 62`` the counts come from the log-scale table and are
    rounded; they overflow float64 once :math:`2^n` does (``n > 1023``).

    Examples
    --------
    >>> signrank_count(3)
    tensor([1., 1., 1., 2., 1., 1., 1.], dtype=torch.float64)

    >>> signrank_count(4, dtype=torch.int64)
    tensor([1, 1, 1, 2, 2, 2, 2, 2, 1, 1, 1])
    """
    if dtype is None:
        dtype = torch.float64

    n = _sample_size(n)

    table = _signrank_count_table(n)

    upper = n * (n + 1) // 2

    if table.exact:
        lower = table.counts
    elif dtype.is_floating_point:
        lower = torch.exp(table.log_probabilities + n * LN2)
    else:
        raise ValueError(f"counts for n = {n} do not fit in {dtype}")

    lower = lower.to(dtype)

    mirrored = torch.flip(lower[: upper + 1 - lower.shape[0]], [0])

    return torch.cat([lower, mirrored]).to(device=device)
