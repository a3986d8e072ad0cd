"""Random variates from the signed-rank distribution."""

import math
from typing import Iterator, Literal, Optional, Protocol, Sequence, Union

import torch
from torch import Generator, Tensor

from torchsignrank._elementwise import as_tensors, map_elementwise
from torchsignrank.probability._signrank._outcome import (
    Outcome,
    domain_error,
    ok,
    report,
)
from torchsignrank.probability._signrank._support import nearest_integer


class UniformSource(Protocol):
    """Anything producing uniform variates in [0, 1), one call at a time."""

    def next_uniform(self) -> float: ...


class _PresampledSource:
    """Uniform source replaying draws taken from a torch.Generator."""

    def __init__(self, draws: Sequence[float]):
        self._draws: Iterator[float] = iter(draws)

    def next_uniform(self) -> float:
        return next(self._draws)


def _draw_count(n: float) -> int:
    if math.isfinite(n):
        return max(nearest_integer(n), 0)

    return 0


def sample(n: float, source: UniformSource) -> Outcome:
    """Scalar kernel: one draw of W for sample size n."""
    if math.isnan(n):
        return ok(math.nan)

    if not math.isfinite(n):
        return domain_error()

    n = nearest_integer(n)

    if n < 0:
        return domain_error()

    total = 0

    for i in range(1, n + 1):
        total += i * math.floor(source.next_uniform() + 0.5)

    return ok(total)


def signrank_sample(
    n: Union[Tensor, float],
    size: Sequence[int] = (),
    *,
    generator: Union[Generator, UniformSource, None] = None,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
    errors: Literal["warn", "raise", "ignore"] = "warn",
) -> Tensor:
    r"""Draw random variates from the Wilcoxon signed-rank null distribution.

    Each variate flips a fair sign for every rank :math:`i = 1, \ldots, n`
    and returns the sum of the positively signed ranks:

    .. math::
        W^+ = \sum_{i=1}^{n} i \cdot \lfloor U_i + 1/2 \rfloor,
        \quad U_i \sim \mathcal{U}[0, 1)

    Parameters
    ----------
    n : Tensor or float
        Sample size, rounded to the nearest integer. Must be non-negative;
        ``n = 0`` always yields 0.
    size : Sequence[int], optional
        Leading shape of independent draws. The output has shape
        ``(*size, *n.shape)``.
    generator : torch.Generator or UniformSource, optional
        Source of uniform variates. A ``torch.Generator`` (or None, the
        default generator) is consumed with a single ``torch.rand`` call;
        any other object must provide ``next_uniform()`` and is called once
        per rank, in order.
    dtype : torch.dtype, optional
        Output dtype. Default is the floating dtype of ``n``, or float64.
    device : torch.device, optional
        Output device. Default is the device of ``n``.
    errors : {"warn", "raise", "ignore"}, optional
        How to report negative or non-finite ``n`` (the result is NaN).

    Returns
    -------
    Tensor
        Integer-valued draws in :math:`[0, n(n+1)/2]`.
        Mean :math:`n(n+1)/4`, variance :math:`n(n+1)(2n+1)/24`.

    Notes
    -----
    The count table is not used; a draw costs ``n`` uniforms.

    Examples
    --------
    >>> g = torch.Generator().manual_seed(42)
    >>> w1 = signrank_sample(10, [5], generator=g)
    >>> g = torch.Generator().manual_seed(42)
    >>> w2 = signrank_sample(10, [5], generator=g)
    >>> torch.equal(w1, w2)
    True
    """
    if any(s < 0 for s in size):
        raise ValueError(f"size must be non-negative, got {tuple(size)}")

    (n,) = as_tensors(n)

    n = n.expand((*size, *n.shape))

    if generator is None or isinstance(generator, Generator):
        flat = n.detach().cpu().reshape(-1).tolist()

        counts = [_draw_count(m) for m in flat]

        draws = torch.rand(
            sum(counts),
            generator=generator,
            dtype=torch.float64,
            device=generator.device if generator is not None else "cpu",
        )

        source = _PresampledSource(draws.tolist())
    elif hasattr(generator, "next_uniform"):
        source = generator
    else:
        raise TypeError(
            "generator must be a torch.Generator or provide next_uniform(), "
            f"got {type(generator).__name__}"
        )

    values, statuses = map_elementwise(
        lambda n_: sample(n_, source), n, dtype=dtype
    )

    report(statuses, "signrank_sample", errors)

    if device is not None:
        values = values.to(device)

    return values
