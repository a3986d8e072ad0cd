"""Elementwise evaluation of scalar kernels over broadcast tensors."""

from typing import Callable, List, Optional, Tuple, Union

import torch
from torch import Tensor

from torchsignrank.probability._signrank._outcome import Outcome, Status


def _result_dtype(tensors: List[Tensor]) -> torch.dtype:
    dtype = None

    for tensor in tensors:
        if tensor.is_floating_point():
            if dtype is None:
                dtype = tensor.dtype
            else:
                dtype = torch.promote_types(dtype, tensor.dtype)

    if dtype is None:
        return torch.float64

    return dtype


def as_tensors(*args: Union[Tensor, float, int]) -> List[Tensor]:
    """Convert arguments to tensors.

    Python scalars take the floating dtype of the first tensor argument, or
    float64 if there is none, and its device.
    """
    reference = next((a for a in args if isinstance(a, Tensor)), None)

    if reference is not None and reference.is_floating_point():
        dtype = reference.dtype
    else:
        dtype = torch.float64

    device = reference.device if reference is not None else None

    return [
        a
        if isinstance(a, Tensor)
        else torch.as_tensor(a, dtype=dtype, device=device)
        for a in args
    ]


def map_elementwise(
    fn: Callable[..., Outcome],
    *args: Union[Tensor, float, int],
    dtype: Optional[torch.dtype] = None,
) -> Tuple[Tensor, List[Status]]:
    r"""Apply a scalar kernel to every element of the broadcast arguments.

    Parameters
    ----------
    fn : callable
        Kernel taking one Python number per argument and returning an
        :class:`Outcome`.
    *args : Tensor, float or int
        Arguments, broadcast against each other.
    dtype : torch.dtype, optional
        Output dtype. Defaults to the promoted floating dtype of the
        arguments, or float64.

    Returns
    -------
    values : Tensor
        Kernel values with the broadcast shape, on the arguments' device.
    statuses : list of Status
        One status per element, in row-major order.

    Examples
    --------
    >>> from torchsignrank.probability._signrank._outcome import ok
    >>> x = torch.tensor([1.0, 2.0])
    >>> values, _ = map_elementwise(lambda a, b: ok(a * b), x, 3.0)
    >>> values
    tensor([3., 6.])
    """
    tensors = as_tensors(*args)

    if dtype is None:
        dtype = _result_dtype(tensors)

    broadcast = torch.broadcast_tensors(*tensors)

    shape = broadcast[0].shape

    device = broadcast[0].device

    columns = [t.detach().cpu().reshape(-1).tolist() for t in broadcast]

    outcomes = [fn(*values) for values in zip(*columns)]

    values = torch.tensor(
        [outcome.value for outcome in outcomes], dtype=torch.float64
    )

    values = values.reshape(shape).to(dtype=dtype, device=device)

    return values, [outcome.status for outcome in outcomes]
