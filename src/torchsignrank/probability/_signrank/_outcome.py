"""Kernel results carrying a diagnostic status."""

import enum
import math
import warnings
from typing import Iterable, Literal, NamedTuple

from torchsignrank.probability._exceptions import (
    DomainError,
    SignrankDomainWarning,
    SignrankPrecisionWarning,
)


class Status(enum.Enum):
    OK = "ok"
    DOMAIN_ERROR = "domain_error"
    PRECISION_WARNING = "precision_warning"


class Outcome(NamedTuple):
    """Value computed by a scalar kernel together with its status.

    Attributes
    ----------
    value : float
        The result. NaN whenever ``status`` is ``Status.DOMAIN_ERROR``.
    status : Status
        ``Status.OK`` also covers NaN inputs propagated without diagnostic.
    """

    value: float
    status: Status = Status.OK


def ok(value: float) -> Outcome:
    return Outcome(float(value), Status.OK)


def domain_error() -> Outcome:
    return Outcome(math.nan, Status.DOMAIN_ERROR)


def precision_warning(value: float) -> Outcome:
    return Outcome(float(value), Status.PRECISION_WARNING)


def report(
    statuses: Iterable[Status],
    operator: str,
    errors: Literal["warn", "raise", "ignore"] = "warn",
) -> None:
    """Surface the diagnostics collected while evaluating ``operator``.

    Parameters
    ----------
    statuses : iterable of Status
        Statuses of every evaluated element.
    operator : str
        Public operator name, used in messages.
    errors : {"warn", "raise", "ignore"}
        How domain errors are reported. Precision problems always warn
        unless ``errors="ignore"``.

    Raises
    ------
    DomainError
        If ``errors="raise"`` and at least one element was outside the
        domain.
    """
    if errors not in ("warn", "raise", "ignore"):
        raise ValueError(
            f"errors must be 'warn', 'raise' or 'ignore', got {errors!r}"
        )

    seen = set(statuses)

    if errors == "ignore":
        return

    if Status.DOMAIN_ERROR in seen:
        message = f"{operator}: argument out of domain, returning NaN"

        if errors == "raise":
            raise DomainError(message)

        warnings.warn(message, SignrankDomainWarning, stacklevel=3)

    if Status.PRECISION_WARNING in seen:
        warnings.warn(
            f"{operator}: full precision may not have been achieved",
            SignrankPrecisionWarning,
            stacklevel=3,
        )
