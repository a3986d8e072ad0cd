"""Probability module exceptions and warnings."""

__all__ = [
    "DomainError",
    "ProbabilityError",
    "SignrankDomainWarning",
    "SignrankPrecisionWarning",
]


class ProbabilityError(ValueError):
    """Base exception for probability module errors."""

    pass


class DomainError(ProbabilityError):
    """Raised when input is outside the valid domain."""

    pass


class SignrankDomainWarning(UserWarning):
    """Warning for inputs outside the domain (the result is NaN)."""

    pass


class SignrankPrecisionWarning(UserWarning):
    """Warning for results that may have lost more than half precision."""

    pass
