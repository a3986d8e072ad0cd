import hypothesis.strategies


def probabilities(
    min_value: float = 1e-6,
    max_value: float = 1.0 - 1e-6,
) -> hypothesis.strategies.SearchStrategy[float]:
    """Strategy for probabilities away from 0 and 1."""
    return hypothesis.strategies.floats(
        min_value=min_value,
        max_value=max_value,
        allow_nan=False,
        allow_infinity=False,
    )
