import hypothesis.strategies


def sample_sizes(
    min_value: int = 1,
    max_value: int = 40,
) -> hypothesis.strategies.SearchStrategy[int]:
    """Strategy for signed-rank sample sizes."""
    return hypothesis.strategies.integers(
        min_value=min_value, max_value=max_value
    )
