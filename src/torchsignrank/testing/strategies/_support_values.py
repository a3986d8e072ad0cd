import hypothesis.strategies


def support_values(
    max_sample_size: int = 12,
    margin: int = 3,
) -> hypothesis.strategies.SearchStrategy[float]:
    """Strategy for integer-valued floats covering the signed-rank support.

    Draws from ``[-margin, U + margin]`` with ``U`` the largest rank sum of
    ``max_sample_size``, so values beyond either end of the support for
    smaller ``n`` come up too.
    """
    upper = max_sample_size * (max_sample_size + 1) // 2

    return hypothesis.strategies.integers(
        min_value=-margin, max_value=upper + margin
    ).map(float)
