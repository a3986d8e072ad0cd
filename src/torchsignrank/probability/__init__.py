"""Exact null distribution of the Wilcoxon signed-rank statistic.

Functional operators for the law of :math:`W^+`, the sum of positively
signed ranks of a sample of size ``n`` under equally likely signs:

- probability mass (linear and log scale)
- CDF and survival function (linear and log scale)
- quantile (inverse CDF)
- random sampling

The law has no closed form. Every operator reads from an exact count
table, built once per ``n`` by a generating-function convolution and
memoised.

Example
-------
>>> import torch
>>> from torchsignrank.probability import (
...     signrank_cumulative_distribution,
...     signrank_quantile,
... )
>>>
>>> x = torch.tensor([0.0, 3.0, 6.0], dtype=torch.float64)
>>> signrank_cumulative_distribution(x, 3)  # tensor([0.125, 0.625, 1.0])
>>>
>>> p = torch.tensor([0.125, 0.5, 0.9], dtype=torch.float64)
>>> signrank_quantile(p, 3)  # tensor([0., 3., 6.])
"""

from ._exceptions import (
    DomainError,
    ProbabilityError,
    SignrankDomainWarning,
    SignrankPrecisionWarning,
)
from ._signrank import (
    MAX_EXACT_SAMPLE_SIZE,
    CountTable,
    UniformSource,
    clear_signrank_cache,
    signrank_count_table,
    signrank_cumulative_distribution,
    signrank_log_probability_mass,
    signrank_probability_mass,
    signrank_quantile,
    signrank_sample,
    signrank_survival,
)

__all__ = [
    "DomainError",
    "ProbabilityError",
    "SignrankDomainWarning",
    "SignrankPrecisionWarning",
    # Count tables
    "MAX_EXACT_SAMPLE_SIZE",
    "CountTable",
    "clear_signrank_cache",
    "signrank_count_table",
    # Signed-rank distribution
    "UniformSource",
    "signrank_cumulative_distribution",
    "signrank_log_probability_mass",
    "signrank_probability_mass",
    "signrank_quantile",
    "signrank_sample",
    "signrank_survival",
]
