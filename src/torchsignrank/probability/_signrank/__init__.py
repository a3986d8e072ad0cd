from ._count_table import (
    MAX_EXACT_SAMPLE_SIZE,
    CountTable,
    clear_signrank_cache,
    signrank_count_table,
)
from ._signrank_cumulative_distribution import (
    signrank_cumulative_distribution,
)
from ._signrank_log_probability_mass import signrank_log_probability_mass
from ._signrank_probability_mass import signrank_probability_mass
from ._signrank_quantile import signrank_quantile
from ._signrank_sample import UniformSource, signrank_sample
from ._signrank_survival import signrank_survival

__all__ = [
    "MAX_EXACT_SAMPLE_SIZE",
    "CountTable",
    "UniformSource",
    "clear_signrank_cache",
    "signrank_count_table",
    "signrank_cumulative_distribution",
    "signrank_log_probability_mass",
    "signrank_probability_mass",
    "signrank_quantile",
    "signrank_sample",
    "signrank_survival",
]
