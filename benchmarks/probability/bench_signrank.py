"""Benchmarks for the signed-rank distribution.

This module benchmarks count table construction (cold and memoised) and the
elementwise distribution functions built on top of it.
"""

from __future__ import annotations

import time
from typing import Any, Callable

import numpy as np
import torch

from torchsignrank.probability import (
    clear_signrank_cache,
    signrank_count_table,
    signrank_cumulative_distribution,
    signrank_probability_mass,
    signrank_quantile,
    signrank_sample,
)
from torchsignrank.statistics.hypothesis_test import wilcoxon_signed_rank


def benchmark(
    func: Callable,
    *args: Any,
    warmup: int = 3,
    iterations: int = 10,
    **kwargs: Any,
) -> dict[str, float]:
    """Time ``func(*args, **kwargs)`` after ``warmup`` untimed calls.

    Returns the mean, standard deviation, median and minimum wall-clock
    time in seconds over ``iterations`` calls.
    """
    for _ in range(warmup):
        func(*args, **kwargs)

    elapsed = np.empty(iterations)

    for i in range(iterations):
        start = time.perf_counter()
        func(*args, **kwargs)
        elapsed[i] = time.perf_counter() - start

    return {
        "mean": float(elapsed.mean()),
        "std": float(elapsed.std()),
        "median": float(np.median(elapsed)),
        "min": float(elapsed.min()),
    }


_UNITS = [(1e-6, 1e9, "ns"), (1e-3, 1e6, "us"), (1.0, 1e3, "ms")]


def format_time(seconds: float) -> str:
    """Format a duration with the largest unit below it."""
    for bound, scale, unit in _UNITS:
        if seconds < bound:
            return f"{seconds * scale:.3f}{unit}"

    return f"{seconds:.3f}s"


def print_result(name: str, timing: dict[str, float]) -> None:
    """Print benchmark result."""
    print(f"\n{name}")
    print("-" * len(name))
    print(
        f"  Time: {format_time(timing['mean'])} "
        f"+/- {format_time(timing['std'])} "
        f"(median {format_time(timing['median'])})"
    )


def _cold_table(n: int) -> None:
    clear_signrank_cache()
    signrank_count_table(n)


class BenchSignrank:
    """Benchmark suite for the signed-rank distribution."""

    def __init__(self, warmup: int = 3, iterations: int = 10):
        self.warmup = warmup
        self.iterations = iterations

    def _bench(
        self, func: Callable, *args: Any, **kwargs: Any
    ) -> dict[str, float]:
        """Run benchmark with configured settings."""
        return benchmark(
            func,
            *args,
            warmup=self.warmup,
            iterations=self.iterations,
            **kwargs,
        )

    def bench_table_cold(self, n: int = 50) -> None:
        """Benchmark building a count table with an empty cache."""
        timing = self._bench(_cold_table, n)

        print_result(f"Count table, cold (n={n})", timing)

    def bench_table_cached(self, n: int = 50) -> None:
        """Benchmark fetching a memoised count table."""
        signrank_count_table(n)

        timing = self._bench(signrank_count_table, n)

        print_result(f"Count table, cached (n={n})", timing)

    def bench_probability_mass(self, n: int = 50) -> None:
        """Benchmark the mass function over the whole support."""
        x = torch.arange(0, n * (n + 1) // 2 + 1, dtype=torch.float64)

        timing = self._bench(signrank_probability_mass, x, n)

        print_result(f"PMF (n={n}, points={x.numel()})", timing)

    def bench_cumulative_distribution(self, n: int = 50) -> None:
        """Benchmark the distribution function over the whole support."""
        x = torch.arange(0, n * (n + 1) // 2 + 1, dtype=torch.float64)

        timing = self._bench(signrank_cumulative_distribution, x, n)

        print_result(f"CDF (n={n}, points={x.numel()})", timing)

    def bench_quantile(self, n: int = 50, num_points: int = 1000) -> None:
        """Benchmark the quantile function on evenly spaced probabilities."""
        p = torch.linspace(0.001, 0.999, num_points, dtype=torch.float64)

        timing = self._bench(signrank_quantile, p, n)

        print_result(f"Quantile (n={n}, points={num_points})", timing)

    def bench_sample(self, n: int = 50, num_draws: int = 1000) -> None:
        """Benchmark random variate generation."""
        generator = torch.Generator().manual_seed(42)

        timing = self._bench(
            signrank_sample, n, (num_draws,), generator=generator
        )

        print_result(f"Sample (n={n}, draws={num_draws})", timing)

    def bench_wilcoxon(self, num_samples: int = 40) -> None:
        """Benchmark the exact Wilcoxon signed-rank test."""
        generator = torch.Generator().manual_seed(42)

        x = torch.randn(num_samples, generator=generator, dtype=torch.float64)

        timing = self._bench(wilcoxon_signed_rank, x)

        print_result(f"Wilcoxon test (samples={num_samples})", timing)

    def run_all(self) -> None:
        """Run all benchmarks."""
        print("=" * 60)
        print("SIGNRANK BENCHMARKS")
        print("=" * 60)

        self.bench_table_cold()
        self.bench_table_cached()
        self.bench_probability_mass()
        self.bench_cumulative_distribution()
        self.bench_quantile()
        self.bench_sample()
        self.bench_wilcoxon()

    def run_scaling(self) -> None:
        """Run scaling benchmarks."""
        print("=" * 60)
        print("SCALING BENCHMARKS")
        print("=" * 60)

        # Exact int64 tables up to n = 62, log-scale beyond
        print("\n--- Sample Size Scaling (cold table) ---")
        for n in [10, 50, 62, 63, 200, 500]:
            self.bench_table_cold(n=n)

        print("\n--- Sample Size Scaling (quantile) ---")
        for n in [10, 50, 200]:
            self.bench_quantile(n=n, num_points=200)


if __name__ == "__main__":
    bench = BenchSignrank(warmup=3, iterations=10)
    bench.run_all()
    print("\n")
    bench.run_scaling()
