"""Tests for wilcoxon_signed_rank function."""

import itertools

import pytest
import torch

from torchsignrank.probability import SignrankPrecisionWarning
from torchsignrank.statistics.hypothesis_test import wilcoxon_signed_rank

# Hollander & Wolfe depression scores (first and second visit).
DEPRESSION_X = [1.83, 0.50, 1.62, 2.48, 1.68, 1.88, 1.55, 3.06, 1.30]
DEPRESSION_Y = [0.878, 0.647, 0.598, 2.05, 1.06, 1.29, 1.06, 3.14, 1.29]


def _brute_force_pvalues(statistic: float, n: int) -> tuple[float, float]:
    less = greater = 0
    for signs in itertools.product([0, 1], repeat=n):
        w = sum(rank * s for rank, s in zip(range(1, n + 1), signs))
        less += w <= statistic
        greater += w >= statistic
    return less / 2**n, greater / 2**n


class TestWilcoxonSignedRank:
    """Tests for wilcoxon_signed_rank function."""

    def test_paired(self):
        x = torch.tensor(DEPRESSION_X, dtype=torch.float64)
        y = torch.tensor(DEPRESSION_Y, dtype=torch.float64)

        statistic, pvalue = wilcoxon_signed_rank(x, y)

        assert statistic.item() == 40.0
        torch.testing.assert_close(
            pvalue, torch.tensor(20 / 512, dtype=torch.float64)
        )

    def test_alternatives(self):
        x = torch.tensor(DEPRESSION_X, dtype=torch.float64)
        y = torch.tensor(DEPRESSION_Y, dtype=torch.float64)

        _, greater = wilcoxon_signed_rank(x, y, alternative="greater")
        _, less = wilcoxon_signed_rank(x, y, alternative="less")

        torch.testing.assert_close(
            greater, torch.tensor(10 / 512, dtype=torch.float64)
        )
        torch.testing.assert_close(
            less, torch.tensor(505 / 512, dtype=torch.float64)
        )

    def test_one_sample(self):
        x = torch.tensor([1.0, 2.0, 3.0, 4.0, 5.0], dtype=torch.float64)

        statistic, pvalue = wilcoxon_signed_rank(x)

        assert statistic.item() == 15.0
        torch.testing.assert_close(
            pvalue, torch.tensor(0.0625, dtype=torch.float64)
        )

    def test_two_sided_capped_at_one(self):
        x = torch.tensor([1.0, -2.0, -3.0, 4.0], dtype=torch.float64)

        _, pvalue = wilcoxon_signed_rank(x)

        assert pvalue.item() == 1.0

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_brute_force(self, seed):
        generator = torch.Generator().manual_seed(seed)
        x = torch.randn(8, generator=generator, dtype=torch.float64) + 0.3

        statistic, _ = wilcoxon_signed_rank(x)
        _, less = wilcoxon_signed_rank(x, alternative="less")
        _, greater = wilcoxon_signed_rank(x, alternative="greater")

        expected_less, expected_greater = _brute_force_pvalues(
            statistic.item(), 8
        )

        assert abs(less.item() - expected_less) < 1e-12
        assert abs(greater.item() - expected_greater) < 1e-12

    @pytest.mark.parametrize("alternative", ["less", "greater"])
    def test_matches_scipy_exact(self, alternative):
        scipy_stats = pytest.importorskip("scipy.stats")

        x = torch.tensor(DEPRESSION_X, dtype=torch.float64)
        y = torch.tensor(DEPRESSION_Y, dtype=torch.float64)

        statistic, pvalue = wilcoxon_signed_rank(x, y, alternative=alternative)
        scipy_result = scipy_stats.wilcoxon(
            x.numpy(), y.numpy(), alternative=alternative, method="exact"
        )

        assert abs(statistic.item() - scipy_result.statistic) < 1e-12
        assert abs(pvalue.item() - scipy_result.pvalue) < 1e-12

    def test_zero_differences_excluded(self):
        x = torch.tensor([1.0, 2.0, 3.0, 4.0], dtype=torch.float64)
        y = torch.tensor([1.0, 1.0, 1.0, 1.0], dtype=torch.float64)

        with_zero = wilcoxon_signed_rank(x, y, alternative="greater")
        without = wilcoxon_signed_rank(
            torch.tensor([1.0, 2.0, 3.0], dtype=torch.float64),
            alternative="greater",
        )

        assert with_zero[0].item() == without[0].item() == 6.0
        torch.testing.assert_close(
            with_zero[1], torch.tensor(0.125, dtype=torch.float64)
        )
        torch.testing.assert_close(with_zero[1], without[1])

    def test_ties_warn(self):
        x = torch.tensor([1.0, -1.0, 2.0, 3.0], dtype=torch.float64)

        with pytest.warns(SignrankPrecisionWarning):
            statistic, _ = wilcoxon_signed_rank(x)

        # Ranks of |x|: 1.5, 1.5, 3, 4
        assert statistic.item() == 8.5

    def test_half_integer_statistic_tails(self):
        """W = 8.5 for n = 4: P(W <= 8.5) = 14/16 and P(W >= 8.5) = 2/16."""
        x = torch.tensor([1.0, -1.0, 2.0, 3.0], dtype=torch.float64)

        with pytest.warns(SignrankPrecisionWarning):
            _, less = wilcoxon_signed_rank(x, alternative="less")
        with pytest.warns(SignrankPrecisionWarning):
            _, greater = wilcoxon_signed_rank(x, alternative="greater")

        assert abs(less.item() - 14 / 16) < 1e-12
        assert abs(greater.item() - 2 / 16) < 1e-12

    def test_integer_input(self):
        statistic, pvalue = wilcoxon_signed_rank(torch.tensor([1, 2, 3]))

        assert statistic.dtype == torch.float64
        assert pvalue.dtype == torch.float64
        assert statistic.item() == 6.0

    def test_float32_input(self):
        x = torch.tensor([1.0, 2.0, 3.0], dtype=torch.float32)

        statistic, pvalue = wilcoxon_signed_rank(x)

        assert statistic.dtype == torch.float32
        assert pvalue.dtype == torch.float32

    def test_all_zero_raises(self):
        x = torch.zeros(4, dtype=torch.float64)

        with pytest.raises(ValueError, match="zero"):
            wilcoxon_signed_rank(x)

    def test_shape_mismatch_raises(self):
        x = torch.tensor([1.0, 2.0, 3.0])
        y = torch.tensor([1.0, 2.0])

        with pytest.raises(ValueError, match="same shape"):
            wilcoxon_signed_rank(x, y)

    def test_multidimensional_raises(self):
        with pytest.raises(ValueError, match="1-dimensional"):
            wilcoxon_signed_rank(torch.ones(2, 3))

    def test_unknown_alternative_raises(self):
        with pytest.raises(ValueError, match="alternative"):
            wilcoxon_signed_rank(torch.tensor([1.0]), alternative="both")

    def test_unknown_zero_method_raises(self):
        with pytest.raises(ValueError, match="zero_method"):
            wilcoxon_signed_rank(torch.tensor([1.0]), zero_method="pratt")
