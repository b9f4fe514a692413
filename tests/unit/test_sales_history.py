"""
Unit tests for sales history utilities.

Tests:
1. Normalizer (truncate / pad / idempotence)
2. Rolling sums
3. Coefficient of variation
"""

import math
import pytest

from utils.sales_history import (
    normalize_sales_history,
    sum_recent_days,
    coefficient_of_variation,
    clamp,
)


# ===================
# TEST 1: NORMALIZER
# ===================

class TestNormalizeSalesHistory:
    """Tests for normalize_sales_history."""

    def test_truncates_to_most_recent_days(self):
        assert normalize_sales_history([5, 4, 3, 2, 1], 3) == [5.0, 4.0, 3.0]

    def test_pads_short_history_with_leading_zeros(self):
        assert normalize_sales_history([5, 4, 3], 5) == [0.0, 0.0, 5.0, 4.0, 3.0]

    def test_exact_length_unchanged(self):
        assert normalize_sales_history([1, 2, 3], 3) == [1.0, 2.0, 3.0]

    def test_empty_history_is_all_zeros(self):
        assert normalize_sales_history([], 4) == [0.0, 0.0, 0.0, 0.0]

    def test_non_positive_window_is_empty(self):
        assert normalize_sales_history([1, 2, 3], 0) == []
        assert normalize_sales_history([1, 2, 3], -5) == []

    def test_does_not_mutate_input(self):
        history = [3, 2, 1]
        normalize_sales_history(history, 10)
        assert history == [3, 2, 1]

    @pytest.mark.parametrize("history", [
        [],
        [7],
        [1, 2, 3],
        [10.0] * 30,
        list(range(120)),
    ])
    @pytest.mark.parametrize("window", [1, 7, 30, 90])
    def test_idempotent(self, history, window):
        """Normalizing twice gives the same result as normalizing once."""
        once = normalize_sales_history(history, window)
        assert normalize_sales_history(once, window) == once
        assert len(once) == window


# ===================
# TEST 2: ROLLING SUMS
# ===================

class TestSumRecentDays:
    """Tests for sum_recent_days."""

    def test_sums_first_entries(self):
        assert sum_recent_days([1, 2, 3, 4], 2) == 3.0

    def test_window_longer_than_history(self):
        assert sum_recent_days([1, 2], 30) == 3.0

    def test_empty(self):
        assert sum_recent_days([], 7) == 0.0


# ===================
# TEST 3: COEFFICIENT OF VARIATION
# ===================

class TestCoefficientOfVariation:
    """
    CV = population std_dev / mean.

    No signal (empty or zero mean) reads as 1.0.
    """

    def test_constant_values(self):
        assert coefficient_of_variation([4, 4, 4, 4]) == 0.0

    def test_population_std_dev(self):
        # mean 10, population std dev 5
        assert coefficient_of_variation([5, 15]) == pytest.approx(0.5)

    def test_empty(self):
        assert coefficient_of_variation([]) == 1.0

    def test_zero_mean(self):
        assert coefficient_of_variation([0, 0, 0]) == 1.0

    def test_can_exceed_one(self):
        cv = coefficient_of_variation([0, 0, 0, 100])
        assert cv == pytest.approx(math.sqrt(3))


class TestClamp:

    @pytest.mark.parametrize("value,expected", [
        (0.1, 0.5),
        (1.3, 1.3),
        (9.0, 2.0),
    ])
    def test_clamp(self, value, expected):
        assert clamp(value, 0.5, 2.0) == expected


class TestCoefficientOfVariationOverflow:

    def test_huge_values_do_not_raise(self):
        assert coefficient_of_variation([1e308] * 4) == 1.0

    def test_large_finite_values(self):
        assert coefficient_of_variation([1e200, 3e200]) == pytest.approx(0.5)
