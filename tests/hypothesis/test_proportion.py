"""
Tests for the two-proportion z-test path of compute_segment_test().
"""

import math

import pytest
from scipy import stats

from pyworkbench.hypothesis import CHI_SQUARE, TWO_PROPORTION_Z, compute_segment_test


def _category_rows(counts):
    """counts: {segment: {category: n}} -> rows."""
    rows = []
    for segment, by_category in counts.items():
        for category, n in by_category.items():
            rows += [{"segment": segment, "outcome": category}] * n
    return rows


def _pooled_z(x_a, n_a, x_b, n_b):
    p_a, p_b = x_a / n_a, x_b / n_b
    pooled = (x_a + x_b) / (n_a + n_b)
    se = math.sqrt(pooled * (1 - pooled) * (1 / n_a + 1 / n_b))
    return (p_a - p_b) / se


class TestTwoProportion:

    def test_statistic_and_p_value(self):
        rows = _category_rows({
            "A": {"yes": 45, "no": 55},
            "B": {"yes": 30, "no": 70},
        })
        result = compute_segment_test(
            rows, "outcome", "text", "segment", ["A", "B"], target_category="yes"
        )
        z = _pooled_z(45, 100, 30, 100)
        assert result.ok
        assert result.test_type == TWO_PROPORTION_Z
        assert result.statistic == pytest.approx(z, rel=1e-12)
        assert result.p_value == pytest.approx(2 * stats.norm.sf(abs(z)), abs=1e-6)
        assert result.degrees_of_freedom is None

    def test_matches_chi_square_on_two_by_two(self):
        # z^2 equals the uncorrected chi-squared statistic of the 2x2 table
        rows = _category_rows({
            "A": {"yes": 45, "no": 55},
            "B": {"yes": 30, "no": 70},
        })
        z = compute_segment_test(
            rows, "outcome", "text", "segment", ["A", "B"], target_category="yes"
        )
        chi = compute_segment_test(rows, "outcome", "text", "segment", ["A", "B"])
        assert chi.test_type == CHI_SQUARE
        assert z.statistic ** 2 == pytest.approx(chi.statistic, rel=1e-10)

    def test_group_summaries(self):
        rows = _category_rows({
            "A": {"yes": 45, "no": 55},
            "B": {"yes": 30, "no": 70},
        })
        result = compute_segment_test(
            rows, "outcome", "text", "segment", ["A", "B"], target_category="yes",
            category_labels={"yes": "Converted"},
        )
        first, second = result.groups
        assert (first.success_count, first.sample_size) == (45, 100)
        assert first.success_ratio == pytest.approx(0.45)
        assert second.success_ratio == pytest.approx(0.30)
        assert result.target_category == "yes"
        assert result.target_category_label == "Converted"

    def test_large_difference(self):
        rows = _category_rows({
            "A": {"yes": 50, "no": 50},
            "B": {"yes": 90, "no": 10},
        })
        result = compute_segment_test(
            rows, "outcome", "string", "segment", ["A", "B"], target_category="yes"
        )
        assert abs(result.statistic) > 5
        assert result.statistic < 0
        assert result.p_value == pytest.approx(0.0, abs=1e-6)
        assert result.interpretation.startswith("Significant")

    def test_target_category_is_trimmed(self):
        rows = _category_rows({
            "A": {"yes": 4, "no": 6},
            "B": {"yes": 7, "no": 3},
        })
        result = compute_segment_test(
            rows, "outcome", "text", "segment", ["A", "B"], target_category="  yes "
        )
        assert result.groups[0].success_count == 4

    def test_category_absent_from_one_group(self):
        rows = _category_rows({
            "A": {"yes": 10, "no": 10},
            "B": {"no": 20},
        })
        result = compute_segment_test(
            rows, "outcome", "text", "segment", ["A", "B"], target_category="yes"
        )
        assert result.ok
        assert result.groups[1].success_count == 0
        assert result.statistic > 0

    def test_small_groups_warn(self):
        rows = _category_rows({
            "A": {"yes": 2, "no": 3},
            "B": {"yes": 8, "no": 4},
        })
        result = compute_segment_test(
            rows, "outcome", "text", "segment", ["A", "B"], target_category="yes"
        )
        assert result.ok
        assert result.warnings == (
            "At least one group has fewer than 10 observations. "
            "The z-test may be unreliable.",
        )

    def test_empty_target_counts_as_category(self):
        rows = _category_rows({
            "A": {"yes": 10, "": 10},
            "B": {"yes": 15, "": 5},
        })
        result = compute_segment_test(
            rows, "outcome", "text", "segment", ["A", "B"], target_category="yes"
        )
        assert result.ok
        assert result.groups[0].sample_size == 20


class TestTwoProportionFailures:

    def test_single_category(self):
        rows = _category_rows({"A": {"yes": 10}, "B": {"yes": 12}})
        result = compute_segment_test(
            rows, "outcome", "text", "segment", ["A", "B"], target_category="yes"
        )
        assert not result.ok
        assert result.reason == "At least two distinct target values are required."

    def test_target_category_never_observed(self):
        rows = _category_rows({
            "A": {"no": 10, "maybe": 5},
            "B": {"no": 12, "maybe": 3},
        })
        result = compute_segment_test(
            rows, "outcome", "text", "segment", ["A", "B"], target_category="yes"
        )
        assert not result.ok
        assert "no variance" in result.reason

    def test_three_groups_fall_back_to_chi_square(self):
        rows = _category_rows({
            "A": {"yes": 10, "no": 10},
            "B": {"yes": 15, "no": 5},
            "C": {"yes": 5, "no": 15},
        })
        result = compute_segment_test(
            rows, "outcome", "text", "segment", ["A", "B", "C"], target_category="yes"
        )
        assert result.test_type == CHI_SQUARE
