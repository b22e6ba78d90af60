"""
Common types for segment tests.

Defines SegmentTestParams (the payload every segment test returns), the
group summaries and the advisory thresholds.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any


NUMERIC_TARGET = "numeric"
TEXT_TARGET = "text"
TARGET_TYPES = (NUMERIC_TARGET, TEXT_TARGET)
TARGET_TYPE_ALIASES = {
    "number": NUMERIC_TARGET,
    "string": TEXT_TARGET,
    "categorical": TEXT_TARGET,
}

WELCH_T = "welch-t"
TWO_PROPORTION_Z = "two-proportion-z"
CHI_SQUARE = "chi-square"

TEST_NAMES = {
    WELCH_T: "Welch Two Sample t-test",
    TWO_PROPORTION_Z: "Two-proportion z-test",
    CHI_SQUARE: "Pearson's Chi-squared test of independence",
}
STATISTIC_LABELS = {
    WELCH_T: "t",
    TWO_PROPORTION_Z: "z",
    CHI_SQUARE: "X-squared",
}

EMPTY_LABEL = "(empty)"


@dataclass(frozen=True)
class TestThresholds:
    """
    Sample sizes below which a test result gets an advisory warning.

    Attributes:
        min_numeric_group_size: Valid numeric observations per Welch group
        min_proportion_group_size: Observations per z-test group
        min_expected_count: Expected contingency-table cell count
    """
    __test__ = False  # not a pytest class

    min_numeric_group_size: int = 5
    min_proportion_group_size: int = 10
    min_expected_count: float = 5.0


DEFAULT_THRESHOLDS = TestThresholds()


@dataclass(frozen=True)
class CategoryShare:
    """Count and share of one target category within a group."""
    value: str
    label: str
    count: int
    ratio: float

    def to_dict(self) -> dict[str, Any]:
        return {
            'value': self.value,
            'label': self.label,
            'count': self.count,
            'ratio': self.ratio,
        }


@dataclass(frozen=True)
class GroupSummary:
    """
    Per-segment summary, enough to render a results table.

    Fields not produced by the test that ran stay None / empty: Welch
    fills mean and std_dev, the z-test success_count and success_ratio,
    chi-square the category breakdown.
    """
    value: str
    label: str
    sample_size: int
    mean: float | None = None
    std_dev: float | None = None
    success_count: int | None = None
    success_ratio: float | None = None
    categories: tuple[CategoryShare, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            'value': self.value,
            'label': self.label,
            'sampleSize': self.sample_size,
        }
        if self.mean is not None:
            out['mean'] = self.mean
            out['stdDev'] = self.std_dev
        if self.success_count is not None:
            out['successCount'] = self.success_count
            out['successRatio'] = self.success_ratio
        if self.categories:
            out['topCategories'] = [c.to_dict() for c in self.categories]
        return out


@dataclass(frozen=True)
class SegmentTestParams:
    """
    Parameter payload for segment tests.

    A tagged union on `ok`: failed tests carry only `reason`; successful
    ones carry the statistic and its context.

    Attributes
    ----------
    ok : bool
        Whether a test could be computed.
    reason : str or None
        Why not, for ok=False.
    test_type : str or None
        "welch-t", "two-proportion-z" or "chi-square".
    statistic : float or None
        t, z or X-squared.
    degrees_of_freedom : float or None
        None for the z-test.
    p_value : float or None
        Two-sided p-value, clamped to [0, 1].
    interpretation : str or None
        Significance verdict at the requested alpha.
    groups : tuple of GroupSummary
        Compared groups in selection order.
    effect_size, effect_label
        Welch only: mean difference of the first minus the second group.
    target_category, target_category_label
        z-test only: the category counted as a success.
    categories : tuple of (value, label)
        Chi-square only: columns of the contingency table.
    """
    ok: bool
    reason: str | None = None
    test_type: str | None = None
    statistic: float | None = None
    degrees_of_freedom: float | None = None
    p_value: float | None = None
    interpretation: str | None = None
    groups: tuple[GroupSummary, ...] = field(default_factory=tuple)
    effect_size: float | None = None
    effect_label: str | None = None
    target_category: str | None = None
    target_category_label: str | None = None
    categories: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @classmethod
    def failed(cls, reason: str) -> SegmentTestParams:
        return cls(ok=False, reason=reason)


def interpretation_text(p_value: float, significance_level: float) -> str:
    """'Significant difference (alpha = 0.05)' or its negation."""
    alpha = f"{significance_level:.2f}"
    if not math.isnan(p_value) and p_value < significance_level:
        return f"Significant difference (alpha = {alpha})"
    return f"No significant difference (alpha = {alpha})"


def unique_warnings(warnings: list[str]) -> tuple[str, ...]:
    """Drop repeated warnings, keeping first occurrences in order."""
    return tuple(dict.fromkeys(warnings))
