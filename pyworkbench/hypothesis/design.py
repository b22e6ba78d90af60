"""
SegmentTestDesign: validated inputs of a segment test.

Built through the for_segment_test() factory, which normalizes and
checks the caller's selection. Immutable after construction.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pyworkbench.core.exceptions import ValidationError
from pyworkbench.core.validation import check_choice, check_open_unit_interval
from pyworkbench.hypothesis._common import (
    DEFAULT_THRESHOLDS,
    EMPTY_LABEL,
    NUMERIC_TARGET,
    TARGET_TYPE_ALIASES,
    TARGET_TYPES,
    TestThresholds,
)


def normalize_text(value: Any) -> str:
    """Segment / category key of a cell: stripped text, '' for None."""
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class SegmentTestDesign:
    """
    Design for a segment comparison.

    Do not construct directly; use for_segment_test().
    """
    samples: tuple[Mapping[str, Any], ...]
    target_column: str
    target_type: str
    segment_column: str
    segment_values: tuple[str, ...]
    target_category: str = ""
    significance_level: float = 0.05
    segment_labels: Mapping[str, str] = field(default_factory=dict)
    category_labels: Mapping[str, str] = field(default_factory=dict)
    thresholds: TestThresholds = DEFAULT_THRESHOLDS

    @property
    def is_numeric(self) -> bool:
        return self.target_type == NUMERIC_TARGET

    def segment_label(self, value: str) -> str:
        return self.segment_labels.get(value) or value or EMPTY_LABEL

    def category_label(self, value: str) -> str:
        return self.category_labels.get(value) or value or EMPTY_LABEL

    @classmethod
    def for_segment_test(
        cls,
        samples: Sequence[Mapping[str, Any]] | None,
        target_column: str | None,
        target_type: str,
        segment_column: str | None,
        selected_segment_values: Sequence[Any] | None,
        target_category: Any = None,
        significance_level: float = 0.05,
        segment_labels: Mapping[str, str] | None = None,
        category_labels: Mapping[str, str] | None = None,
        thresholds: TestThresholds = DEFAULT_THRESHOLDS,
    ) -> SegmentTestDesign:
        """
        Validate and normalize a segment test request.

        Selected segment values are compared as stripped text; None
        entries and repeats are dropped.

        Raises:
            ValidationError: Empty samples, missing column names, fewer
                than two distinct segment values, unknown target type or
                a significance level outside (0, 1).
        """
        if not samples:
            raise ValidationError("No sample data available.")
        if not target_column or not segment_column:
            raise ValidationError("Select a target column and a segment column.")

        target_type = TARGET_TYPE_ALIASES.get(target_type, target_type)
        check_choice(target_type, TARGET_TYPES, "target_type")

        segment_values = tuple(dict.fromkeys(
            normalize_text(v) for v in (selected_segment_values or ()) if v is not None
        ))
        if len(segment_values) < 2:
            raise ValidationError("Select at least two segment values.")

        alpha = check_open_unit_interval(significance_level, "significance_level")

        return cls(
            samples=tuple(samples),
            target_column=target_column,
            target_type=target_type,
            segment_column=segment_column,
            segment_values=segment_values,
            target_category=normalize_text(target_category),
            significance_level=alpha,
            segment_labels=dict(segment_labels or {}),
            category_labels=dict(category_labels or {}),
            thresholds=thresholds,
        )
