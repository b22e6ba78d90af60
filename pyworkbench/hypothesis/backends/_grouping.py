"""
Bucketing of sample rows into segment groups.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from pyworkbench.core.parsing import coerce_number
from pyworkbench.hypothesis.design import SegmentTestDesign, normalize_text


@dataclass
class SegmentGroup:
    """Rows of one selected segment value, as gathered in a single pass."""
    value: str
    label: str
    invalid_count: int = 0
    values: list[float] = field(default_factory=list)
    category_counts: dict[str, int] = field(default_factory=dict)
    text_count: int = 0

    @property
    def sample_size(self) -> int:
        return len(self.values) + self.text_count

    def mean(self) -> float:
        return float(np.mean(self.values))

    def variance(self) -> float:
        """Bessel-corrected sample variance, 0 for a single value."""
        if len(self.values) < 2:
            return 0.0
        return max(0.0, float(np.var(self.values, ddof=1)))


def collect_groups(design: SegmentTestDesign) -> tuple[list[SegmentGroup], list[str]]:
    """
    One group per selected segment value that has usable observations.

    Rows whose segment is not selected are ignored. For numeric targets,
    rows whose target does not parse as a number are skipped and counted.

    Returns:
        (groups in selection order, warnings)
    """
    by_value: dict[str, SegmentGroup] = {}
    selected = set(design.segment_values)

    for row in design.samples:
        row = row or {}
        segment = normalize_text(row.get(design.segment_column))
        if segment not in selected:
            continue
        group = by_value.get(segment)
        if group is None:
            group = SegmentGroup(value=segment, label=design.segment_label(segment))
            by_value[segment] = group

        raw_target = row.get(design.target_column)
        if design.is_numeric:
            number = coerce_number(raw_target, accept_bool=False)
            if number is None:
                group.invalid_count += 1
            else:
                group.values.append(number)
            continue

        category = normalize_text(raw_target)
        group.text_count += 1
        group.category_counts[category] = group.category_counts.get(category, 0) + 1

    groups: list[SegmentGroup] = []
    warnings: list[str] = []
    for value in design.segment_values:
        group = by_value.get(value)
        if group is None or group.sample_size == 0:
            warnings.append(
                f'Segment "{design.segment_label(value)}" has no usable observations '
                f"for the selected target column."
            )
            continue
        if group.invalid_count > 0:
            warnings.append(
                f'Segment "{group.label}": {group.invalid_count:,} rows without a '
                f"usable target value were skipped."
            )
        groups.append(group)
    return groups, warnings


def category_totals(groups: list[SegmentGroup]) -> dict[str, int]:
    """Observed categories across groups, most frequent first (stable on ties)."""
    totals: dict[str, int] = {}
    for group in groups:
        for category, count in group.category_counts.items():
            totals[category] = totals.get(category, 0) + count
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))
