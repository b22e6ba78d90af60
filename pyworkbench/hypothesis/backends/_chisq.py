"""
Pearson chi-squared test of independence between segment and target.

Rows of the contingency table are the groups, columns the observed
target categories (most frequent first). No continuity correction.
"""

from __future__ import annotations

import numpy as np

from pyworkbench.hypothesis._common import (
    CHI_SQUARE,
    CategoryShare,
    GroupSummary,
    SegmentTestParams,
    interpretation_text,
)
from pyworkbench.hypothesis.backends._grouping import SegmentGroup, category_totals
from pyworkbench.hypothesis.design import SegmentTestDesign
from pyworkbench.hypothesis.distributions import chi_square_cdf, clamp_probability


def chi_square_test(
    design: SegmentTestDesign,
    groups: list[SegmentGroup],
) -> tuple[SegmentTestParams, list[str]]:
    """Chi-squared independence test over groups x categories."""
    warnings: list[str] = []
    categories = list(category_totals(groups))
    if len(categories) < 2:
        return SegmentTestParams.failed(
            "At least two distinct target values are required."
        ), warnings

    observed = np.array(
        [[group.category_counts.get(c, 0) for c in categories] for group in groups],
        dtype=np.float64,
    )
    row_totals = observed.sum(axis=1)
    col_totals = observed.sum(axis=0)
    expected = np.outer(row_totals, col_totals) / observed.sum()

    if np.any(expected < design.thresholds.min_expected_count):
        warnings.append(
            f"At least one expected count is below "
            f"{design.thresholds.min_expected_count:g}. "
            f"The chi-squared approximation may be inaccurate."
        )

    positive = expected > 0
    statistic = float(
        np.sum((observed[positive] - expected[positive]) ** 2 / expected[positive])
    )

    df = (len(groups) - 1) * (len(categories) - 1)
    if df <= 0:
        return SegmentTestParams.failed(
            "The chi-squared test cannot be computed with 0 degrees of freedom."
        ), warnings

    p_value = clamp_probability(1.0 - chi_square_cdf(statistic, df))

    params = SegmentTestParams(
        ok=True,
        test_type=CHI_SQUARE,
        statistic=statistic,
        degrees_of_freedom=float(df),
        p_value=p_value,
        interpretation=interpretation_text(p_value, design.significance_level),
        groups=tuple(
            GroupSummary(
                value=group.value,
                label=group.label,
                sample_size=group.sample_size,
                categories=tuple(
                    CategoryShare(
                        value=c,
                        label=design.category_label(c),
                        count=group.category_counts.get(c, 0),
                        ratio=group.category_counts.get(c, 0) / group.sample_size,
                    )
                    for c in categories
                ),
            )
            for group in groups
        ),
        categories=tuple((c, design.category_label(c)) for c in categories),
    )
    return params, warnings
