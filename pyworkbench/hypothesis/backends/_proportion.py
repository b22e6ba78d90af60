"""
Two-proportion z-test with pooled standard error.

Success means the row's target value equals the design's target
category.
"""

from __future__ import annotations

import math

from pyworkbench.hypothesis._common import (
    TWO_PROPORTION_Z,
    GroupSummary,
    SegmentTestParams,
    interpretation_text,
)
from pyworkbench.hypothesis.backends._grouping import SegmentGroup, category_totals
from pyworkbench.hypothesis.design import SegmentTestDesign
from pyworkbench.hypothesis.distributions import clamp_probability, normal_cdf


def two_proportion_z_test(
    design: SegmentTestDesign,
    groups: list[SegmentGroup],
) -> tuple[SegmentTestParams, list[str]]:
    """z-test of success rates between exactly two groups."""
    warnings: list[str] = []
    if len(category_totals(groups)) < 2:
        return SegmentTestParams.failed(
            "At least two distinct target values are required."
        ), warnings

    target = design.target_category
    group_a, group_b = groups
    n_a, n_b = group_a.sample_size, group_b.sample_size
    x_a = group_a.category_counts.get(target, 0)
    x_b = group_b.category_counts.get(target, 0)
    p_a = x_a / n_a
    p_b = x_b / n_b
    pooled = (x_a + x_b) / (n_a + n_b)
    variance = pooled * (1.0 - pooled) * (1.0 / n_a + 1.0 / n_b)

    if not math.isfinite(variance) or variance <= 0:
        return SegmentTestParams.failed(
            "The z-test is undefined because the proportions have no variance."
        ), warnings

    min_size = design.thresholds.min_proportion_group_size
    if n_a < min_size or n_b < min_size:
        warnings.append(
            f"At least one group has fewer than {min_size} observations. "
            f"The z-test may be unreliable."
        )

    z_stat = (p_a - p_b) / math.sqrt(variance)
    p_value = clamp_probability(2.0 * (1.0 - normal_cdf(abs(z_stat))))

    params = SegmentTestParams(
        ok=True,
        test_type=TWO_PROPORTION_Z,
        statistic=z_stat,
        degrees_of_freedom=None,
        p_value=p_value,
        interpretation=interpretation_text(p_value, design.significance_level),
        groups=(
            GroupSummary(group_a.value, group_a.label, n_a,
                         success_count=x_a, success_ratio=p_a),
            GroupSummary(group_b.value, group_b.label, n_b,
                         success_count=x_b, success_ratio=p_b),
        ),
        target_category=target,
        target_category_label=design.category_label(target),
    )
    return params, warnings
