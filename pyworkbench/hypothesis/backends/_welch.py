"""
Welch two-sample t-test between two segment groups.

t  = (mean_a - mean_b) / sqrt(var_a/n_a + var_b/n_b)
df = (var_a/n_a + var_b/n_b)^2 /
     ((var_a/n_a)^2/(n_a-1) + (var_b/n_b)^2/(n_b-1))
"""

from __future__ import annotations

import math

from pyworkbench.hypothesis._common import (
    WELCH_T,
    GroupSummary,
    SegmentTestParams,
    interpretation_text,
)
from pyworkbench.hypothesis.backends._grouping import SegmentGroup
from pyworkbench.hypothesis.design import SegmentTestDesign
from pyworkbench.hypothesis.distributions import clamp_probability, student_t_cdf


def welch_t_test(
    design: SegmentTestDesign,
    groups: list[SegmentGroup],
) -> tuple[SegmentTestParams, list[str]]:
    """Welch t-test; requires exactly two groups."""
    warnings: list[str] = []
    if len(groups) != 2:
        return SegmentTestParams.failed(
            "Welch's t-test compares exactly two groups. Select two segment values."
        ), warnings

    min_size = design.thresholds.min_numeric_group_size
    summaries = []
    for group in groups:
        n = group.sample_size
        variance = group.variance()
        summaries.append((n, group.mean(), variance))
        if n < min_size:
            warnings.append(
                f'Segment "{group.label}" has only {n} valid values. '
                f"The test has limited power."
            )

    (n_a, mean_a, var_a), (n_b, mean_b, var_b) = summaries
    se2_a = var_a / n_a
    se2_b = var_b / n_b
    variance_term = se2_a + se2_b
    if not math.isfinite(variance_term) or variance_term <= 0:
        return SegmentTestParams.failed(
            "The t-test cannot be computed because the groups have no variance."
        ), warnings

    t_stat = (mean_a - mean_b) / math.sqrt(variance_term)

    # Welch-Satterthwaite; undefined when a group has a single value
    denominator = 0.0
    if n_a > 1 and n_b > 1:
        denominator = se2_a ** 2 / (n_a - 1) + se2_b ** 2 / (n_b - 1)
    df = variance_term ** 2 / denominator if denominator > 0 else math.nan

    tail = student_t_cdf(abs(t_stat), df)
    if not math.isfinite(tail):
        return SegmentTestParams.failed(
            "The p-value of the t-test could not be computed."
        ), warnings

    p_value = clamp_probability(2.0 * (1.0 - tail))
    group_a, group_b = groups

    params = SegmentTestParams(
        ok=True,
        test_type=WELCH_T,
        statistic=t_stat,
        degrees_of_freedom=df,
        p_value=p_value,
        interpretation=interpretation_text(p_value, design.significance_level),
        groups=tuple(
            GroupSummary(
                value=group.value,
                label=group.label,
                sample_size=n,
                mean=mean,
                std_dev=math.sqrt(variance),
            )
            for group, (n, mean, variance) in zip(groups, summaries)
        ),
        effect_size=mean_a - mean_b,
        effect_label=f"{group_a.label} - {group_b.label}",
    )
    return params, warnings
