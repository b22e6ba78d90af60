"""
Solver entry point for segment tests.

compute_segment_test() compares a target column across the selected
values of a segment column. The test follows from the inputs:

    numeric target                              -> Welch t-test
    text target, target category, two groups    -> two-proportion z-test
    text target otherwise                       -> chi-squared independence

Input problems never raise: they come back as ok=False solutions.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pyworkbench.core.exceptions import ValidationError
from pyworkbench.core.protocols import Backend
from pyworkbench.core.result import Result
from pyworkbench.hypothesis._common import (
    DEFAULT_THRESHOLDS,
    SegmentTestParams,
    TestThresholds,
)
from pyworkbench.hypothesis.backends.cpu import CPUSegmentTestBackend
from pyworkbench.hypothesis.design import SegmentTestDesign
from pyworkbench.hypothesis.solution import SegmentTestSolution

logger = logging.getLogger(__name__)


def compute_segment_test(
    samples: Sequence[Mapping[str, Any]] | SegmentTestDesign | None,
    target_column: str | None = None,
    target_type: str = "numeric",
    segment_column: str | None = None,
    selected_segment_values: Sequence[Any] | None = None,
    target_category: Any = None,
    significance_level: float = 0.05,
    segment_labels: Mapping[str, str] | None = None,
    category_labels: Mapping[str, str] | None = None,
    *,
    thresholds: TestThresholds = DEFAULT_THRESHOLDS,
) -> SegmentTestSolution:
    """
    Compare a target column across segments.

    Parameters
    ----------
    samples : sequence of mappings or SegmentTestDesign
        Sample rows (column name -> raw value), or a prepared design.
    target_column : str
        Column whose values are compared.
    target_type : str
        "numeric" or "text" ("number"/"string" are accepted as aliases).
    segment_column : str
        Column whose values define the groups.
    selected_segment_values : sequence
        At least two segment values to compare, in display order.
    target_category : str, optional
        For text targets: the category counted as a success. With
        exactly two groups this selects the two-proportion z-test.
    significance_level : float
        Alpha for the interpretation, in (0, 1). Default 0.05.
    segment_labels, category_labels : mapping, optional
        Display labels for segment and category values.
    thresholds : TestThresholds
        Sample sizes that trigger advisory warnings.

    Returns
    -------
    SegmentTestSolution

    Examples
    --------
    >>> rows = [{"g": "a", "y": v} for v in (1, 2, 3)] + \\
    ...        [{"g": "b", "y": v} for v in (4, 5, 7)]
    >>> compute_segment_test(rows, "y", "numeric", "g", ["a", "b"]).test_type
    'welch-t'
    """
    if isinstance(samples, SegmentTestDesign):
        design = samples
    else:
        try:
            design = SegmentTestDesign.for_segment_test(
                samples,
                target_column,
                target_type,
                segment_column,
                selected_segment_values,
                target_category=target_category,
                significance_level=significance_level,
                segment_labels=segment_labels,
                category_labels=category_labels,
                thresholds=thresholds,
            )
        except ValidationError as e:
            logger.debug("segment test rejected: %s", e)
            return SegmentTestSolution(
                _result=Result(
                    params=SegmentTestParams.failed(str(e)),
                    info={'test_type': None},
                    timing=None,
                    backend_name='validation',
                ),
                _design=None,
            )

    backend: Backend[SegmentTestDesign, SegmentTestParams] = CPUSegmentTestBackend()
    result = backend.solve(design)
    return SegmentTestSolution(_result=result, _design=design)
