"""
CPU backend for segment tests.

Groups the sample rows, picks the test that fits the target type and
selection, and dispatches to the test-specific submodule.
"""

from __future__ import annotations

import logging

from pyworkbench.core.compute.timing import Timer
from pyworkbench.core.result import Result
from pyworkbench.hypothesis._common import (
    CHI_SQUARE,
    TWO_PROPORTION_Z,
    WELCH_T,
    SegmentTestParams,
    unique_warnings,
)
from pyworkbench.hypothesis.backends._grouping import SegmentGroup, collect_groups
from pyworkbench.hypothesis.design import SegmentTestDesign

logger = logging.getLogger(__name__)


def select_test_type(design: SegmentTestDesign, groups: list[SegmentGroup]) -> str:
    """
    Test for a design: Welch for numeric targets, the z-test for a
    categorical target with a target category and exactly two groups,
    chi-squared otherwise.
    """
    if design.is_numeric:
        return WELCH_T
    if design.target_category and len(groups) == 2:
        return TWO_PROPORTION_Z
    return CHI_SQUARE


class CPUSegmentTestBackend:
    """CPU reference backend for segment tests."""

    @property
    def name(self) -> str:
        return 'cpu_segment_test'

    def solve(self, design: SegmentTestDesign) -> Result[SegmentTestParams]:
        timer = Timer()
        timer.start()

        with timer.section('grouping'):
            groups, warnings_list = collect_groups(design)

        test_type = select_test_type(design, groups)

        with timer.section(test_type):
            if len(groups) < 2:
                params = SegmentTestParams.failed(
                    "At least two segments with valid values are required "
                    "for a comparison."
                )
            elif test_type == WELCH_T:
                from pyworkbench.hypothesis.backends._welch import welch_t_test
                params, test_warnings = welch_t_test(design, groups)
                warnings_list.extend(test_warnings)
            elif test_type == TWO_PROPORTION_Z:
                from pyworkbench.hypothesis.backends._proportion import two_proportion_z_test
                params, test_warnings = two_proportion_z_test(design, groups)
                warnings_list.extend(test_warnings)
            elif test_type == CHI_SQUARE:
                from pyworkbench.hypothesis.backends._chisq import chi_square_test
                params, test_warnings = chi_square_test(design, groups)
                warnings_list.extend(test_warnings)
            else:
                raise ValueError(f"Unknown test_type: {test_type!r}")

        timer.stop()
        logger.debug(
            "segment test %s over %d groups: ok=%s", test_type, len(groups), params.ok
        )

        return Result(
            params=params,
            info={
                'test_type': test_type if params.ok else None,
                'group_count': len(groups),
                'sample_count': len(design.samples),
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=unique_warnings(warnings_list),
        )
