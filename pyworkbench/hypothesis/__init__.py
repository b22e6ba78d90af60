"""
Statistical test engine.

Compares a target column across segments with Welch's t-test, the
two-proportion z-test or Pearson's chi-squared test, using hand-written
special functions for the p-values.
"""

from pyworkbench.hypothesis._common import (
    CHI_SQUARE,
    DEFAULT_THRESHOLDS,
    NUMERIC_TARGET,
    TEXT_TARGET,
    TWO_PROPORTION_Z,
    WELCH_T,
    CategoryShare,
    GroupSummary,
    SegmentTestParams,
    TestThresholds,
)
from pyworkbench.hypothesis.design import SegmentTestDesign
from pyworkbench.hypothesis.distributions import (
    chi_square_cdf,
    erf,
    log_gamma,
    normal_cdf,
    regularized_gamma_p,
    regularized_incomplete_beta,
    student_t_cdf,
)
from pyworkbench.hypothesis.solution import SegmentTestSolution
from pyworkbench.hypothesis.solvers import compute_segment_test

__all__ = [
    'compute_segment_test',
    'SegmentTestDesign',
    'SegmentTestSolution',
    'SegmentTestParams',
    'GroupSummary',
    'CategoryShare',
    'TestThresholds',
    'DEFAULT_THRESHOLDS',
    'NUMERIC_TARGET',
    'TEXT_TARGET',
    'WELCH_T',
    'TWO_PROPORTION_Z',
    'CHI_SQUARE',
    'erf',
    'normal_cdf',
    'log_gamma',
    'regularized_incomplete_beta',
    'student_t_cdf',
    'regularized_gamma_p',
    'chi_square_cdf',
]
