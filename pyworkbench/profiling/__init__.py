"""
Column profiling module.

Turns raw, heterogeneous row mappings into typed columns.

Public API:
    profile_columns(rows)            - Typed column profiles
    analyze_columns(rows)            - Profiles + warnings + correlations
    summarize_column_warnings(cols)  - Caller-facing warnings
    correlation_matrix(rows, cols)   - Pearson correlations of numeric columns
    format_cell_value(value)         - Canonical formatted cell text
"""

from pyworkbench.profiling._common import NUMERIC, TEXT, COLUMN_TYPES
from pyworkbench.profiling._correlation import correlation_matrix
from pyworkbench.profiling.solution import (
    ColumnProfile,
    CorrelationMatrix,
    NumericStatistics,
    ProfileParams,
    ProfileSolution,
    TopValue,
)
from pyworkbench.profiling.solvers import (
    analyze_columns,
    profile_columns,
    summarize_column_warnings,
)
from pyworkbench.profiling.values import (
    format_cell_value,
    is_empty_value,
    parse_numeric,
)

__all__ = [
    "NUMERIC",
    "TEXT",
    "COLUMN_TYPES",
    "profile_columns",
    "analyze_columns",
    "summarize_column_warnings",
    "correlation_matrix",
    "format_cell_value",
    "is_empty_value",
    "parse_numeric",
    "ColumnProfile",
    "CorrelationMatrix",
    "NumericStatistics",
    "ProfileParams",
    "ProfileSolution",
    "TopValue",
]
