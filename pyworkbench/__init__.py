"""
pyworkbench: the tabular computation core of a spreadsheet-style data editor.

Pure, synchronous building blocks for a data editor: column profiling,
cell formulas, segment significance tests and find & replace.

Submodules:
    profiling: Column type inference and per-column statistics
    formulas: Spreadsheet formula evaluation with cycle detection
    hypothesis: Segment comparison tests (Welch t, two-proportion z, chi-square)
    search: Substring / whole-word / regex matching and replacement
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from pyworkbench import profiling
from pyworkbench import formulas
from pyworkbench import hypothesis
from pyworkbench import search

from pyworkbench.profiling import profile_columns
from pyworkbench.formulas import evaluate_formula
from pyworkbench.hypothesis import compute_segment_test
from pyworkbench.search import (
    create_search_config,
    row_matches_query,
    apply_replacement,
)

__all__ = [
    "__version__",
    "profiling",
    "formulas",
    "hypothesis",
    "search",
    "profile_columns",
    "evaluate_formula",
    "compute_segment_test",
    "create_search_config",
    "row_matches_query",
    "apply_replacement",
]
