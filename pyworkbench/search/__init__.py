"""
Pattern match engine.

Find and replace over formatted cell text: substring, whole-word and
regular-expression searches, case-insensitive, with character offsets
for highlighting.
"""

from pyworkbench.search._common import (
    MAX_HIGHLIGHT_SEGMENTS,
    MAX_MATCHES_PER_CELL,
    REGEX,
    SEARCH_MODES,
    SUBSTRING,
    WHOLE_WORD,
    Match,
)
from pyworkbench.search._replace import expand_template
from pyworkbench.search.design import SearchConfig, create_search_config
from pyworkbench.search.solvers import (
    CellMatch,
    MatchReport,
    RowMatch,
    apply_replacement,
    cell_match_positions,
    compute_matches_for_rows,
    highlight_segments,
    replace_in_rows,
    row_matches_query,
)

__all__ = [
    'create_search_config',
    'cell_match_positions',
    'row_matches_query',
    'apply_replacement',
    'compute_matches_for_rows',
    'highlight_segments',
    'replace_in_rows',
    'expand_template',
    'SearchConfig',
    'Match',
    'RowMatch',
    'CellMatch',
    'MatchReport',
    'SUBSTRING',
    'WHOLE_WORD',
    'REGEX',
    'SEARCH_MODES',
    'MAX_MATCHES_PER_CELL',
    'MAX_HIGHLIGHT_SEGMENTS',
]
