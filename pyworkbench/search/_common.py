"""
Search modes and limits.
"""

from __future__ import annotations

from typing import NamedTuple

SUBSTRING = "substring"
WHOLE_WORD = "whole-word"
REGEX = "regex"
SEARCH_MODES = (SUBSTRING, WHOLE_WORD, REGEX)

# Names used by older hosts
MODE_ALIASES = {
    "normal": SUBSTRING,
    "whole": WHOLE_WORD,
}

MAX_MATCHES_PER_CELL = 50
MAX_HIGHLIGHT_SEGMENTS = 100


class Match(NamedTuple):
    """Half-open [start, end) offsets into a formatted cell value."""
    start: int
    end: int
