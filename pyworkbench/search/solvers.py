"""
Matching, highlighting and replacement over formatted cell text.

Every offset refers to format_cell_value(value), the same text that
highlight_segments() slices, so a match always lands on the characters
the user sees.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pyworkbench.profiling.values import format_cell_value
from pyworkbench.search._common import (
    MAX_HIGHLIGHT_SEGMENTS,
    MAX_MATCHES_PER_CELL,
    REGEX,
    Match,
)
from pyworkbench.search._replace import expand_template
from pyworkbench.search.design import SearchConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowMatch:
    """Matches of one row, keyed by column in scan order."""
    is_match: bool
    matches_by_column: dict[str, list[Match]] = field(default_factory=dict)


@dataclass(frozen=True)
class CellMatch:
    """Matches within one cell, for find & replace listings."""
    row_index: int
    column_key: str
    positions: tuple[Match, ...]
    formatted_value: str
    raw_value: Any


@dataclass(frozen=True)
class MatchReport:
    """All matching cells of a row set; total counts individual matches."""
    matches: tuple[CellMatch, ...] = ()
    total: int = 0


def cell_match_positions(value: Any, config: SearchConfig) -> list[Match]:
    """
    Non-overlapping matches in a cell's formatted text, left to right.

    Zero-length matches are skipped; at most MAX_MATCHES_PER_CELL are
    reported.

    >>> from pyworkbench.search import create_search_config
    >>> cell_match_positions("aAbAa", create_search_config("a"))
    [Match(start=0, end=1), Match(start=1, end=2), Match(start=3, end=4), Match(start=4, end=5)]
    """
    if not config.is_active or config.pattern is None:
        return []
    text = format_cell_value(value)
    if not text:
        return []

    positions: list[Match] = []
    for found in config.pattern.finditer(text):
        if found.end() == found.start():
            continue
        positions.append(Match(found.start(), found.end()))
        if len(positions) >= MAX_MATCHES_PER_CELL:
            break
    return positions


def row_matches_query(row: Mapping[str, Any], config: SearchConfig) -> RowMatch:
    """
    Matches of a search within one row.

    Restricted columns that the row does not have are skipped. An
    inactive config (empty query, invalid pattern) filters nothing: every
    row passes with no highlighted cells.
    """
    if not config.is_active:
        return RowMatch(is_match=True)
    if not row:
        return RowMatch(is_match=False)

    keys = config.columns if config.columns else tuple(row)
    found: dict[str, list[Match]] = {}
    for key in keys:
        if key not in row:
            continue
        positions = cell_match_positions(row[key], config)
        if positions:
            found[key] = positions
    return RowMatch(is_match=bool(found), matches_by_column=found)


def apply_replacement(formatted_value: Any, config: SearchConfig, replacement: str) -> str:
    """
    Replace every match in a formatted cell value.

    Substring and whole-word searches insert `replacement` literally;
    regex searches expand JavaScript-style templates ($1, $<name>, $&).
    The result is always text: re-typing it is up to the caller.

    >>> from pyworkbench.search import create_search_config
    >>> apply_replacement("banana", create_search_config("a"), "Z")
    'bZnZnZ'
    """
    if not config.is_active or config.pattern is None:
        return formatted_value
    text = "" if formatted_value is None else str(formatted_value)
    if not text:
        return text

    replacement = "" if replacement is None else str(replacement)
    if config.mode == REGEX:
        return config.pattern.sub(lambda m: expand_template(replacement, m), text)
    return config.pattern.sub(lambda m: replacement, text)


def compute_matches_for_rows(
    rows: Iterable[Mapping[str, Any] | None],
    config: SearchConfig,
    column_order: Sequence[str] | None = None,
) -> MatchReport:
    """
    Every matching cell of a row set, in reading order.

    Parameters
    ----------
    rows : iterable of mappings
        Rows in display order; None entries are skipped.
    config : SearchConfig
    column_order : sequence of str, optional
        Visible columns in display order. When given, cells of other
        columns are left out.

    Returns
    -------
    MatchReport
        Sorted by row, then column position, then column name
        (case-insensitive).
    """
    if not config.is_active:
        return MatchReport()

    order = {key: i for i, key in enumerate(column_order)} if column_order is not None else None
    unordered = len(order) if order is not None else 0

    entries: list[CellMatch] = []
    for row_index, row in enumerate(rows):
        if not row:
            continue
        result = row_matches_query(row, config)
        for key, positions in result.matches_by_column.items():
            if order is not None and key not in order:
                continue
            raw = row[key]
            entries.append(CellMatch(
                row_index=row_index,
                column_key=key,
                positions=tuple(positions),
                formatted_value=format_cell_value(raw),
                raw_value=raw,
            ))

    entries.sort(key=lambda e: (
        e.row_index,
        order.get(e.column_key, unordered) if order is not None else 0,
        e.column_key.casefold(),
    ))
    total = sum(len(e.positions) for e in entries)
    logger.debug("search %r: %d matches in %d cells", config.query, total, len(entries))
    return MatchReport(matches=tuple(entries), total=total)


def highlight_segments(value: Any, matches: Iterable[Match]) -> list[tuple[str, bool]]:
    """
    Split a cell's formatted text into (text, highlighted) segments.

    Offsets are clamped to the text; at most MAX_HIGHLIGHT_SEGMENTS
    highlighted segments are produced and the rest of the text follows
    unhighlighted.

    >>> highlight_segments("banana", [(1, 2)])
    [('b', False), ('a', True), ('nana', False)]
    """
    text = format_cell_value(value)
    ordered = sorted(matches, key=lambda m: m[0])
    if not text or not ordered:
        return [(text, False)] if text else []

    segments: list[tuple[str, bool]] = []
    cursor = 0
    highlighted = 0
    for start, end in ordered:
        if highlighted >= MAX_HIGHLIGHT_SEGMENTS or cursor >= len(text):
            break
        start = max(cursor, min(start, len(text)))
        end = max(start, min(end, len(text)))
        if start > cursor:
            segments.append((text[cursor:start], False))
        if end > start:
            segments.append((text[start:end], True))
            highlighted += 1
        cursor = max(cursor, end)

    if cursor < len(text):
        segments.append((text[cursor:], False))
    return segments


def replace_in_rows(
    rows: Iterable[Mapping[str, Any]],
    config: SearchConfig,
    replacement: str,
) -> tuple[list[dict[str, Any]], int]:
    """
    Apply a replacement to every matching cell of a row set.

    The input rows are not modified. Replaced cells hold the new text;
    all other cells keep their raw values.

    Returns:
        (new rows, number of cells that changed)
    """
    updated: list[dict[str, Any]] = []
    changed = 0
    for row in rows:
        new_row = dict(row or {})
        if config.is_active:
            for key in row_matches_query(new_row, config).matches_by_column:
                formatted = format_cell_value(new_row[key])
                replaced = apply_replacement(formatted, config, replacement)
                if replaced != formatted:
                    new_row[key] = replaced
                    changed += 1
        updated.append(new_row)
    return updated, changed
