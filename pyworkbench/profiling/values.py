"""
Cell value helpers shared by profiling, search and highlighting.

format_cell_value() is the one canonical text rendering of a cell. Match
offsets are computed against it and highlighting slices it, so both paths
must call this function and nothing else.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from pyworkbench.core.parsing import finite_number, parse_float_literal
from pyworkbench.profiling._common import PLACEHOLDER_VALUES


def normalize_key(key: Any) -> str:
    """Column key as used by the profiler: stripped text, '' for None."""
    if key is None:
        return ""
    return str(key).strip()


def is_empty_value(value: Any) -> bool:
    """
    True for values the profiler counts as empty.

    None, NaN, blank text and the placeholders '-', 'n/a', 'na', 'null',
    'undefined' and 'nan' (case-insensitive) are empty.
    """
    if value is None:
        return True
    if isinstance(value, (float, np.floating)):
        return math.isnan(value)
    if isinstance(value, (bool, int, np.integer)):
        return False
    text = str(value).strip()
    if not text:
        return True
    return text.lower() in PLACEHOLDER_VALUES


def parse_numeric(value: Any) -> float | None:
    """
    Parse a non-empty cell value as a finite number.

    Native numbers pass through when finite. Text is trimmed and a single
    decimal comma is normalized to a dot ("3,5" -> 3.5). Booleans are not
    numbers.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, np.integer, np.floating)):
        return finite_number(value)
    text = str(value).strip()
    if not text:
        return None
    if text.count(",") == 1 and "." not in text:
        text = text.replace(",", ".")
    return parse_float_literal(text)


def format_number(value: float | int) -> str:
    """Shortest text for a finite number; integral floats lose the '.0'."""
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    as_float = float(value)
    if as_float.is_integer() and abs(as_float) < 1e16:
        return str(int(as_float))
    return repr(as_float)


def format_cell_value(value: Any) -> str:
    """
    Canonical formatted text of a cell.

    None -> '', text -> stripped, finite numbers -> format_number(),
    non-finite numbers -> ''.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float, np.integer, np.floating)):
        if isinstance(value, (float, np.floating)) and not math.isfinite(value):
            return ""
        return format_number(value)
    return str(value)
