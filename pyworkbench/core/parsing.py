"""
Number parsing shared by the formula evaluator and the segment tests.

Cell text in an editor arrives in whatever locale the file was written
in. coerce_number() resolves the ambiguity between comma-decimal and
dot-decimal text with a fixed, ordered list of normalizations; the first
one that yields a finite number wins. The order is part of the contract:
"1.234" is read as 1.234, never as 1234.
"""

from __future__ import annotations

import math
import re
from typing import Any

import numpy as np

# Decimal literal as accepted by a spreadsheet cell. float() alone is too
# permissive (underscores, "inf", "nan", "infinity").
_FLOAT_LITERAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_WHITESPACE = re.compile(r"\s+")
_DOT_BEFORE_LAST_DOT = re.compile(r"\.(?=.*\.)")
_COMMA_BEFORE_LAST_COMMA = re.compile(r",(?=.*,)")


def parse_float_literal(text: str) -> float | None:
    """
    Parse a plain decimal literal into a finite float.

    Returns None for anything that is not a decimal literal or that
    overflows to infinity.
    """
    if not _FLOAT_LITERAL.fullmatch(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def finite_number(value: Any) -> float | None:
    """Return value as float if it is a finite native number, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, np.integer, np.floating)):
        as_float = float(value)
        return as_float if math.isfinite(as_float) else None
    return None


def coerce_number(value: Any, *, accept_bool: bool = True) -> float | None:
    """
    Coerce a cell value to a finite float using the ordered fallbacks.

    Order of attempts for text (whitespace removed first):
        1. the text as-is ("1234.5")
        2. every comma replaced by a dot ("12,5" -> 12.5)
        3. all but the last dot and all but the last comma dropped, then
           comma -> dot ("1.234.567,5" -> "1234567.5")
        4. every dot dropped, then comma -> dot ("1.234,5" -> 1234.5)

    Args:
        value: Raw cell value
        accept_bool: Map True/False to 1/0 (spreadsheet semantics)

    Returns:
        The parsed float, or None when no normalization parses.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return float(value) if accept_bool else None
    if isinstance(value, (int, float, np.integer, np.floating)):
        return finite_number(value)

    text = str(value).strip()
    if not text:
        return None
    compact = _WHITESPACE.sub("", text)

    parsed = parse_float_literal(compact)
    if parsed is not None:
        return parsed

    parsed = parse_float_literal(compact.replace(",", "."))
    if parsed is not None:
        return parsed

    last_separators = _COMMA_BEFORE_LAST_COMMA.sub(
        "", _DOT_BEFORE_LAST_DOT.sub("", compact)
    )
    parsed = parse_float_literal(last_separators.replace(",", "."))
    if parsed is not None:
        return parsed

    return parse_float_literal(compact.replace(".", "").replace(",", "."))
