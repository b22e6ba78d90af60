"""
SearchConfig: a compiled, immutable search request.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from pyworkbench.search._common import (
    MODE_ALIASES,
    REGEX,
    SEARCH_MODES,
    SUBSTRING,
    WHOLE_WORD,
)

logger = logging.getLogger(__name__)

# JavaScript-style named groups, (?<name>...) and \k<name>
_JS_NAMED_GROUP = re.compile(r"(?<!\\)\(\?<(?=[A-Za-z_])")
_JS_BACKREFERENCE = re.compile(r"\\k<([A-Za-z_][A-Za-z0-9_]*)>")


@dataclass(frozen=True)
class SearchConfig:
    """
    Search request, normalized and compiled once.

    Attributes
    ----------
    query : str
        Trimmed query text.
    mode : str
        "substring", "whole-word" or "regex".
    columns : tuple of str
        Columns to search; empty means every column of a row.
    is_active : bool
        False for an empty query or a pattern that failed to compile.
    error : str or None
        Compilation error of a regex query.
    pattern : re.Pattern or None
        Case-insensitive pattern for all modes, None when inactive.
    """
    query: str
    mode: str
    columns: tuple[str, ...] = ()
    is_active: bool = False
    error: str | None = None
    pattern: re.Pattern[str] | None = field(default=None, repr=False, compare=False)

    def searches_column(self, key: str) -> bool:
        return not self.columns or key in self.columns


def _normalize_mode(mode: str | None) -> str:
    mode = MODE_ALIASES.get(mode, mode)
    return mode if mode in SEARCH_MODES else SUBSTRING


def _translate_regex(source: str) -> str:
    """Accept JavaScript named-group syntax in user patterns."""
    source = _JS_NAMED_GROUP.sub("(?P<", source)
    return _JS_BACKREFERENCE.sub(r"(?P=\1)", source)


def create_search_config(
    query: str | None,
    mode: str | None = SUBSTRING,
    columns: Iterable[str] | None = (),
) -> SearchConfig:
    """
    Build a SearchConfig.

    Never raises: an empty query or an invalid regular expression give an
    inactive config (the latter with `error` set), which matches nothing.

    Parameters
    ----------
    query : str
        Search text; surrounding whitespace is ignored.
    mode : str
        "substring" (default), "whole-word" or "regex". "normal" and
        "whole" are accepted aliases; anything else means substring.
    columns : iterable of str
        Restrict the search to these columns. Blank names and repeats are
        dropped.

    Examples
    --------
    >>> create_search_config("(", "regex").is_active
    False
    """
    text = query.strip() if isinstance(query, str) else ""
    mode = _normalize_mode(mode)
    keys = tuple(dict.fromkeys(
        key for key in (columns or ()) if isinstance(key, str) and key.strip()
    ))

    if not text:
        return SearchConfig(query=text, mode=mode, columns=keys)

    if mode == REGEX:
        source = _translate_regex(text)
    elif mode == WHOLE_WORD:
        source = rf"\b{re.escape(text)}\b"
    else:
        source = re.escape(text)

    try:
        pattern = re.compile(source, re.IGNORECASE)
    except re.error as e:
        logger.debug("invalid search pattern %r: %s", text, e)
        return SearchConfig(query=text, mode=mode, columns=keys, error=str(e))

    return SearchConfig(
        query=text,
        mode=mode,
        columns=keys,
        is_active=True,
        pattern=pattern,
    )
