"""
JavaScript-style replacement templates for regex search.

Supported tokens: $1..$99, $<name>, $& (whole match), $` (text before
the match), $' (text after the match) and $$ (a literal '$'). Tokens that
refer to a missing group are kept literally.
"""

from __future__ import annotations

import re

_TOKEN = re.compile(r"\$(\$|&|`|'|\d{1,2}|<[^>]*>)")


def expand_template(template: str, match: re.Match[str]) -> str:
    """Replacement text for one match."""
    group_count = match.re.groups
    names = match.re.groupindex

    def token(m: re.Match[str]) -> str:
        tok = m.group(1)
        if tok == "$":
            return "$"
        if tok == "&":
            return match.group(0)
        if tok == "`":
            return match.string[:match.start()]
        if tok == "'":
            return match.string[match.end():]
        if tok.startswith("<"):
            if not names:
                return m.group(0)
            name = tok[1:-1]
            return (match.group(name) or "") if name in names else ""

        number = int(tok)
        if 1 <= number <= group_count:
            return match.group(number) or ""
        if len(tok) == 2:
            # "$12" with fewer than 12 groups reads as "$1" followed by "2"
            first = int(tok[0])
            if 1 <= first <= group_count:
                return (match.group(first) or "") + tok[1]
        return m.group(0)

    return _TOKEN.sub(token, template)
