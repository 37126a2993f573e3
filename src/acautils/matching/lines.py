"""Line classifier: comment/blank detection and ``key <sep> value`` parsing.

A line is a key/value pair when it looks like::

    server.port = 8080
    host: "10.0.0.5"

Keys are restricted to ``[A-Za-z0-9_.-]``; the separator is ``:`` or ``=``.
Comment lines (``#`` or ``;``) never classify as pairs, even when the text
after the marker would.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

KV_RE = re.compile(r"^\s*([A-Za-z0-9_.\-]+)\s*[:=]\s*(.+?)\s*$")

_COMMENT_PREFIXES = ("#", ";")


@dataclass(frozen=True)
class ParsedKV:
    """Result of classifying one line."""

    key: str = ""
    value: str = ""
    matched: bool = False


_UNMATCHED = ParsedKV()


def is_comment_or_blank(line: str) -> bool:
    """Return True for empty, whitespace-only, ``#`` and ``;`` lines."""
    stripped = line.strip()
    return not stripped or stripped.startswith(_COMMENT_PREFIXES)


def classify(line: str) -> ParsedKV:
    """Classify *line* as a key/value pair or not."""
    if is_comment_or_blank(line):
        return _UNMATCHED
    m = KV_RE.match(line)
    if m is None:
        return _UNMATCHED
    return ParsedKV(key=m.group(1), value=m.group(2).strip(), matched=True)


def strip_quotes(value: str) -> str:
    """Trim *value* and remove one layer of matching single or double quotes.

    ``'  "  spaced  "  '`` becomes ``"  spaced  "`` without the outer quotes;
    unbalanced quotes are left in place.
    """
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value
