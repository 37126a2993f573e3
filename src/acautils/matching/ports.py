"""Port heuristics.

A value counts as a port when its key mentions ``port`` and the value is
2 to 5 digits. The digit count is the only bound checked: ``00`` and
``99999`` both pass.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from acautils.matching.lines import strip_quotes

PORT_RE = re.compile(
    r"\b([A-Za-z0-9_.\-]*port[A-Za-z0-9_.\-]*)\s*[:=\s]\s*[\"']?([0-9]{2,5})[\"']?\b",
    re.IGNORECASE | re.ASCII,
)

_MIN_DIGITS = 2
_MAX_DIGITS = 5


def _is_port_digits(value: str) -> bool:
    return (
        _MIN_DIGITS <= len(value) <= _MAX_DIGITS
        and all("0" <= ch <= "9" for ch in value)
    )


def looks_like_port(key: str, value: str) -> bool:
    """Return True if *key* names a port and *value* is a 2–5 digit number."""
    if "port" not in key.lower():
        return False
    return _is_port_digits(strip_quotes(value))


def find_inline_port(line: str) -> Optional[Tuple[str, str]]:
    """Find the first ``<...port...> <sep> <digits>`` token pair in *line*."""
    m = PORT_RE.search(line)
    if m is None:
        return None
    return m.group(1), m.group(2)
