"""IPv4 / IPv6 literal detection over unstructured text."""

from __future__ import annotations

import re
from typing import Optional

from acautils.matching.lines import strip_quotes

_OCTET = r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9]?[0-9])"

IPV4_RE = re.compile(rf"\b(?:{_OCTET}\.){{3}}{_OCTET}\b", re.ASCII)

# Alternation order matters: longer forms first so ``2001:db8::1`` is not
# cut short at ``2001:db8::``.
IPV6_RE = re.compile(
    r"(?:"
    r"(?:[0-9a-f]{1,4}:){7}[0-9a-f]{1,4}"
    r"|(?:[0-9a-f]{1,4}:){1,6}::[0-9a-f]{1,4}"
    r"|(?:[0-9a-f]{1,4}:){1,5}(?::[0-9a-f]{1,4}){1,2}"
    r"|(?:[0-9a-f]{1,4}:){1,4}(?::[0-9a-f]{1,4}){1,3}"
    r"|(?:[0-9a-f]{1,4}:){1,3}(?::[0-9a-f]{1,4}){1,4}"
    r"|(?:[0-9a-f]{1,4}:){1,2}(?::[0-9a-f]{1,4}){1,5}"
    r"|[0-9a-f]{1,4}:(?::[0-9a-f]{1,4}){1,6}"
    r"|:(?::[0-9a-f]{1,4}){1,7}"
    r"|(?:[0-9a-f]{1,4}:){1,7}:"
    r"|::1"
    r"|::"
    r")",
    re.IGNORECASE,
)


def find_first_ipv4(text: str) -> Optional[str]:
    m = IPV4_RE.search(text)
    return m.group(0) if m else None


def find_first_ipv6(text: str) -> Optional[str]:
    m = IPV6_RE.search(text)
    return m.group(0) if m else None


def find_first_ip(text: str) -> Optional[str]:
    """Return the first IPv4 literal in *text*, else the first IPv6 one."""
    return find_first_ipv4(text) or find_first_ipv6(text)


def looks_like_ip(value: str) -> bool:
    """Return True if the (quote-stripped) value contains an IP literal."""
    stripped = strip_quotes(value)
    return bool(IPV4_RE.search(stripped) or IPV6_RE.search(stripped))
