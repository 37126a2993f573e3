"""Line classification, IP detection, and port heuristics."""

from acautils.matching.ip import (
    find_first_ip,
    find_first_ipv4,
    find_first_ipv6,
    looks_like_ip,
)
from acautils.matching.lines import ParsedKV, classify, is_comment_or_blank, strip_quotes
from acautils.matching.ports import find_inline_port, looks_like_port

__all__ = [
    "ParsedKV",
    "classify",
    "find_first_ip",
    "find_first_ipv4",
    "find_first_ipv6",
    "find_inline_port",
    "is_comment_or_blank",
    "looks_like_ip",
    "looks_like_port",
    "strip_quotes",
]
