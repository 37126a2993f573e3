"""Scanner: file selection and the IP/port scan engine."""

from acautils.scanner.engine import scan, scan_lines, scan_tree
from acautils.scanner.selector import (
    DEFAULT_EXCLUDES,
    DEFAULT_INCLUDES,
    match_any,
    select_files,
    split_csv,
)

__all__ = [
    "DEFAULT_EXCLUDES",
    "DEFAULT_INCLUDES",
    "match_any",
    "scan",
    "scan_lines",
    "scan_tree",
    "select_files",
    "split_csv",
]
