"""CSV reporter for scan records."""

from __future__ import annotations

from typing import List, Sequence

from acautils.findings.models import MatchRecord

HEADER = "IP Key,IP Value,Port Key,Port Value,File Path,Line Number"

_SPECIAL = (",", '"', "\n", "\r")


def csv_escape(value: str) -> str:
    """Double embedded quotes and quote the field if it needs it."""
    escaped = value.replace('"', '""')
    if any(ch in escaped for ch in _SPECIAL):
        return f'"{escaped}"'
    return escaped


def render(records: Sequence[MatchRecord]) -> str:
    """Return the CSV report (header + one row per record), newline-terminated."""
    lines: List[str] = [HEADER]
    for r in records:
        lines.append(
            ",".join([
                csv_escape(r.ip_key),
                csv_escape(r.ip_value),
                csv_escape(r.port_key),
                csv_escape(r.port_value),
                csv_escape(r.file_path),
                str(r.line_no),
            ])
        )
    return "\n".join(lines) + "\n"
