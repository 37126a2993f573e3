"""Plain-text aligned table.

Each column is as wide as its widest cell (terminal display width),
columns are separated by two spaces, and the header row is underlined
with dashes.
"""

from __future__ import annotations

from typing import List, Sequence

from rich.cells import cell_len

from acautils.findings.models import ChangeRecord, MatchRecord

SCAN_HEADERS = ("IP Key", "IP Value", "Port Key", "Port Value", "File Path", "Line")
CHANGE_HEADERS = ("Adapter", "Old", "New", "File")

_GAP = "  "


def display_width(text: str) -> int:
    return cell_len(text)


def render(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Return the table as text, newline-terminated."""
    all_rows: List[Sequence[str]] = [headers, *rows]
    widths: List[int] = []
    for row in all_rows:
        for i, cell in enumerate(row):
            w = display_width(cell)
            if i >= len(widths):
                widths.append(w)
            elif w > widths[i]:
                widths[i] = w

    def _line(cells: Sequence[str]) -> str:
        parts: List[str] = []
        for i, cell in enumerate(cells):
            if i < len(cells) - 1:
                parts.append(cell + " " * (widths[i] - display_width(cell)) + _GAP)
            else:
                parts.append(cell)
        return "".join(parts)

    out = [_line(headers), _GAP.join("-" * widths[i] for i in range(len(headers)))]
    out.extend(_line(row) for row in rows)
    return "\n".join(out) + "\n"


def render_records(records: Sequence[MatchRecord]) -> str:
    return render(
        SCAN_HEADERS,
        [
            (r.ip_key, r.ip_value, r.port_key, r.port_value, r.file_path, str(r.line_no))
            for r in records
        ],
    )


def render_changes(changes: Sequence[ChangeRecord]) -> str:
    return render(
        CHANGE_HEADERS,
        [(c.adapter, c.old_value, c.new_value, c.file_path) for c in changes],
    )
