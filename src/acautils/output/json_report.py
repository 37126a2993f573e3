"""JSON reporter: indented arrays of records."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from acautils.findings.models import ChangeRecord, MatchRecord


def record_to_dict(r: MatchRecord) -> Dict[str, Any]:
    return {
        "ipKey": r.ip_key,
        "ipValue": r.ip_value,
        "portKey": r.port_key,
        "portValue": r.port_value,
        "filePath": r.file_path,
        "lineNumber": r.line_no,
    }


def change_to_dict(c: ChangeRecord) -> Dict[str, Any]:
    return {
        "adapter": c.adapter,
        "old": c.old_value,
        "new": c.new_value,
        "filePath": c.file_path,
    }


def render_records(records: Sequence[MatchRecord]) -> str:
    """Return the scan records as an indented JSON array."""
    data: List[Dict[str, Any]] = [record_to_dict(r) for r in records]
    return json.dumps(data, indent=2)


def render_changes(changes: Sequence[ChangeRecord]) -> str:
    """Return the adapter changes as an indented JSON array."""
    return json.dumps([change_to_dict(c) for c in changes], indent=2)
