"""Report renderers: CSV, aligned table, JSON."""

from __future__ import annotations

from typing import Literal

OutputMode = Literal["csv", "table", "json"]

OUTPUT_MODES = ("csv", "table", "json")


def parse_mode(value: str | None, default: OutputMode) -> OutputMode:
    """Normalise *value* to an output mode, or *default* if it is not one."""
    mode = (value or "").strip().lower()
    if mode in OUTPUT_MODES:
        return mode  # type: ignore[return-value]
    return default
