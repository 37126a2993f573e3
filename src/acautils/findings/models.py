"""Record models shared by the scan and toggle engines and the reporters."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List


@dataclass(frozen=True)
class MatchRecord:
    """One IP and/or port finding on a single line."""

    ip_key: str = ""
    ip_value: str = ""
    port_key: str = ""
    port_value: str = ""
    file_path: str = ""
    line_no: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.ip_key or self.ip_value or self.port_key or self.port_value)

    def with_path(self, file_path: str) -> "MatchRecord":
        return replace(self, file_path=file_path)


@dataclass
class ScanResult:
    """Complete result of a scan run."""

    records: List[MatchRecord] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)
    scanned_files: int = 0
    scan_duration_ms: float = 0.0

    @property
    def total_records(self) -> int:
        return len(self.records)

    def extend(self, other: "ScanResult") -> None:
        """Append *other*'s records and counters (used for multi-branch scans)."""
        self.records.extend(other.records)
        self.skipped_files.extend(other.skipped_files)
        self.scanned_files += other.scanned_files
        self.scan_duration_ms = round(self.scan_duration_ms + other.scan_duration_ms, 2)


@dataclass(frozen=True)
class ChangeRecord:
    """A single adapter flip. Values are always ``"0"`` / ``"1"``."""

    adapter: str
    old_value: str
    new_value: str
    file_path: str = ""


@dataclass(frozen=True)
class Skip:
    """A requested adapter that was not flipped, and why."""

    key: str
    reason: str  # 'not found' | 'non-binary value'
    value: str = ""


@dataclass
class ToggleResult:
    """Output of a toggle pass over one properties file."""

    content: str
    changes: List[ChangeRecord] = field(default_factory=list)
    skipped: List[Skip] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.changes)
