"""Core scan engine: classifies each line and collects IP/port findings.

Per line:

1. Blank lines are skipped.
2. ``key <sep> value`` lines are checked with :func:`looks_like_ip` and
   :func:`looks_like_port`; one line may carry both findings in one record.
3. Anything else falls back to a raw search for an IP literal and an
   inline ``...port <sep> NNNN`` token.

Files that cannot be read are logged, recorded in ``skipped_files``, and
the scan moves on.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from acautils.findings.models import MatchRecord, ScanResult
from acautils.matching.ip import find_first_ip, looks_like_ip
from acautils.matching.lines import classify, is_comment_or_blank, strip_quotes
from acautils.matching.ports import find_inline_port, looks_like_port
from acautils.scanner.selector import select_files

logger = logging.getLogger(__name__)


def _match_line(line: str, file_path: str, line_no: int) -> Optional[MatchRecord]:
    ip_key = ip_value = port_key = port_value = ""

    kv = classify(line)
    if kv.matched:
        if looks_like_ip(kv.value):
            ip_key, ip_value = kv.key, strip_quotes(kv.value)
        if looks_like_port(kv.key, kv.value):
            port_key, port_value = kv.key, strip_quotes(kv.value)
    else:
        ip = find_first_ip(line)
        if ip:
            ip_value = ip
        inline = find_inline_port(line)
        if inline is not None:
            port_key, port_value = inline

    record = MatchRecord(
        ip_key=ip_key,
        ip_value=ip_value,
        port_key=port_key,
        port_value=port_value,
        file_path=file_path,
        line_no=line_no,
    )
    return None if record.is_empty else record


def scan_lines(
    lines: Iterable[str],
    file_path: str,
    *,
    skip_comments: bool = False,
) -> List[MatchRecord]:
    """Scan an iterable of physical lines (1-based numbering)."""
    records: List[MatchRecord] = []
    for line_no, line in enumerate(lines, 1):
        if not line.strip():
            continue
        if skip_comments and is_comment_or_blank(line):
            continue
        record = _match_line(line, file_path, line_no)
        if record is not None:
            records.append(record)
    return records


def _split_lines(text: str) -> List[str]:
    """Split on ``\\n``; a trailing ``\\r`` is not part of the line."""
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def _display_path(path: Path, root: Optional[Path]) -> str:
    if root is None:
        return str(path)
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def scan(
    files: Sequence[Path],
    root: Optional[Path] = None,
    *,
    skip_comments: bool = False,
) -> ScanResult:
    """Scan *files* and return their records ordered by path, then line."""
    start = time.perf_counter()

    ordered: List[Tuple[str, Path]] = sorted(
        ((_display_path(Path(f), root), Path(f)) for f in files),
        key=lambda item: item[0],
    )

    records: List[MatchRecord] = []
    skipped_files: List[str] = []
    scanned = 0

    for display, path in ordered:
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.warning("skipping unreadable file %s: %s", display, exc.strerror or exc)
            skipped_files.append(f"{display} (unreadable)")
            continue

        scanned += 1
        records.extend(scan_lines(_split_lines(text), display, skip_comments=skip_comments))

    elapsed = (time.perf_counter() - start) * 1000

    return ScanResult(
        records=records,
        skipped_files=skipped_files,
        scanned_files=scanned,
        scan_duration_ms=round(elapsed, 2),
    )


def scan_tree(
    root: Path,
    includes: Sequence[str],
    excludes: Sequence[str],
    *,
    skip_comments: bool = False,
) -> ScanResult:
    """Select files under *root* and scan them; paths are reported relative to *root*."""
    files = select_files(root, includes, excludes)
    logger.debug("selected %d file(s) under %s", len(files), root)
    return scan(files, root, skip_comments=skip_comments)
