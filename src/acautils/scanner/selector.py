"""Include/exclude glob selection of files under a checkout."""

from __future__ import annotations

import logging
import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

DEFAULT_INCLUDES: List[str] = [
    "**/*.properties",
    "**/*.yml",
    "**/*.yaml",
    "**/*.conf",
    "**/*.ini",
    "**/*.txt",
    "**/*.env",
    "**/*.json",
]

DEFAULT_EXCLUDES: List[str] = [
    "**/.git/**",
    "**/node_modules/**",
    "**/dist/**",
]


def split_csv(value: Optional[str], default: Optional[Sequence[str]] = None) -> List[str]:
    """Split a comma list, trimming items and dropping empties.

    Returns a copy of *default* when *value* is blank.
    """
    if value is None or not value.strip():
        return list(default or [])
    return [part.strip() for part in value.split(",") if part.strip()]


def _match(path: str, pattern: str) -> bool:
    if fnmatchcase(path, pattern):
        return True
    # "**/" also matches zero directories: "**/*.yml" covers "app.yml".
    while pattern.startswith("**/"):
        pattern = pattern[3:]
        if fnmatchcase(path, pattern):
            return True
    return False


def match_any(path: str, patterns: Iterable[str]) -> bool:
    """Return True if the ``/``-separated *path* matches any glob in *patterns*."""
    normalized = path.replace("\\", "/")
    return any(_match(normalized, p.replace("\\", "/")) for p in patterns)


def select_files(
    root: Path,
    includes: Sequence[str],
    excludes: Sequence[str],
) -> List[Path]:
    """Walk *root* and return files matching *includes* but not *excludes*.

    Directory read errors are logged and that subtree is skipped.
    Results are sorted by relative path.
    """

    def _on_error(exc: OSError) -> None:
        logger.warning("cannot read directory %s: %s", exc.filename, exc.strerror)

    selected: List[Tuple[str, Path]] = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_on_error):
        for name in filenames:
            full = Path(dirpath) / name
            rel = full.relative_to(root).as_posix()
            if match_any(rel, excludes):
                continue
            if not match_any(rel, includes):
                continue
            selected.append((rel, full))

    selected.sort(key=lambda item: item[0])
    return [full for _rel, full in selected]
