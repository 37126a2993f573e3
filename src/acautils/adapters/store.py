"""Persisted adapter list: one adapter name per line.

File format:
  - One adapter key per line.
  - Blank lines and lines starting with ``#`` are ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path("~/.aca-utils/adapters.txt")


class StoreError(Exception):
    """Raised when the adapter list cannot be read, written, or is invalid."""


class AdapterStore:
    """Read / write the stored adapter list at *path*."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = (path or DEFAULT_STORE_PATH).expanduser()

    @property
    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, names: Iterable[str]) -> List[str]:
        """Overwrite the store with *names*. Returns the names written."""
        cleaned: List[str] = []
        for name in names:
            trimmed = name.strip()
            if not trimmed:
                raise StoreError(f"empty adapter name not allowed: {name!r}")
            cleaned.append(trimmed)
        if not cleaned:
            raise StoreError("no valid adapters provided")

        try:
            self.path.parent.mkdir(mode=0o750, parents=True, exist_ok=True)
            self.path.write_text("\n".join(cleaned) + "\n", encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"failed to write adapter file {self.path}: {exc}") from exc
        try:
            self.path.chmod(0o600)
        except OSError as exc:
            logger.debug("could not restrict permissions on %s: %s", self.path, exc)
        return cleaned

    def load(self) -> List[str]:
        """Return the stored adapter names. Raises StoreError if none are stored."""
        if not self.exists:
            raise StoreError(f"no adapters stored at {self.path}")
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"failed to read adapter file {self.path}: {exc}") from exc

        adapters: List[str] = []
        for raw in content.replace("\r\n", "\n").split("\n"):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            adapters.append(line)
        return adapters

    def clear(self) -> None:
        """Delete the store. Missing files are not an error."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StoreError(f"failed to clear adapters file {self.path}: {exc}") from exc
