"""Adapter toggle engine: flip ``0``/``1`` values in a properties file.

The file is held as an ordered list of lines. Only the lines of flipped
adapters are rewritten (as ``key=value``); every other line, including any
stray ``\\r`` of a CRLF file, is emitted exactly as read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Dict, Iterable, List

from acautils.findings.models import ChangeRecord, Skip, ToggleResult
from acautils.matching.lines import classify, is_comment_or_blank

REASON_NOT_FOUND = "not found"
REASON_NON_BINARY = "non-binary value"

_FLIP = {"0": "1", "1": "0"}


class ToggleError(Exception):
    """Raised when the properties file location is invalid."""


@dataclass
class PropertyLine:
    text: str
    key: str = ""
    value: str = ""
    matched: bool = False


@dataclass
class PropertiesFile:
    """Every line of one properties file, tagged with its key/value if any."""

    lines: List[PropertyLine] = field(default_factory=list)

    @classmethod
    def parse(cls, content: str) -> "PropertiesFile":
        lines: List[PropertyLine] = []
        for text in content.split("\n"):
            if is_comment_or_blank(text):
                lines.append(PropertyLine(text))
                continue
            kv = classify(text)
            lines.append(PropertyLine(text, kv.key, kv.value, kv.matched))
        return cls(lines)

    def index(self) -> Dict[str, int]:
        """Map each key to its line index; the last occurrence wins."""
        positions: Dict[str, int] = {}
        for i, line in enumerate(self.lines):
            if line.matched:
                positions[line.key] = i
        return positions

    def set_value(self, idx: int, value: str) -> None:
        line = self.lines[idx]
        self.lines[idx] = PropertyLine(f"{line.key}={value}", line.key, value, True)

    def render(self) -> str:
        return "\n".join(line.text for line in self.lines)


def _unique(keys: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for key in keys:
        seen.setdefault(key, None)
    return list(seen)


def toggle(content: str, requested_keys: Iterable[str], file_path: str = "") -> ToggleResult:
    """Flip each requested adapter between ``0`` and ``1``.

    Missing keys and non-binary values are reported in ``skipped`` and leave
    the content untouched. ``result.changed`` is False when nothing flipped.
    """
    props = PropertiesFile.parse(content)
    positions = props.index()

    changes: List[ChangeRecord] = []
    skipped: List[Skip] = []

    for key in _unique(requested_keys):
        idx = positions.get(key)
        if idx is None:
            skipped.append(Skip(key, REASON_NOT_FOUND))
            continue

        old = classify(props.lines[idx].text).value.strip()
        new = _FLIP.get(old)
        if new is None:
            skipped.append(Skip(key, REASON_NON_BINARY, old))
            continue

        props.set_value(idx, new)
        changes.append(ChangeRecord(adapter=key, old_value=old, new_value=new, file_path=file_path))

    if not changes:
        return ToggleResult(content=content, skipped=skipped)
    return ToggleResult(content=props.render(), changes=changes, skipped=skipped)


def validate_env_name(env: str) -> str:
    """Reject environment names that could escape the ``env/`` directory."""
    name = env.strip()
    if not name or ".." in name or "/" in name or "\\" in name:
        raise ToggleError(f"invalid environment name: {env!r}")
    return name


def properties_path(template: str, env: str) -> PurePosixPath:
    """Resolve the properties file path for *env* from a ``{env}`` template.

    The result is relative to the checkout root and must stay inside it.
    """
    name = validate_env_name(env)
    try:
        formatted = template.format(env=name)
    except (KeyError, IndexError, ValueError) as exc:
        raise ToggleError(f"invalid properties path template {template!r}: {exc!r}") from exc
    rel = PurePosixPath(formatted)
    if rel.is_absolute() or ".." in rel.parts:
        raise ToggleError(f"properties path escapes the repository: {rel}")
    return rel
