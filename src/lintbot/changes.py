# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Changed-file and diff hunk models consumed from the version-control layer.

The version-control collaborator describes a revision as an ordered list of
changed files, each carrying its unified-diff hunks against the target
revision. The models are immutable for the duration of a run. Two loaders are
provided: :func:`load_changeset` for the JSON document emitted by the
collaborator and :func:`parse_unified_diff` for plain ``git diff`` text.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterator, Mapping, Sequence
from enum import Enum
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .parsers.base import split_lines


class DeltaStatus(str, Enum):
    """How a file changed between the target and source revisions."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    TYPE_CHANGED = "type-changed"
    UNKNOWN = "unknown"


class LineOrigin(str, Enum):
    """Role of a line inside a diff hunk."""

    CONTEXT = "context"
    ADDITION = "addition"
    DELETION = "deletion"


_ORIGIN_ALIASES: Final[dict[str, LineOrigin]] = {
    " ": LineOrigin.CONTEXT,
    "+": LineOrigin.ADDITION,
    "-": LineOrigin.DELETION,
}

_STATUS_ALIASES: Final[dict[str, DeltaStatus]] = {
    "A": DeltaStatus.ADDED,
    "M": DeltaStatus.MODIFIED,
    "D": DeltaStatus.DELETED,
    "R": DeltaStatus.RENAMED,
    "T": DeltaStatus.TYPE_CHANGED,
    "removed": DeltaStatus.DELETED,
    "changed": DeltaStatus.MODIFIED,
    "typechange": DeltaStatus.TYPE_CHANGED,
}


class DiffLine(BaseModel):
    """Single line of a diff hunk."""

    model_config = ConfigDict(frozen=True)

    origin: LineOrigin
    old_lineno: int | None = None
    new_lineno: int | None = None
    content: str = ""

    @field_validator("origin", mode="before")
    @classmethod
    def _coerce_origin(cls, value: object) -> object:
        if isinstance(value, str) and value in _ORIGIN_ALIASES:
            return _ORIGIN_ALIASES[value]
        return value


class Hunk(BaseModel):
    """Contiguous block of a unified diff."""

    model_config = ConfigDict(frozen=True)

    old_start: int = Field(ge=0)
    old_lines: int = Field(ge=0)
    new_start: int = Field(ge=0)
    new_lines: int = Field(ge=0)
    lines: tuple[DiffLine, ...] = Field(default_factory=tuple)

    @property
    def line_count(self) -> int:
        """Return the number of diff text lines the hunk occupies.

        When the producer omitted the line bodies the count falls back to
        ``old_lines + new_lines``, which is exact for zero-context diffs.
        """

        if self.lines:
            return len(self.lines)
        return self.old_lines + self.new_lines

    def contains_row(self, row: int) -> bool:
        """Return ``True`` when ``row`` of the new content falls inside the hunk.

        The upper bound is inclusive (``new_start + new_lines``). A hunk with
        ``new_lines == 0`` only removes lines and never contains a row.
        """

        if self.new_lines == 0:
            return False
        return self.new_start <= row <= self.new_start + self.new_lines

    def header(self) -> str:
        """Return the ``@@ -a,b +c,d @@`` header for the hunk."""

        return f"@@ -{self.old_start},{self.old_lines} +{self.new_start},{self.new_lines} @@"


class ChangedFile(BaseModel):
    """File touched by the analysed revision."""

    model_config = ConfigDict(frozen=True)

    path: str
    status: DeltaStatus = DeltaStatus.MODIFIED
    hunks: tuple[Hunk, ...] = Field(default_factory=tuple)
    old_path: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: object) -> object:
        if isinstance(value, str):
            alias = _STATUS_ALIASES.get(value)
            if alias is not None:
                return alias
            lowered = value.lower()
            if lowered in {status.value for status in DeltaStatus}:
                return lowered
            return DeltaStatus.UNKNOWN
        return value

    @property
    def is_deleted(self) -> bool:
        """Return ``True`` when the file no longer exists in the source revision."""

        return self.status is DeltaStatus.DELETED


class Changeset(BaseModel):
    """Ordered collection of changed files with path lookup."""

    model_config = ConfigDict(frozen=True)

    files: tuple[ChangedFile, ...] = Field(default_factory=tuple)

    def iter_files(self) -> Iterator[ChangedFile]:
        """Iterate changed files in changeset order."""

        return iter(self.files)

    def get(self, path: str) -> ChangedFile | None:
        """Return the changed file stored under ``path`` when present."""

        for changed in self.files:
            if changed.path == path:
                return changed
        return None

    def paths(self) -> list[str]:
        """Return file paths in changeset order."""

        return [changed.path for changed in self.files]


def load_changeset(path: Path) -> Changeset:
    """Load a changeset JSON document written by the version-control collaborator.

    Args:
        path: JSON file containing ``{"files": [...]}``.

    Returns:
        Changeset: Validated changeset.

    Raises:
        ConfigurationError: If the file cannot be read or fails validation.
    """

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Unable to read changeset {path}: {exc}") from exc
    return changeset_from_payload(payload)


def changeset_from_payload(payload: object) -> Changeset:
    """Validate ``payload`` (a mapping or a bare file list) into a :class:`Changeset`."""

    if isinstance(payload, Sequence) and not isinstance(payload, (str, bytes)):
        payload = {"files": list(payload)}
    if not isinstance(payload, Mapping):
        raise ConfigurationError("Changeset document must be an object or a list of files")
    try:
        return Changeset.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid changeset document: {exc}") from exc


_HUNK_HEADER: Final[re.Pattern[str]] = re.compile(
    r"^@@ -(?P<old_start>\d+)(?:,(?P<old_lines>\d+))? \+(?P<new_start>\d+)(?:,(?P<new_lines>\d+))? @@",
)
_DIFF_HEADER: Final[re.Pattern[str]] = re.compile(r"^diff --git a/(?P<old>.+) b/(?P<new>.+)$")
_NULL_PATH: Final[str] = "/dev/null"


class _FileBuilder:
    """Mutable accumulator used while scanning unified diff text."""

    def __init__(self, path: str) -> None:
        self.path = path
        self.old_path: str | None = None
        self.status = DeltaStatus.MODIFIED
        self.hunks: list[Hunk] = []
        self._pending: dict[str, int] | None = None
        self._lines: list[DiffLine] = []
        self._old_cursor = 0
        self._new_cursor = 0

    def start_hunk(self, match: re.Match[str]) -> None:
        self.flush_hunk()
        old_lines = match.group("old_lines")
        new_lines = match.group("new_lines")
        self._pending = {
            "old_start": int(match.group("old_start")),
            "old_lines": int(old_lines) if old_lines is not None else 1,
            "new_start": int(match.group("new_start")),
            "new_lines": int(new_lines) if new_lines is not None else 1,
        }
        self._old_cursor = self._pending["old_start"]
        self._new_cursor = self._pending["new_start"]

    def add_line(self, raw: str) -> None:
        if self._pending is None or not raw:
            return
        marker, content = raw[0], raw[1:]
        origin = _ORIGIN_ALIASES.get(marker)
        if origin is None:
            return
        old_lineno: int | None = None
        new_lineno: int | None = None
        if origin is not LineOrigin.ADDITION:
            old_lineno = self._old_cursor
            self._old_cursor += 1
        if origin is not LineOrigin.DELETION:
            new_lineno = self._new_cursor
            self._new_cursor += 1
        self._lines.append(
            DiffLine(origin=origin, old_lineno=old_lineno, new_lineno=new_lineno, content=content),
        )

    def flush_hunk(self) -> None:
        if self._pending is None:
            return
        self.hunks.append(Hunk(**self._pending, lines=tuple(self._lines)))
        self._pending = None
        self._lines = []

    def build(self) -> ChangedFile:
        self.flush_hunk()
        return ChangedFile(
            path=self.path,
            status=self.status,
            hunks=tuple(self.hunks),
            old_path=self.old_path,
        )


def parse_unified_diff(text: str) -> Changeset:
    """Parse ``git diff`` output into a :class:`Changeset`.

    Only the information needed for position mapping is retained: paths, the
    delta status (from ``new file``/``deleted file``/``rename`` headers) and the
    hunks with their lines. ``\\ No newline at end of file`` markers are
    ignored because they do not occupy a diff position.

    Args:
        text: Unified diff text produced with ``git diff``.

    Returns:
        Changeset: Files in the order they appear in the diff.
    """

    files: list[ChangedFile] = []
    current: _FileBuilder | None = None
    in_header = False

    for raw_line in split_lines(text):
        header = _DIFF_HEADER.match(raw_line)
        if header:
            if current is not None:
                files.append(current.build())
            current = _FileBuilder(header.group("new"))
            in_header = True
            continue
        if current is None:
            continue
        if in_header:
            if _apply_header_line(current, raw_line):
                continue
        hunk = _HUNK_HEADER.match(raw_line)
        if hunk:
            in_header = False
            current.start_hunk(hunk)
            continue
        if raw_line.startswith("\\"):
            continue
        current.add_line(raw_line)

    if current is not None:
        files.append(current.build())
    return Changeset(files=tuple(files))


def _apply_header_line(builder: _FileBuilder, line: str) -> bool:
    """Update ``builder`` from an extended git header line; return ``True`` when consumed."""

    if line.startswith("new file mode"):
        builder.status = DeltaStatus.ADDED
        return True
    if line.startswith("deleted file mode"):
        builder.status = DeltaStatus.DELETED
        return True
    if line.startswith("rename from "):
        builder.status = DeltaStatus.RENAMED
        builder.old_path = line.removeprefix("rename from ")
        return True
    if line.startswith("rename to "):
        builder.path = line.removeprefix("rename to ")
        return True
    if line.startswith("--- "):
        return True
    if line.startswith("+++ "):
        target = line[4:].strip()
        if target != _NULL_PATH:
            builder.path = target.removeprefix("b/")
        return True
    if line.startswith(("index ", "similarity index", "dissimilarity index", "old mode", "new mode", "Binary files")):
        return True
    return False


__all__ = [
    "ChangedFile",
    "Changeset",
    "DeltaStatus",
    "DiffLine",
    "Hunk",
    "LineOrigin",
    "changeset_from_payload",
    "load_changeset",
    "parse_unified_diff",
]
