# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the lintbot package."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity


class Diagnostic(BaseModel):
    """Single issue reported by a line-diagnostic analyzer."""

    model_config = ConfigDict(frozen=True)

    file: str
    row: int
    col: int
    severity: Severity
    rule: str
    brief: str
    details: tuple[str, ...] = Field(default_factory=tuple)

    def location(self) -> str:
        """Return ``file:row:col`` for report listings."""

        return f"{self.file}:{self.row}:{self.col}"


class Replacement(BaseModel):
    """Byte-offset edit suggested by a formatter.

    ``row`` and ``col`` are 1-based and derived from the file's current
    content; both stay ``None`` when the offset lies beyond the content.
    """

    model_config = ConfigDict(frozen=True)

    file: str
    offset: int = Field(ge=0)
    length: int = Field(ge=0)
    text: str = ""
    row: int | None = None
    col: int | None = None


class FormatChange(BaseModel):
    """Region of a file that a formatter would rewrite.

    ``row`` addresses the first affected line of the current content; for a
    pure insertion it is the line the new text follows (minimum 1).
    """

    model_config = ConfigDict(frozen=True)

    row: int
    original: tuple[str, ...] = Field(default_factory=tuple)
    proposed: tuple[str, ...] = Field(default_factory=tuple)


class ClangTidyStatistic(BaseModel):
    """Run statistics that clang-tidy prints on stderr."""

    model_config = ConfigDict(validate_assignment=True)

    warnings: int = 0
    errors: int = 0
    warnings_treated_as_errors: int = 0
    total_suppressed_warnings: int = 0
    non_user_code_warnings: int = 0
    no_lint_warnings: int = 0


class FileOutcome(str, Enum):
    """Tag describing why a file passed or failed."""

    PASSED = "passed"
    FINDINGS = "findings"
    TOOL_FAILURE = "tool_failure"
    PARSE_ERROR = "parse_error"
    TIMEOUT = "timeout"


class PerFileResult(BaseModel):
    """Outcome of running one analyzer over one file."""

    model_config = ConfigDict(validate_assignment=True)

    file: str
    outcome: FileOutcome
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    diagnostics: tuple[Diagnostic, ...] = Field(default_factory=tuple)
    replacements: tuple[Replacement, ...] = Field(default_factory=tuple)
    format_changes: tuple[FormatChange, ...] = Field(default_factory=tuple)
    statistic: ClangTidyStatistic | None = None
    error: str | None = None

    @property
    def passed(self) -> bool:
        """Return ``True`` when the file passed the analyzer."""

        return self.outcome is FileOutcome.PASSED


def classify(exit_code: int, *, has_findings: bool) -> FileOutcome:
    """Return the outcome for a completed invocation.

    A file passes only when the analyzer exited successfully and reported no
    diagnostics or replacements.
    """

    if has_findings:
        return FileOutcome.FINDINGS
    if exit_code != 0:
        return FileOutcome.TOOL_FAILURE
    return FileOutcome.PASSED


class BriefResult(BaseModel):
    """Per-tool summary row used by the orchestrator."""

    model_config = ConfigDict(frozen=True)

    tool: str
    passed: bool
    passed_count: int
    failed_count: int
    ignored_count: int


class ToolRunResult(BaseModel):
    """Aggregate result of one tool over the changed-file list.

    A file is recorded in at most one of :attr:`passed`, :attr:`failed` and
    :attr:`ignored`; the ``record_*`` helpers enforce this.
    """

    model_config = ConfigDict(validate_assignment=True)

    tool: str
    passed: dict[str, PerFileResult] = Field(default_factory=dict)
    failed: dict[str, PerFileResult] = Field(default_factory=dict)
    ignored: list[str] = Field(default_factory=list)
    final_passed: bool = False
    fastly_exited: bool = False

    def is_classified(self, path: str) -> bool:
        """Return ``True`` when ``path`` already appears in any bucket."""

        return path in self.passed or path in self.failed or path in self.ignored

    def _ensure_unclassified(self, path: str) -> None:
        if self.is_classified(path):
            raise ValueError(f"File '{path}' already classified for {self.tool}")

    def record_ignored(self, path: str) -> None:
        """Append ``path`` to the ignored list."""

        self._ensure_unclassified(path)
        self.ignored.append(path)

    def record(self, result: PerFileResult) -> None:
        """Store ``result`` in the passed or failed bucket according to its outcome."""

        self._ensure_unclassified(result.file)
        if result.passed:
            self.passed[result.file] = result
        else:
            self.failed[result.file] = result

    def finish(self) -> None:
        """Finalise a run that completed without a fail-fast stop."""

        self.fastly_exited = False
        self.final_passed = not self.failed

    def stop_fast(self) -> None:
        """Finalise a run interrupted by fail-fast."""

        self.fastly_exited = True
        self.final_passed = False

    def failed_files(self) -> list[PerFileResult]:
        """Return failed results sorted by file path."""

        return [self.failed[path] for path in sorted(self.failed)]

    def brief(self) -> BriefResult:
        """Return the :class:`BriefResult` row for this run."""

        return BriefResult(
            tool=self.tool,
            passed=self.final_passed,
            passed_count=len(self.passed),
            failed_count=len(self.failed),
            ignored_count=len(self.ignored),
        )


class ReviewComment(BaseModel):
    """Inline review comment anchored at a diff position."""

    model_config = ConfigDict(frozen=True)

    path: str
    position: int = Field(ge=1)
    body: str


__all__ = [
    "BriefResult",
    "ClangTidyStatistic",
    "Diagnostic",
    "FileOutcome",
    "FormatChange",
    "PerFileResult",
    "Replacement",
    "ReviewComment",
    "ToolRunResult",
    "classify",
]
