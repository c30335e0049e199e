# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for clang-tidy stdout diagnostics and stderr statistics."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Final

from ..models import ClangTidyStatistic, Diagnostic
from ..severity import Severity, is_known_severity
from .base import LineRule, apply_line_rules, ensure_lines, is_ascii_digits

LOGGER = logging.getLogger(__name__)

HEADER_FIELD_COUNT: Final[int] = 5
MIN_RULE_FIELD_LENGTH: Final[int] = 3


@dataclass(frozen=True, slots=True)
class DiagnosticHeader:
    """Fields of a ``file:row:col: severity: brief [rule]`` header line."""

    file: str
    row: int
    col: int
    severity: Severity
    brief: str
    rule: str


def parse_diagnostic_header(line: str) -> DiagnosticHeader | None:
    """Return the parsed header for ``line`` or ``None`` when it is not one.

    A header splits on ``:`` into exactly five fields. Row and column must be
    ASCII digits, the left-trimmed severity must be ``warning``, ``info`` or
    ``error``, and the last field must contain ``[``, be at least three
    characters long and end with ``]``.

    Args:
        line: One line of clang-tidy stdout.

    Returns:
        DiagnosticHeader | None: Parsed header fields when ``line`` qualifies.
    """

    parts = line.split(":")
    if len(parts) != HEADER_FIELD_COUNT:
        return None
    file_name, row, col, raw_severity, rest = parts
    if not is_ascii_digits(row) or not is_ascii_digits(col):
        return None
    severity = raw_severity.lstrip()
    if not is_known_severity(severity):
        return None
    bracket = rest.find("[")
    if bracket < 0 or len(rest) < MIN_RULE_FIELD_LENGTH or not rest.endswith("]"):
        return None
    return DiagnosticHeader(
        file=file_name,
        row=int(row),
        col=int(col),
        severity=Severity(severity),
        brief=rest[:bracket].lstrip(),
        rule=rest[bracket + 1 : -1],
    )


@dataclass(slots=True)
class _PendingDiagnostic:
    header: DiagnosticHeader
    details: list[str] = field(default_factory=list)

    def build(self) -> Diagnostic:
        return Diagnostic(
            file=self.header.file,
            row=self.header.row,
            col=self.header.col,
            severity=self.header.severity,
            rule=self.header.rule,
            brief=self.header.brief,
            details=tuple(self.details),
        )


def parse_clang_tidy_stdout(stdout: str | Sequence[str]) -> list[Diagnostic]:
    """Parse clang-tidy stdout into diagnostics.

    Every non-header line following a header is attached to that diagnostic as
    a detail line; lines before the first header are discarded.

    Args:
        stdout: Raw stdout text (or pre-split lines) emitted by clang-tidy.

    Returns:
        list[Diagnostic]: Diagnostics in output order.
    """

    pending: list[_PendingDiagnostic] = []
    for line in ensure_lines(stdout):
        header = parse_diagnostic_header(line)
        if header is not None:
            pending.append(_PendingDiagnostic(header=header))
            continue
        if pending:
            pending[-1].details.append(line)
    diagnostics = [item.build() for item in pending]
    LOGGER.debug("Parsed clang-tidy stdout, got %d diagnostics", len(diagnostics))
    return diagnostics


_WARNINGS_AND_ERRORS: Final[re.Pattern[str]] = re.compile(r"^(\d+) warnings and (\d+) errors? generated.")
_WARNINGS_GENERATED: Final[re.Pattern[str]] = re.compile(r"^(\d+) warnings? generated.")
_ERRORS_GENERATED: Final[re.Pattern[str]] = re.compile(r"^(\d+) errors? generated.")
_SUPPRESSED: Final[re.Pattern[str]] = re.compile(r"Suppressed (\d+) warnings \((\d+) in non-user code\)\.")
_SUPPRESSED_NOLINT: Final[re.Pattern[str]] = re.compile(
    r"Suppressed (\d+) warnings \((\d+) in non-user code, (\d+) NOLINT\)\.",
)
_WARNINGS_AS_ERRORS: Final[re.Pattern[str]] = re.compile(r"^(\d+) warnings treated as errors")


def parse_clang_tidy_stderr(stderr: str | Sequence[str]) -> ClangTidyStatistic:
    """Extract run statistics from clang-tidy stderr.

    Each statistic pattern is tried against every line and any number of them
    may match; later matches overwrite earlier values of the same counter.

    Args:
        stderr: Raw stderr text (or pre-split lines) emitted by clang-tidy.

    Returns:
        ClangTidyStatistic: Counters found in the output, zero when absent.
    """

    stat = ClangTidyStatistic()

    def _warnings_and_errors(match: re.Match[str]) -> None:
        stat.warnings = int(match.group(1))
        stat.errors = int(match.group(2))

    def _warnings(match: re.Match[str]) -> None:
        stat.warnings = int(match.group(1))

    def _errors(match: re.Match[str]) -> None:
        stat.errors = int(match.group(1))

    def _suppressed(match: re.Match[str]) -> None:
        stat.total_suppressed_warnings = int(match.group(1))
        stat.non_user_code_warnings = int(match.group(2))

    def _suppressed_nolint(match: re.Match[str]) -> None:
        stat.total_suppressed_warnings = int(match.group(1))
        stat.non_user_code_warnings = int(match.group(2))
        stat.no_lint_warnings = int(match.group(3))

    def _warnings_as_errors(match: re.Match[str]) -> None:
        stat.warnings_treated_as_errors = int(match.group(1))

    rules = (
        LineRule(_WARNINGS_AND_ERRORS, _warnings_and_errors),
        LineRule(_WARNINGS_GENERATED, _warnings),
        LineRule(_ERRORS_GENERATED, _errors),
        LineRule(_SUPPRESSED, _suppressed),
        LineRule(_WARNINGS_AS_ERRORS, _warnings_as_errors),
        LineRule(_SUPPRESSED_NOLINT, _suppressed_nolint),
    )
    apply_line_rules(ensure_lines(stderr), rules)
    return stat


__all__ = [
    "DiagnosticHeader",
    "parse_clang_tidy_stderr",
    "parse_clang_tidy_stdout",
    "parse_diagnostic_header",
]
