# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Markdown and review rendering for clang-format results."""

from __future__ import annotations

from dataclasses import dataclass

from ..models import FormatChange, PerFileResult, ReviewComment
from .base import ToolReporter


def review_body(change: FormatChange) -> str:
    """Return an inline comment showing the rewrite clang-format proposes."""

    lines = ["clang-format suggests:", "", "```diff"]
    lines.extend(f"-{line}" for line in change.original)
    lines.extend(f"+{line}" for line in change.proposed)
    lines.append("```")
    return "\n".join(lines)


def _rows(result: PerFileResult) -> str:
    rows = [str(change.row) for change in result.format_changes]
    return ", ".join(rows) if rows else "-"


@dataclass(frozen=True, slots=True)
class ClangFormatReporter(ToolReporter):
    """Reporter for clang-format replacements."""

    def issue_comment(self) -> str:
        lines = [self.details_header()]
        for result in self.iter_failed():
            if not result.replacements:
                lines.append(self.failure_line(result))
                continue
            lines.append(
                f"- **{result.file}:** {len(result.replacements)} replacements, lines {_rows(result)}",
            )
        lines.extend(["", "</details>"])
        return "\n".join(lines) + "\n"

    def step_summary(self) -> str:
        lines = [
            f"## {self.tool}",
            "",
            self.details_header(),
            "| File | Replacements | Lines |",
            "| --- | ---: | --- |",
        ]
        failures: list[str] = []
        for result in self.iter_failed():
            if not result.replacements:
                failures.append(self.failure_line(result))
                continue
            lines.append(f"| `{result.file}` | {len(result.replacements)} | {_rows(result)} |")
        if failures:
            lines.extend(["", *failures])
        lines.extend(["", "</details>"])
        return "\n".join(lines) + "\n"

    def review_comments(self) -> list[ReviewComment]:
        comments: list[ReviewComment] = []
        for result in self.iter_failed():
            for change in result.format_changes:
                position = self.position_for(result.file, change.row)
                if position is None:
                    continue
                comments.append(ReviewComment(path=result.file, position=position, body=review_body(change)))
        return comments


__all__ = ["ClangFormatReporter", "review_body"]
