# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Markdown and review rendering for clang-tidy results."""

from __future__ import annotations

from dataclasses import dataclass

from ..models import Diagnostic, ReviewComment
from ..severity import severity_to_markdown
from .base import ToolReporter


def _escape_cell(value: str) -> str:
    return value.replace("|", "\\|").strip()


def review_body(diagnostic: Diagnostic) -> str:
    """Return the inline comment body for ``diagnostic``."""

    lines = [f"{severity_to_markdown(diagnostic.severity)} **[{diagnostic.rule}]** {diagnostic.brief.strip()}"]
    if diagnostic.details:
        lines.extend(["", "```text", *diagnostic.details, "```"])
    return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class ClangTidyReporter(ToolReporter):
    """Reporter for clang-tidy diagnostics."""

    def issue_comment(self) -> str:
        lines = [self.details_header()]
        for result in self.iter_failed():
            if not result.diagnostics:
                lines.append(self.failure_line(result))
                continue
            for diag in result.diagnostics:
                lines.append(f"- **{diag.location()}:** {diag.severity.value}: [{diag.rule}]")
                lines.append(f"  > {diag.brief}")
        lines.extend(["", "</details>"])
        return "\n".join(lines) + "\n"

    def step_summary(self) -> str:
        lines = [
            f"## {self.tool}",
            "",
            self.details_header(),
            "| File | Line | Severity | Rule | Message |",
            "| --- | ---: | --- | --- | --- |",
        ]
        failures: list[str] = []
        for result in self.iter_failed():
            if not result.diagnostics:
                failures.append(self.failure_line(result))
            for diag in result.diagnostics:
                lines.append(
                    f"| `{diag.file}` | {diag.row} | {severity_to_markdown(diag.severity)} {diag.severity.value} "
                    f"| `{diag.rule}` | {_escape_cell(diag.brief)} |",
                )
        if failures:
            lines.extend(["", *failures])
        lines.extend(["", "</details>"])
        return "\n".join(lines) + "\n"

    def review_comments(self) -> list[ReviewComment]:
        comments: list[ReviewComment] = []
        for result in self.iter_failed():
            for diag in result.diagnostics:
                position = self.position_for(result.file, diag.row)
                if position is None:
                    continue
                comments.append(ReviewComment(path=result.file, position=position, body=review_body(diag)))
        return comments


__all__ = ["ClangTidyReporter", "review_body"]
