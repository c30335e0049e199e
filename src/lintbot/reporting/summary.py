# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Combine per-tool reports into the documents published for a run."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Final

from ..models import BriefResult, ReviewComment
from .base import ToolReporter

TITLE: Final[str] = "# The lintbot Result"
HINT_PASS: Final[str] = ":rocket: All checks on all files passed."
HINT_FAIL: Final[str] = ":warning: Some files didn't pass the lintbot checks."
TOTAL_FAILED_KEY: Final[str] = "total_failed"
REVIEW_EVENT: Final[str] = "COMMENT"
REVIEW_BODY: Final[str] = "lintbot found issues in the changed lines."

REPRODUCTION_SECTION: Final[str] = """\
<details>
<summary>Reproduce these results locally</summary>

1. Generate a compilation database, e.g. `cmake -B build -DCMAKE_EXPORT_COMPILE_COMMANDS=ON`.
2. Save the change under review with `git diff <base>... > changes.diff`.
3. Run `lintbot check --diff changes.diff` from the repository root.

clang-format findings can be fixed in place with `clang-format -i <file>`.

</details>
"""


def brief_table(briefs: Sequence[BriefResult]) -> str:
    """Return a markdown table with one row per tool."""

    lines = [
        "| Tool | Passed | Failed | Ignored |",
        "| --- | ---: | ---: | ---: |",
    ]
    for brief in briefs:
        marker = ":heavy_check_mark:" if brief.passed else ":x:"
        lines.append(
            f"| {marker} {brief.tool} | {brief.passed_count} | {brief.failed_count} | {brief.ignored_count} |",
        )
    return "\n".join(lines) + "\n"


def all_passed(reporters: Sequence[ToolReporter]) -> bool:
    """Return ``True`` when every reporter's tool passed."""

    return all(reporter.is_passed() for reporter in reporters)


def _compose(reporters: Sequence[ToolReporter], render: Callable[[ToolReporter], str]) -> str:
    briefs = [reporter.brief_result() for reporter in reporters]
    if all_passed(reporters):
        return "\n".join([TITLE, "", HINT_PASS, "", brief_table(briefs)])
    sections = [render(reporter) for reporter in reporters if not reporter.is_passed()]
    return "\n".join([TITLE, "", HINT_FAIL, "", brief_table(briefs), *sections, REPRODUCTION_SECTION])


def compose_step_summary(reporters: Sequence[ToolReporter]) -> str:
    """Return the step summary document for the whole run."""

    return _compose(reporters, lambda reporter: reporter.step_summary())


def compose_issue_comment(reporters: Sequence[ToolReporter]) -> str:
    """Return the issue comment body for the whole run.

    Failing tools contribute their listing in tool order, followed by the
    reproduction instructions; a passing run only carries the summary table.
    """

    return _compose(reporters, lambda reporter: reporter.issue_comment())


def collect_review_comments(reporters: Sequence[ToolReporter]) -> list[ReviewComment]:
    """Concatenate review comments from every reporter in tool order."""

    comments: list[ReviewComment] = []
    for reporter in reporters:
        comments.extend(reporter.review_comments())
    return comments


def review_payload(comments: Sequence[ReviewComment], *, body: str = REVIEW_BODY) -> dict[str, object]:
    """Return the batched review submission for ``comments``."""

    return {
        "body": body,
        "event": REVIEW_EVENT,
        "comments": [comment.model_dump() for comment in comments],
    }


def machine_output(reporters: Sequence[ToolReporter]) -> dict[str, int]:
    """Return one failed-count entry per tool plus the aggregate total."""

    values: dict[str, int] = {}
    total = 0
    for reporter in reporters:
        for key, value in reporter.machine_output().items():
            values[key] = value
        total += len(reporter.result.failed)
    values[TOTAL_FAILED_KEY] = total
    return values


def machine_output_lines(values: dict[str, int]) -> list[str]:
    """Format machine output values as ``key=value`` lines."""

    return [f"{key}={value}" for key, value in values.items()]


__all__ = [
    "HINT_FAIL",
    "HINT_PASS",
    "REPRODUCTION_SECTION",
    "TITLE",
    "all_passed",
    "brief_table",
    "collect_review_comments",
    "compose_issue_comment",
    "compose_step_summary",
    "machine_output",
    "machine_output_lines",
    "review_payload",
]
