# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the result model invariants."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from lintbot.models import FileOutcome, PerFileResult, ReviewComment, ToolRunResult, classify


def _result(path: str, outcome: FileOutcome = FileOutcome.PASSED) -> PerFileResult:
    return PerFileResult(file=path, outcome=outcome, exit_code=0)


@pytest.mark.parametrize(
    ("exit_code", "has_findings", "expected"),
    [
        (0, False, FileOutcome.PASSED),
        (0, True, FileOutcome.FINDINGS),
        (1, True, FileOutcome.FINDINGS),
        (3, False, FileOutcome.TOOL_FAILURE),
    ],
)
def test_classify(exit_code: int, has_findings: bool, expected: FileOutcome) -> None:
    assert classify(exit_code, has_findings=has_findings) is expected


def test_finish_sets_final_passed_from_failures() -> None:
    clean = ToolRunResult(tool="clang-tidy")
    clean.record(_result("a.cpp"))
    clean.finish()

    dirty = ToolRunResult(tool="clang-tidy")
    dirty.record(_result("a.cpp"))
    dirty.record(_result("b.cpp", FileOutcome.FINDINGS))
    dirty.finish()

    assert clean.final_passed is True
    assert dirty.final_passed is False
    assert dirty.fastly_exited is False


def test_stop_fast_never_passes() -> None:
    result = ToolRunResult(tool="clang-format")
    result.record(_result("a.cpp", FileOutcome.TIMEOUT))
    result.stop_fast()

    assert result.fastly_exited is True
    assert result.final_passed is False


def test_file_is_classified_at_most_once() -> None:
    result = ToolRunResult(tool="clang-tidy")
    result.record(_result("a.cpp"))
    result.record_ignored("notes.txt")

    with pytest.raises(ValueError, match="already classified"):
        result.record(_result("a.cpp", FileOutcome.FINDINGS))
    with pytest.raises(ValueError, match="already classified"):
        result.record_ignored("a.cpp")
    with pytest.raises(ValueError, match="already classified"):
        result.record_ignored("notes.txt")


def test_brief_and_failed_order() -> None:
    result = ToolRunResult(tool="clang-tidy")
    result.record(_result("z.cpp", FileOutcome.FINDINGS))
    result.record(_result("a.cpp", FileOutcome.PARSE_ERROR))
    result.record(_result("m.cpp"))
    result.record_ignored("README.md")
    result.finish()

    brief = result.brief()

    assert [item.file for item in result.failed_files()] == ["a.cpp", "z.cpp"]
    assert (brief.passed, brief.passed_count, brief.failed_count, brief.ignored_count) == (False, 1, 2, 1)


def test_review_comment_requires_positive_position() -> None:
    with pytest.raises(ValidationError):
        ReviewComment(path="a.cpp", position=0, body="x")
