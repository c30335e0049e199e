# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the runtime context snapshot."""

from __future__ import annotations

from pathlib import Path

import pytest

from lintbot.context import RuntimeContext, parse_pull_request_number


@pytest.mark.parametrize(
    ("ref", "expected"),
    [
        ("refs/pull/42/merge", 42),
        ("refs/heads/main", None),
        ("refs/pull/abc/merge", None),
        (None, None),
    ],
)
def test_parse_pull_request_number(ref: str | None, expected: int | None) -> None:
    assert parse_pull_request_number(ref) == expected


def test_from_environ_reads_workflow_variables(tmp_path: Path) -> None:
    environ = {
        "GITHUB_REPOSITORY": "octo/widgets",
        "GITHUB_TOKEN": "secret-token",
        "GITHUB_EVENT_NAME": "pull_request",
        "GITHUB_REF": "refs/pull/17/merge",
        "GITHUB_SHA": "abc123",
        "GITHUB_STEP_SUMMARY": str(tmp_path / "summary.md"),
        "GITHUB_OUTPUT": "  ",
    }

    context = RuntimeContext.from_environ(environ)

    assert context.repository == "octo/widgets"
    assert context.pr_number == 17
    assert context.is_pull_request is True
    assert context.step_summary_path == tmp_path / "summary.md"
    assert context.output_path is None
    assert "secret-token" not in repr(context)


def test_push_event_is_not_a_pull_request() -> None:
    context = RuntimeContext.from_environ({"GITHUB_EVENT_NAME": "push", "GITHUB_REF": "refs/heads/main"})

    assert context.pr_number is None
    assert context.is_pull_request is False
