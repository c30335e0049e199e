# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Report surfaces that receive the rendered run documents."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Final, Protocol

from ..context import RuntimeContext
from ..errors import ReportingError

LOGGER = logging.getLogger(__name__)

ISSUE_COMMENT_FILENAME: Final[str] = "issue-comment.md"
REVIEW_FILENAME: Final[str] = "review.json"


class ReportPublisher(Protocol):
    """Destination for the documents produced at the end of a run."""

    def write_step_summary(self, markdown: str) -> None:
        """Publish the workflow step summary."""
        ...

    def write_action_output(self, lines: Sequence[str]) -> None:
        """Publish ``key=value`` machine output lines."""
        ...

    def post_issue_comment(self, markdown: str) -> None:
        """Publish the issue comment body."""
        ...

    def post_review(self, payload: Mapping[str, object]) -> None:
        """Publish the batched review submission."""
        ...


def _append(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(text)
    except OSError as exc:
        raise ReportingError(f"Unable to write {path}: {exc}") from exc


def _write(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ReportingError(f"Unable to write {path}: {exc}") from exc


class FilePublisher:
    """Write report documents to files for the workflow and the API transport.

    The step summary and machine output are appended to the files named by
    ``GITHUB_STEP_SUMMARY`` and ``GITHUB_OUTPUT``; the issue comment and review
    payload are written to ``output_dir`` where the transport picks them up.
    """

    def __init__(self, context: RuntimeContext, output_dir: Path) -> None:
        self.context = context
        self.output_dir = output_dir

    def write_step_summary(self, markdown: str) -> None:
        path = self.context.step_summary_path
        if path is None:
            LOGGER.debug("GITHUB_STEP_SUMMARY is unset; skipping step summary")
            return
        _append(path, markdown if markdown.endswith("\n") else f"{markdown}\n")

    def write_action_output(self, lines: Sequence[str]) -> None:
        path = self.context.output_path
        if path is None:
            LOGGER.debug("GITHUB_OUTPUT is unset; skipping action output")
            return
        _append(path, "".join(f"{line}\n" for line in lines))

    def post_issue_comment(self, markdown: str) -> None:
        _write(self.output_dir / ISSUE_COMMENT_FILENAME, markdown)

    def post_review(self, payload: Mapping[str, object]) -> None:
        _write(self.output_dir / REVIEW_FILENAME, json.dumps(dict(payload), indent=2) + "\n")


__all__ = ["ISSUE_COMMENT_FILENAME", "REVIEW_FILENAME", "FilePublisher", "ReportPublisher"]
