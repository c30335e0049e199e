# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reporter base class shared by every analyzer family."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..changes import Changeset
from ..diff.position import position_in_file
from ..models import BriefResult, PerFileResult, ReviewComment, ToolRunResult

if TYPE_CHECKING:
    from ..tools.base import ToolOption


def machine_key(tool: str) -> str:
    """Return the machine-output key counting failed files for ``tool``."""

    return f"{tool.replace('-', '_')}_failed_number"


@dataclass(frozen=True, slots=True)
class ToolReporter(ABC):
    """Render one tool's :class:`ToolRunResult` onto every report surface.

    Failed files are always visited in path order so the rendered output does
    not depend on the order in which files finished.
    """

    option: ToolOption
    result: ToolRunResult
    changeset: Changeset

    @property
    def tool(self) -> str:
        """Return the tool family name."""

        return self.result.tool

    @property
    def binary_name(self) -> str:
        """Return the executable name shown in report headers."""

        return self.option.binary.name

    def is_passed(self) -> bool:
        """Return the tool's final pass flag."""

        return self.result.final_passed

    def brief_result(self) -> BriefResult:
        """Return the summary row for the tool."""

        return self.result.brief()

    def iter_failed(self) -> Iterator[PerFileResult]:
        """Yield failed per-file results sorted by path."""

        yield from self.result.failed_files()

    def details_header(self) -> str:
        """Return the opening of the collapsible block wrapping the tool's listing."""

        count = len(self.result.failed)
        return f"<details>\n<summary>{self.binary_name} reports:<strong>{count} fails</strong></summary>\n"

    def position_for(self, path: str, row: int | None) -> int | None:
        """Return the review position of ``row`` in ``path``'s diff."""

        return position_in_file(self.changeset.get(path), row)

    def machine_output(self) -> dict[str, int]:
        """Return ``key -> value`` pairs for downstream automation."""

        return {machine_key(self.tool): len(self.result.failed)}

    @staticmethod
    def failure_line(result: PerFileResult) -> str:
        """Return the listing entry for a file that failed without findings."""

        reason = result.error or f"exit code {result.exit_code}"
        return f"- **{result.file}:** {result.outcome.value.replace('_', ' ')} ({reason})"

    @abstractmethod
    def issue_comment(self) -> str:
        """Return the markdown listing posted as an issue comment."""

    @abstractmethod
    def step_summary(self) -> str:
        """Return the markdown written to the workflow step summary."""

    @abstractmethod
    def review_comments(self) -> list[ReviewComment]:
        """Return inline comments for every finding that maps to a diff position."""


__all__ = ["ToolReporter", "machine_key"]
