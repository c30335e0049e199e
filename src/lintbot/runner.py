# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run one analyzer over the changed files of a revision."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum

from .changes import ChangedFile, Changeset
from .errors import ParseError
from .logging import warn
from .models import FileOutcome, PerFileResult, ToolRunResult
from .tools.base import CheckContext, ToolHandle

LOGGER = logging.getLogger(__name__)


class FileAction(str, Enum):
    """What the runner does with a changed file."""

    SKIP = "skip"
    IGNORE = "ignore"
    ANALYSE = "analyse"


@dataclass(frozen=True, slots=True)
class PlannedFile:
    """Changed file paired with the action chosen for it."""

    path: str
    action: FileAction


def plan_files(handle: ToolHandle, files: Sequence[ChangedFile]) -> list[PlannedFile]:
    """Decide, in list order, whether each file is skipped, ignored or analysed.

    Deleted files are skipped entirely; files whose path does not match the
    tool's inclusion pattern are ignored.
    """

    planned: list[PlannedFile] = []
    for changed in files:
        if changed.is_deleted:
            action = FileAction.SKIP
        elif not handle.option.matches(changed.path):
            action = FileAction.IGNORE
        else:
            action = FileAction.ANALYSE
        planned.append(PlannedFile(changed.path, action))
    return planned


def check_file_safely(handle: ToolHandle, path: str, context: CheckContext) -> PerFileResult:
    """Run ``handle`` on ``path`` converting parse, decode and OS errors into failed results."""

    try:
        return handle.check_file(path, context)
    except ParseError as exc:
        return PerFileResult(file=path, outcome=FileOutcome.PARSE_ERROR, error=str(exc))
    except (OSError, ValueError) as exc:
        LOGGER.debug("%s: %s raised %s", handle.name, path, type(exc).__name__)
        return PerFileResult(file=path, outcome=FileOutcome.TOOL_FAILURE, error=str(exc))


ResultSource = Callable[[str], PerFileResult]


class AnalysisRunner:
    """Apply one tool to a changeset and aggregate the per-file outcomes.

    With ``jobs > 1`` invocations overlap on a thread pool, but results are
    classified strictly in changeset order, so the aggregate and the fail-fast
    cut-off match a serial run.
    """

    def __init__(
        self,
        context: CheckContext,
        *,
        jobs: int = 1,
        use_emoji: bool = True,
        use_color: bool | None = None,
    ) -> None:
        self.context = context
        self.jobs = max(1, jobs)
        self.use_emoji = use_emoji
        self.use_color = use_color

    def run(self, handle: ToolHandle, changeset: Changeset) -> ToolRunResult:
        """Analyse every changed file with ``handle``.

        Returns:
            ToolRunResult: Aggregate result, also when fail-fast stopped the loop.
        """

        planned = plan_files(handle, list(changeset.iter_files()))
        with self._result_source(handle, planned) as source:
            return self._classify(handle, planned, source)

    def _classify(self, handle: ToolHandle, planned: Sequence[PlannedFile], source: ResultSource) -> ToolRunResult:
        result = ToolRunResult(tool=handle.name)
        for item in planned:
            if item.action is FileAction.SKIP:
                LOGGER.debug("%s: skipping deleted file %s", handle.name, item.path)
                continue
            if item.action is FileAction.IGNORE:
                LOGGER.debug("%s: ignoring %s", handle.name, item.path)
                result.record_ignored(item.path)
                continue
            outcome = source(item.path)
            result.record(outcome)
            if outcome.passed:
                continue
            warn(
                f"{handle.name}: {item.path} failed ({outcome.outcome.value})",
                use_emoji=self.use_emoji,
                use_color=self.use_color,
            )
            if handle.option.fail_fast:
                LOGGER.debug("%s: fail-fast triggered by %s", handle.name, item.path)
                result.stop_fast()
                return result
        result.finish()
        return result

    @contextmanager
    def _result_source(self, handle: ToolHandle, planned: Sequence[PlannedFile]) -> Iterator[ResultSource]:
        paths = [item.path for item in planned if item.action is FileAction.ANALYSE]
        if self.jobs == 1 or len(paths) < 2:
            yield lambda path: check_file_safely(handle, path, self.context)
            return

        executor = ThreadPoolExecutor(max_workers=self.jobs)
        futures: dict[str, Future[PerFileResult]] = {
            path: executor.submit(check_file_safely, handle, path, self.context) for path in paths
        }
        try:
            yield lambda path: futures[path].result()
        finally:
            executor.shutdown(wait=True, cancel_futures=True)


__all__ = ["AnalysisRunner", "FileAction", "PlannedFile", "check_file_safely", "plan_files"]
