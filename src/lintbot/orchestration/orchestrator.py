# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Coordinate tool resolution, analysis and reporting for a revision."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from ..changes import Changeset
from ..config import Config
from ..console import detect_tty
from ..context import RuntimeContext
from ..logging import fail, info, ok, section
from ..models import BriefResult
from ..platform import PlatformInfo, detect_platform
from ..process_utils import CommandRunner, run_command
from ..reporting.base import ToolReporter
from ..reporting.publishers import ReportPublisher
from ..reporting.summary import (
    all_passed,
    brief_table,
    collect_review_comments,
    compose_issue_comment,
    compose_step_summary,
    machine_output,
    machine_output_lines,
    review_payload,
)
from ..runner import AnalysisRunner
from ..tools.base import CheckContext, ToolHandle
from ..tools.registry import DEFAULT_REGISTRY, ToolRegistry

LOGGER = logging.getLogger(__name__)

EXIT_SUCCESS: Final[int] = 0
EXIT_LINT_FAILURE: Final[int] = 1


@dataclass(frozen=True, slots=True)
class RunReport:
    """Everything a finished run hands to the report surfaces."""

    reporters: tuple[ToolReporter, ...]
    briefs: tuple[BriefResult, ...]
    passed: bool
    issue_comment: str
    step_summary: str
    review: dict[str, object]
    machine_output: dict[str, int] = field(default_factory=dict)

    @property
    def exit_code(self) -> int:
        """Return the process exit status for the run."""

        return EXIT_SUCCESS if self.passed else EXIT_LINT_FAILURE

    @property
    def table(self) -> str:
        """Return the tool summary table."""

        return brief_table(self.briefs)

    def action_output_lines(self) -> list[str]:
        """Return the ``key=value`` lines written to the action output."""

        return machine_output_lines(self.machine_output)


def build_report(reporters: Sequence[ToolReporter]) -> RunReport:
    """Merge per-tool reporters into one :class:`RunReport`."""

    comments = collect_review_comments(reporters)
    return RunReport(
        reporters=tuple(reporters),
        briefs=tuple(reporter.brief_result() for reporter in reporters),
        passed=all_passed(reporters),
        issue_comment=compose_issue_comment(reporters),
        step_summary=compose_step_summary(reporters),
        review=review_payload(comments),
        machine_output=machine_output(reporters),
    )


class Orchestrator:
    """Run every enabled tool over a changeset and publish the merged report.

    Configuration and capability errors surface from :meth:`resolve_tools`
    before any file is analysed. Reporting errors surface from
    :meth:`publish` after every tool has finished.
    """

    def __init__(
        self,
        config: Config,
        *,
        root: Path,
        registry: ToolRegistry | None = None,
        platform: PlatformInfo | None = None,
        command_runner: CommandRunner = run_command,
        use_emoji: bool = True,
        use_color: bool | None = None,
    ) -> None:
        self.config = config
        self.root = root
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self.platform = platform if platform is not None else detect_platform()
        self.command_runner = command_runner
        self.use_emoji = use_emoji
        self.use_color = use_color

    def resolve_tools(self) -> list[ToolHandle]:
        """Create a handle for every enabled family, in registry order.

        Raises:
            ConfigurationError: If a binary cannot be resolved unambiguously.
            CapabilityError: If a resolved tool cannot run on this platform.
        """

        handles: list[ToolHandle] = []
        for family in self.registry.families():
            if not self.config.tool_settings(family.name).enabled:
                LOGGER.debug("Skipping disabled tool %s", family.name)
                continue
            option = family.create_option(self.config)
            handle = family.create_instance(option, self.platform)
            info(
                f"Using {family.name} {option.version} ({option.binary})",
                use_emoji=self.use_emoji,
                use_color=self.use_color,
            )
            handles.append(handle)
        return handles

    def analyse(self, handles: Sequence[ToolHandle], changeset: Changeset) -> list[ToolReporter]:
        """Run each handle over ``changeset`` and return one reporter per tool."""

        context = CheckContext(
            root=self.root,
            runner=self.command_runner,
            timeout=self.config.runner.timeout_seconds,
        )
        runner = AnalysisRunner(
            context,
            jobs=self.config.runner.jobs,
            use_emoji=self.use_emoji,
            use_color=self.use_color,
        )
        reporters: list[ToolReporter] = []
        for handle in handles:
            section(handle.name, use_color=detect_tty() if self.use_color is None else self.use_color)
            result = runner.run(handle, changeset)
            brief = result.brief()
            message = (
                f"{handle.name}: {brief.passed_count} passed, "
                f"{brief.failed_count} failed, {brief.ignored_count} ignored"
            )
            if result.fastly_exited:
                message += " (stopped early)"
            if result.final_passed:
                ok(message, use_emoji=self.use_emoji, use_color=self.use_color)
            else:
                fail(message, use_emoji=self.use_emoji, use_color=self.use_color)
            reporters.append(handle.reporter(result, changeset))
        return reporters

    def run(self, changeset: Changeset) -> RunReport:
        """Resolve tools, analyse ``changeset`` and build the merged report."""

        handles = self.resolve_tools()
        return build_report(self.analyse(handles, changeset))

    def publish(self, report: RunReport, publisher: ReportPublisher, context: RuntimeContext) -> None:
        """Send ``report`` to the surfaces enabled in the reporting settings.

        Raises:
            ReportingError: If any surface cannot be written.
        """

        settings = self.config.reporting
        if settings.step_summary:
            publisher.write_step_summary(report.step_summary)
        if settings.action_output:
            publisher.write_action_output(report.action_output_lines())
        if settings.issue_comment and context.is_pull_request:
            publisher.post_issue_comment(report.issue_comment)
        if settings.pull_request_review and context.is_pull_request and report.review["comments"]:
            publisher.post_review(report.review)


__all__ = [
    "EXIT_LINT_FAILURE",
    "EXIT_SUCCESS",
    "Orchestrator",
    "RunReport",
    "build_report",
]
