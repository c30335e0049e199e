# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests covering the run orchestrator."""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

import pytest
from helpers.fakes import FakeRunner, completed, make_hunk, which_from

from lintbot.changes import ChangedFile, Changeset
from lintbot.config import Config, config_from_mapping
from lintbot.context import RuntimeContext
from lintbot.errors import CapabilityError, ConfigurationError
from lintbot.models import FileOutcome, PerFileResult, ToolRunResult
from lintbot.orchestration import EXIT_LINT_FAILURE, EXIT_SUCCESS, Orchestrator, build_report
from lintbot.platform import Architecture, OperatingSystem, PlatformInfo
from lintbot.tools.clang_format import ClangFormatFamily, ClangFormatTool
from lintbot.tools.clang_tidy import ClangTidyFamily, ClangTidyTool
from lintbot.tools.registry import ToolRegistry

LINUX = PlatformInfo(OperatingSystem.LINUX, Architecture.X86_64)
MACOS = PlatformInfo(OperatingSystem.MACOS, Architecture.ARM64)

BINARIES = {
    "clang-format-18": "/usr/bin/clang-format-18",
    "clang-tidy-18": "/usr/bin/clang-tidy-18",
}
FORMAT_XML = (
    "<?xml version='1.0'?>\n"
    "<replacements xml:space='preserve' incomplete_format='false'>\n"
    "<replacement offset='3' length='2'> </replacement>\n"
    "</replacements>\n"
)
NO_REPLACEMENTS = "<replacements xml:space='preserve' incomplete_format='false'>\n</replacements>\n"
TIDY_FINDING = "src/a.cpp:1:5: warning: variable 'x' is not initialized [cppcoreguidelines-init-variables]\n"


class RecordingPublisher:
    """Publisher keeping every document it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def write_step_summary(self, markdown: str) -> None:
        self.calls.append(("step_summary", markdown))

    def write_action_output(self, lines: Sequence[str]) -> None:
        self.calls.append(("action_output", list(lines)))

    def post_issue_comment(self, markdown: str) -> None:
        self.calls.append(("issue_comment", markdown))

    def post_review(self, payload: Mapping[str, object]) -> None:
        self.calls.append(("review", dict(payload)))

    def surfaces(self) -> list[str]:
        return [name for name, _ in self.calls]


def _result(tool: str, passed: int, failed: int, ignored: int) -> ToolRunResult:
    result = ToolRunResult(tool=tool)
    for index in range(passed):
        result.record(PerFileResult(file=f"p{index}.cpp", outcome=FileOutcome.PASSED, exit_code=0))
    for index in range(failed):
        result.record(PerFileResult(file=f"f{index}.cpp", outcome=FileOutcome.TOOL_FAILURE, exit_code=1))
    for index in range(ignored):
        result.record_ignored(f"i{index}.txt")
    result.finish()
    return result


def _respond(args: Sequence[str]) -> subprocess.CompletedProcess[str]:
    if "clang-format" in args[0]:
        return completed(stdout=FORMAT_XML)
    return completed(stdout=TIDY_FINDING, stderr="1 warning generated.\n")


def _orchestrator(
    tmp_path: Path,
    config: Config,
    *,
    runner: FakeRunner,
    platform: PlatformInfo = LINUX,
) -> Orchestrator:
    lookup = which_from(BINARIES)
    registry = ToolRegistry(
        (ClangFormatFamily(runner=runner, lookup=lookup), ClangTidyFamily(runner=runner, lookup=lookup)),
    )
    return Orchestrator(config, root=tmp_path, registry=registry, platform=platform, command_runner=runner)


def _pinned(**extra: object) -> Config:
    data: dict[str, object] = {"clang-format": {"version": "18"}, "clang-tidy": {"version": "18"}}
    data.update(extra)
    return config_from_mapping(data)


def test_one_failing_tool_fails_the_run(
    tidy_tool: Callable[..., ClangTidyTool],
    format_tool: Callable[..., ClangFormatTool],
) -> None:
    changeset = Changeset()
    reporters = [
        format_tool().reporter(_result("clang-format", 5, 0, 0), changeset),
        tidy_tool().reporter(_result("clang-tidy", 4, 1, 1), changeset),
    ]

    report = build_report(reporters)

    assert report.passed is False
    assert report.exit_code == EXIT_LINT_FAILURE
    assert [(brief.tool, brief.passed) for brief in report.briefs] == [("clang-format", True), ("clang-tidy", False)]
    rows = report.table.splitlines()[2:]
    assert rows == [
        "| :heavy_check_mark: clang-format | 5 | 0 | 0 |",
        "| :x: clang-tidy | 4 | 1 | 1 |",
    ]
    assert report.machine_output == {
        "clang_format_failed_number": 0,
        "clang_tidy_failed_number": 1,
        "total_failed": 1,
    }


def test_all_passing_tools_pass_the_run(tidy_tool: Callable[..., ClangTidyTool]) -> None:
    report = build_report([tidy_tool().reporter(_result("clang-tidy", 3, 0, 2), Changeset())])

    assert report.passed is True
    assert report.exit_code == EXIT_SUCCESS
    assert report.review["comments"] == []


def test_run_end_to_end(tmp_path: Path) -> None:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "a.cpp").write_text("int  x;\n", encoding="utf-8")
    runner = FakeRunner(
        {"--version": completed(stdout="clang version 18.1.3\n"), "src/a.cpp": _respond},
    )
    changeset = Changeset(
        files=(
            ChangedFile(path="src/a.cpp", status="added", hunks=(make_hunk(1, 1),)),
            ChangedFile(path="docs/notes.md", status="added", hunks=(make_hunk(1, 4),)),
        ),
    )

    report = _orchestrator(tmp_path, _pinned(), runner=runner).run(changeset)

    assert report.exit_code == EXIT_LINT_FAILURE
    assert [brief.tool for brief in report.briefs] == ["clang-format", "clang-tidy"]
    assert all(brief.ignored_count == 1 for brief in report.briefs)
    assert report.machine_output["total_failed"] == 2
    positions = [(item["path"], item["position"]) for item in report.review["comments"]]
    assert positions == [("src/a.cpp", 1), ("src/a.cpp", 1)]
    assert "clang-format-18 reports:<strong>1 fails</strong>" in report.issue_comment
    assert "cppcoreguidelines-init-variables" in report.step_summary
    assert all(call[1] == tmp_path for call in runner.calls if call[0][-1] == "src/a.cpp")


def test_clean_run_end_to_end(tmp_path: Path) -> None:
    (tmp_path / "a.cpp").write_text("int x;\n", encoding="utf-8")
    runner = FakeRunner(
        {"--version": completed(stdout="clang version 18.1.3\n")},
        default=completed(stdout=NO_REPLACEMENTS),
    )
    changeset = Changeset(files=(ChangedFile(path="a.cpp", hunks=(make_hunk(1, 1),)),))
    config = _pinned(**{"clang-tidy": {"enabled": False}})

    report = _orchestrator(tmp_path, config, runner=runner).run(changeset)

    assert report.passed is True
    assert [brief.tool for brief in report.briefs] == ["clang-format"]


def test_disabled_tools_are_not_resolved(tmp_path: Path) -> None:
    runner = FakeRunner({"--version": completed(stdout="clang version 18.1.3\n")})
    config = config_from_mapping({"clang-format": {"enabled": False}, "clang-tidy": {"version": "18"}})

    handles = _orchestrator(tmp_path, config, runner=runner).resolve_tools()

    assert [handle.name for handle in handles] == ["clang-tidy"]


def test_resolution_errors_surface_before_analysis(tmp_path: Path) -> None:
    runner = FakeRunner({"--version": completed(stdout="clang version 18.1.3\n")})

    with pytest.raises(ConfigurationError):
        _orchestrator(tmp_path, _pinned(**{"clang-tidy": {"version": "19"}}), runner=runner).resolve_tools()
    with pytest.raises(CapabilityError):
        _orchestrator(tmp_path, _pinned(), runner=runner, platform=MACOS).resolve_tools()
    assert all(call[0][-1] == "--version" for call in runner.calls)


def test_publish_outside_pull_request(tmp_path: Path, tidy_tool: Callable[..., ClangTidyTool]) -> None:
    report = build_report([tidy_tool().reporter(_result("clang-tidy", 0, 1, 0), Changeset())])
    publisher = RecordingPublisher()

    _orchestrator(tmp_path, Config(), runner=FakeRunner()).publish(report, publisher, RuntimeContext())

    assert publisher.surfaces() == ["step_summary", "action_output"]
    assert publisher.calls[1] == ("action_output", ["clang_tidy_failed_number=1", "total_failed=1"])


def test_publish_on_pull_request(tmp_path: Path) -> None:
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "a.cpp").write_text("int  x;\n", encoding="utf-8")
    runner = FakeRunner({"--version": completed(stdout="clang version 18.1.3\n"), "src/a.cpp": _respond})
    changeset = Changeset(files=(ChangedFile(path="src/a.cpp", hunks=(make_hunk(1, 1),)),))
    orchestrator = _orchestrator(tmp_path, _pinned(), runner=runner)
    report = orchestrator.run(changeset)
    publisher = RecordingPublisher()

    orchestrator.publish(report, publisher, RuntimeContext(pr_number=7))

    assert publisher.surfaces() == ["step_summary", "action_output", "issue_comment", "review"]


def test_publish_respects_reporting_switches(tmp_path: Path, tidy_tool: Callable[..., ClangTidyTool]) -> None:
    report = build_report([tidy_tool().reporter(_result("clang-tidy", 0, 1, 0), Changeset())])
    config = config_from_mapping({"reporting": {"step_summary": False, "issue_comment": False}})
    publisher = RecordingPublisher()

    _orchestrator(tmp_path, config, runner=FakeRunner()).publish(report, publisher, RuntimeContext(pr_number=7))

    assert publisher.surfaces() == ["action_output"]
