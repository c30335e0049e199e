# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from .. import __version__
from ..changes import Changeset, load_changeset, parse_unified_diff
from ..config import Config, load_config
from ..console import detect_tty
from ..context import RuntimeContext
from ..errors import ConfigurationError, LintBotError
from ..logging import fail, ok
from ..orchestration import Orchestrator, RunReport
from ..reporting.publishers import FilePublisher
from ._rendering import print_brief_table

app = typer.Typer(
    name="lintbot",
    help="Run clang-format and clang-tidy over the files changed in a revision.",
    add_completion=False,
    no_args_is_help=True,
)

ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", "-r", help="Repository root the analyzers run from."),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Configuration file (lintbot.toml or pyproject.toml)."),
]
CHANGES_OPTION = Annotated[
    Path | None,
    typer.Option("--changes", help="JSON changeset describing changed files and hunks."),
]
DIFF_OPTION = Annotated[
    Path | None,
    typer.Option("--diff", help="Unified diff of the change under review."),
]
JOBS_OPTION = Annotated[
    int | None,
    typer.Option("--jobs", "-j", min=1, help="Files analysed concurrently per tool."),
]
COLOR_OPTION = Annotated[
    bool,
    typer.Option("--color/--no-color", help="Toggle ANSI colour output."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Emit debug logging."),
]


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"lintbot {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """lintbot command group."""


def load_changes(changes: Path | None, diff: Path | None) -> Changeset:
    """Load the changeset from exactly one of ``changes`` or ``diff``.

    Raises:
        ConfigurationError: If neither or both inputs are given, or the diff
            cannot be read.
    """

    if changes is not None and diff is None:
        return load_changeset(changes)
    if diff is not None and changes is None:
        try:
            text = diff.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigurationError(f"Unable to read diff {diff}: {exc}") from exc
        return parse_unified_diff(text)
    raise ConfigurationError("Provide exactly one of --changes or --diff")


def _output_dir(root: Path, config: Config) -> Path:
    output_dir = config.reporting.output_dir
    return output_dir if output_dir.is_absolute() else root / output_dir


def _execute(
    root: Path,
    config_path: Path | None,
    changes: Path | None,
    diff: Path | None,
    jobs: int | None,
    *,
    use_color: bool,
    use_emoji: bool,
) -> RunReport:
    config = load_config(root, config_path=config_path)
    if jobs is not None:
        config.runner.jobs = jobs
    changeset = load_changes(changes, diff)
    context = RuntimeContext.from_environ()
    orchestrator = Orchestrator(config, root=root, use_emoji=use_emoji, use_color=use_color)
    report = orchestrator.run(changeset)
    print_brief_table(report.briefs, use_color=use_color, use_emoji=use_emoji)
    orchestrator.publish(report, FilePublisher(context, _output_dir(root, config)), context)
    return report


@app.command("check")
def check(
    root: ROOT_OPTION = Path(),
    config: CONFIG_OPTION = None,
    changes: CHANGES_OPTION = None,
    diff: DIFF_OPTION = None,
    jobs: JOBS_OPTION = None,
    color: COLOR_OPTION = True,
    emoji: EMOJI_OPTION = True,
    verbose: VERBOSE_OPTION = False,
) -> None:
    """Analyse the changed files and publish the reports.

    Exits with 0 when every tool passed, 1 when any tool reported failures and
    2 on configuration, capability or reporting errors.
    """

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    use_color = color and detect_tty()
    root = root.resolve()
    try:
        report = _execute(root, config, changes, diff, jobs, use_color=use_color, use_emoji=emoji)
    except LintBotError as exc:
        fail(str(exc), use_emoji=emoji, use_color=use_color)
        raise typer.Exit(code=exc.exit_code) from exc

    if report.passed:
        ok("All checks passed", use_emoji=emoji, use_color=use_color)
    else:
        fail("Some files did not pass the checks", use_emoji=emoji, use_color=use_color)
    raise typer.Exit(code=report.exit_code)


__all__ = ["app", "check", "load_changes"]
