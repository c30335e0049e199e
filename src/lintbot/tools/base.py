# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Definitions shared by every analyzer family."""

from __future__ import annotations

import re
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from ..changes import Changeset
from ..config import DEFAULT_FILE_IREGEX, Config
from ..models import FileOutcome, PerFileResult, ToolRunResult
from ..platform import PlatformInfo
from ..process_utils import CommandRunner, TimedOutProcess, run_command

if TYPE_CHECKING:
    from ..reporting.base import ToolReporter


class ToolOption(BaseModel):
    """Resolved options for one analyzer family.

    ``binary`` and ``version`` are filled in by binary resolution; the
    remaining fields come from configuration.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    fail_fast: bool = False
    binary: Path
    version: str
    file_iregex: str = DEFAULT_FILE_IREGEX

    def matches(self, path: str) -> bool:
        """Return ``True`` when ``path`` fully matches :attr:`file_iregex`, ignoring case."""

        return re.fullmatch(self.file_iregex, path, flags=re.IGNORECASE) is not None


@dataclass(frozen=True, slots=True)
class CheckContext:
    """Inputs needed to analyse one file."""

    root: Path
    runner: CommandRunner = field(default=run_command)
    timeout: float | None = None

    def run(self, args: Sequence[str]) -> subprocess.CompletedProcess[str]:
        """Invoke ``args`` from the repository root with the configured timeout."""

        return self.runner(args, cwd=self.root, timeout=self.timeout)


def timed_out_result(path: str, completed: subprocess.CompletedProcess[str], timeout: float | None) -> PerFileResult:
    """Build the failed result recorded for an invocation that hit its timeout."""

    return PerFileResult(
        file=path,
        outcome=FileOutcome.TIMEOUT,
        exit_code=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        error=f"analysis timed out after {timeout}s" if timeout is not None else "analysis timed out",
    )


def is_timed_out(completed: subprocess.CompletedProcess[str]) -> bool:
    """Return ``True`` when ``completed`` is the placeholder for a timed-out run."""

    return isinstance(completed, TimedOutProcess)


@runtime_checkable
class ToolHandle(Protocol):
    """Runnable analyzer bound to a resolved binary."""

    name: str
    option: ToolOption

    def check_file(self, path: str, context: CheckContext) -> PerFileResult:
        """Analyse ``path`` and return its per-file result.

        Implementations may raise :class:`lintbot.errors.ParseError` or
        :class:`OSError`; the analysis runner records those as failures.
        """
        ...

    def reporter(self, result: ToolRunResult, changeset: Changeset) -> ToolReporter:
        """Return the reporter rendering ``result`` against ``changeset``."""
        ...


@runtime_checkable
class ToolFamily(Protocol):
    """Factory for one analyzer family such as clang-tidy."""

    name: str

    def create_option(self, config: Config) -> ToolOption:
        """Resolve the family's option from ``config``.

        Raises:
            ConfigurationError: If the binary cannot be resolved unambiguously.
        """
        ...

    def create_instance(self, option: ToolOption, platform: PlatformInfo) -> ToolHandle:
        """Return a runnable handle for ``option`` on ``platform``.

        Raises:
            CapabilityError: If the resolved version is unsupported on ``platform``.
        """
        ...


__all__ = [
    "CheckContext",
    "ToolFamily",
    "ToolHandle",
    "ToolOption",
    "is_timed_out",
    "timed_out_result",
]
