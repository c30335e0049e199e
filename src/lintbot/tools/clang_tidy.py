# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""clang-tidy family: option resolution, invocation and parsing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Final

from ..changes import Changeset
from ..config import Config
from ..errors import ConfigurationError
from ..models import PerFileResult, ToolRunResult, classify
from ..parsers.clang_tidy import parse_clang_tidy_stderr, parse_clang_tidy_stdout
from ..platform import PlatformInfo
from ..process_utils import CommandRunner, run_command, which
from ..reporting.clang_tidy import ClangTidyReporter
from .base import CheckContext, ToolOption, is_timed_out, timed_out_result
from .capabilities import DEFAULT_CAPABILITIES, CapabilityTable
from .resolution import Which, resolve_binary, resolve_version

LOGGER = logging.getLogger(__name__)

CLANG_TIDY: Final[str] = "clang-tidy"


class ClangTidyOption(ToolOption):
    """Resolved clang-tidy options."""

    database: str = "build"
    checks: str | None = None
    config: str | None = None
    config_file: str | None = None
    header_filter: str | None = None
    line_filter: str | None = None
    allow_no_checks: bool = False
    enable_check_profile: bool = False


@dataclass(frozen=True, slots=True)
class ClangTidyTool:
    """clang-tidy bound to a resolved binary."""

    option: ClangTidyOption
    name: str = CLANG_TIDY

    def build_command(self, path: str) -> list[str]:
        """Return the argument vector that checks ``path``."""

        opt = self.option
        args = [str(opt.binary)]
        if opt.database:
            args.append(f"-p={opt.database}")
        if opt.checks:
            args.append(f"-checks={opt.checks}")
        if opt.allow_no_checks:
            args.append("--allow-no-checks")
        if opt.config:
            args.append(f"--config={opt.config}")
        if opt.config_file:
            args.append(f"--config-file={opt.config_file}")
        if opt.enable_check_profile:
            args.append("--enable-check-profile")
        if opt.header_filter:
            args.append(f"--header-filter={opt.header_filter}")
        if opt.line_filter:
            args.append(f"--line-filter={opt.line_filter}")
        args.append(path)
        return args

    def check_file(self, path: str, context: CheckContext) -> PerFileResult:
        completed = context.run(self.build_command(path))
        if is_timed_out(completed):
            return timed_out_result(path, completed, context.timeout)
        stdout = completed.stdout or ""
        stderr = completed.stderr or ""
        diagnostics = parse_clang_tidy_stdout(stdout)
        return PerFileResult(
            file=path,
            outcome=classify(completed.returncode, has_findings=bool(diagnostics)),
            exit_code=completed.returncode,
            stdout=stdout,
            stderr=stderr,
            diagnostics=tuple(diagnostics),
            statistic=parse_clang_tidy_stderr(stderr),
        )

    def reporter(self, result: ToolRunResult, changeset: Changeset) -> ClangTidyReporter:
        return ClangTidyReporter(option=self.option, result=result, changeset=changeset)


@dataclass(slots=True)
class ClangTidyFamily:
    """Factory producing :class:`ClangTidyTool` handles."""

    name: str = CLANG_TIDY
    runner: CommandRunner = run_command
    lookup: Which = which
    capabilities: CapabilityTable = field(default_factory=lambda: DEFAULT_CAPABILITIES)

    def create_option(self, config: Config) -> ClangTidyOption:
        settings = config.clang_tidy
        binary = resolve_binary(CLANG_TIDY, version=settings.version, binary=settings.binary, lookup=self.lookup)
        version = resolve_version(binary, requested=settings.version, runner=self.runner)
        LOGGER.debug("Resolved %s %s at %s", CLANG_TIDY, version, binary)
        return ClangTidyOption(
            enabled=settings.enabled,
            fail_fast=settings.fail_fast,
            binary=binary,
            version=version,
            file_iregex=settings.file_iregex,
            database=settings.database,
            checks=settings.checks,
            config=settings.config,
            config_file=settings.config_file,
            header_filter=settings.header_filter,
            line_filter=settings.line_filter,
            allow_no_checks=settings.allow_no_checks,
            enable_check_profile=settings.enable_check_profile,
        )

    def create_instance(self, option: ToolOption, platform: PlatformInfo) -> ClangTidyTool:
        if not isinstance(option, ClangTidyOption):
            raise ConfigurationError(f"{CLANG_TIDY} received an option of type {type(option).__name__}")
        self.capabilities.ensure_supported(CLANG_TIDY, option.version, platform)
        return ClangTidyTool(option=option)


__all__ = ["CLANG_TIDY", "ClangTidyFamily", "ClangTidyOption", "ClangTidyTool"]
