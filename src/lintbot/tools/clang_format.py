# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""clang-format family: option resolution, invocation and parsing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Final

from ..changes import Changeset
from ..config import Config
from ..diff.compare import changed_regions
from ..errors import ConfigurationError
from ..models import FileOutcome, PerFileResult, ToolRunResult, classify
from ..parsers.clang_format import apply_replacements, parse_replacements_xml
from ..platform import PlatformInfo
from ..process_utils import CommandRunner, run_command, which
from ..reporting.clang_format import ClangFormatReporter
from .base import CheckContext, ToolOption, is_timed_out, timed_out_result
from .capabilities import DEFAULT_CAPABILITIES, CapabilityTable
from .resolution import Which, resolve_binary, resolve_version

LOGGER = logging.getLogger(__name__)

CLANG_FORMAT: Final[str] = "clang-format"


class ClangFormatOption(ToolOption):
    """Resolved clang-format options."""

    style: str | None = None
    warnings_as_errors: bool = False


@dataclass(frozen=True, slots=True)
class ClangFormatTool:
    """clang-format bound to a resolved binary."""

    option: ClangFormatOption
    name: str = CLANG_FORMAT

    def build_command(self, path: str) -> list[str]:
        """Return the argument vector that asks for replacements of ``path``."""

        args = [str(self.option.binary)]
        if self.option.style:
            args.append(f"--style={self.option.style}")
        if self.option.warnings_as_errors:
            args.append("--Werror")
        args.extend(["--output-replacements-xml", path])
        return args

    def check_file(self, path: str, context: CheckContext) -> PerFileResult:
        """Run clang-format over ``path`` and derive the regions it would rewrite.

        The file's current bytes are read from the repository root so that
        replacement offsets can be converted to rows and the formatted content
        can be reconstructed without a second invocation.

        A nonzero exit is recorded as a tool failure with the captured output
        before any XML is parsed.

        Raises:
            OSError: If the file cannot be read.
            ParseError: If the replacement XML is malformed.
        """

        content = (context.root / path).read_bytes()
        completed = context.run(self.build_command(path))
        if is_timed_out(completed):
            return timed_out_result(path, completed, context.timeout)
        stdout = completed.stdout or ""
        stderr = completed.stderr or ""
        if completed.returncode != 0:
            error = f"{CLANG_FORMAT} exited with status {completed.returncode}"
            cause = stderr.strip().partition("\n")[0]
            return PerFileResult(
                file=path,
                outcome=FileOutcome.TOOL_FAILURE,
                exit_code=completed.returncode,
                stdout=stdout,
                stderr=stderr,
                error=f"{error}: {cause}" if cause else error,
            )
        replacements = parse_replacements_xml(stdout, file=path, content=content)
        changes = changed_regions(content, apply_replacements(content, replacements)) if replacements else []
        return PerFileResult(
            file=path,
            outcome=classify(completed.returncode, has_findings=bool(replacements)),
            exit_code=completed.returncode,
            stdout=stdout,
            stderr=stderr,
            replacements=tuple(replacements),
            format_changes=tuple(changes),
        )

    def reporter(self, result: ToolRunResult, changeset: Changeset) -> ClangFormatReporter:
        return ClangFormatReporter(option=self.option, result=result, changeset=changeset)


@dataclass(slots=True)
class ClangFormatFamily:
    """Factory producing :class:`ClangFormatTool` handles."""

    name: str = CLANG_FORMAT
    runner: CommandRunner = run_command
    lookup: Which = which
    capabilities: CapabilityTable = field(default_factory=lambda: DEFAULT_CAPABILITIES)

    def create_option(self, config: Config) -> ClangFormatOption:
        settings = config.clang_format
        binary = resolve_binary(CLANG_FORMAT, version=settings.version, binary=settings.binary, lookup=self.lookup)
        version = resolve_version(binary, requested=settings.version, runner=self.runner)
        LOGGER.debug("Resolved %s %s at %s", CLANG_FORMAT, version, binary)
        return ClangFormatOption(
            enabled=settings.enabled,
            fail_fast=settings.fail_fast,
            binary=binary,
            version=version,
            file_iregex=settings.file_iregex,
            style=settings.style,
            warnings_as_errors=settings.warnings_as_errors,
        )

    def create_instance(self, option: ToolOption, platform: PlatformInfo) -> ClangFormatTool:
        if not isinstance(option, ClangFormatOption):
            raise ConfigurationError(f"{CLANG_FORMAT} received an option of type {type(option).__name__}")
        self.capabilities.ensure_supported(CLANG_FORMAT, option.version, platform)
        return ClangFormatTool(option=option)


__all__ = ["CLANG_FORMAT", "ClangFormatFamily", "ClangFormatOption", "ClangFormatTool"]
