# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy for fatal lintbot failures.

Only conditions that must abort the whole run are modelled as exceptions
deriving from :class:`LintBotError`. Problems that concern a single analysed
file are recorded on the per-file result instead (see
:class:`lintbot.models.FileOutcome`); :class:`ParseError` exists so parsers can
signal malformed tool output, and the analysis runner converts it into a
failed file result at the file boundary.
"""

from __future__ import annotations


class LintBotError(Exception):
    """Base class for errors that terminate the lintbot process."""

    exit_code: int = 2


class ConfigurationError(LintBotError):
    """Raised when configuration input is invalid or ambiguous."""


class CapabilityError(LintBotError):
    """Raised when a resolved tool cannot run on the current platform."""


class ReportingError(LintBotError):
    """Raised when a report surface cannot be written or published."""


class ParseError(ValueError):
    """Raised when tool output cannot be interpreted.

    The error is local to the file whose output failed to parse and never
    escapes the analysis runner.
    """

    def __init__(self, message: str, *, tool: str | None = None) -> None:
        super().__init__(message)
        self.tool = tool


__all__ = [
    "CapabilityError",
    "ConfigurationError",
    "LintBotError",
    "ParseError",
    "ReportingError",
]
