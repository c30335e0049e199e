# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reporters and report publishers."""

from __future__ import annotations

from .base import ToolReporter, machine_key
from .clang_format import ClangFormatReporter
from .clang_tidy import ClangTidyReporter
from .publishers import FilePublisher, ReportPublisher
from .summary import (
    brief_table,
    collect_review_comments,
    compose_issue_comment,
    compose_step_summary,
    machine_output,
    machine_output_lines,
    review_payload,
)

__all__ = [
    "ClangFormatReporter",
    "ClangTidyReporter",
    "FilePublisher",
    "ReportPublisher",
    "ToolReporter",
    "brief_table",
    "collect_review_comments",
    "compose_issue_comment",
    "compose_step_summary",
    "machine_key",
    "machine_output",
    "machine_output_lines",
    "review_payload",
]
