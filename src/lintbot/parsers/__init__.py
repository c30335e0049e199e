# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers that turn raw analyzer output into lintbot models."""

from __future__ import annotations

from .clang_format import apply_replacements, line_start_offsets, offset_to_position, parse_replacements_xml
from .clang_tidy import DiagnosticHeader, parse_clang_tidy_stderr, parse_clang_tidy_stdout, parse_diagnostic_header

__all__ = [
    "DiagnosticHeader",
    "apply_replacements",
    "line_start_offsets",
    "offset_to_position",
    "parse_clang_tidy_stderr",
    "parse_clang_tidy_stdout",
    "parse_diagnostic_header",
    "parse_replacements_xml",
]
