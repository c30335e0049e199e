# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Analyzer families, binary resolution and the tool registry."""

from __future__ import annotations

from .base import CheckContext, ToolFamily, ToolHandle, ToolOption
from .capabilities import DEFAULT_CAPABILITIES, CapabilityRow, CapabilityTable
from .clang_format import ClangFormatFamily, ClangFormatOption, ClangFormatTool
from .clang_tidy import ClangTidyFamily, ClangTidyOption, ClangTidyTool
from .registry import DEFAULT_REGISTRY, ToolRegistry, default_registry, register_family
from .resolution import detect_version, resolve_binary

__all__ = [
    "DEFAULT_CAPABILITIES",
    "DEFAULT_REGISTRY",
    "CapabilityRow",
    "CapabilityTable",
    "CheckContext",
    "ClangFormatFamily",
    "ClangFormatOption",
    "ClangFormatTool",
    "ClangTidyFamily",
    "ClangTidyOption",
    "ClangTidyTool",
    "ToolFamily",
    "ToolHandle",
    "ToolOption",
    "ToolRegistry",
    "default_registry",
    "detect_version",
    "register_family",
    "resolve_binary",
]
