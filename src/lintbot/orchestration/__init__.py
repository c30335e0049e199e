# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run orchestration for lintbot."""

from __future__ import annotations

from .orchestrator import EXIT_LINT_FAILURE, EXIT_SUCCESS, Orchestrator, RunReport, build_report

__all__ = ["EXIT_LINT_FAILURE", "EXIT_SUCCESS", "Orchestrator", "RunReport", "build_report"]
