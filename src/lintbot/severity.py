# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels reported by the supported analyzers."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


KNOWN_SEVERITIES: Final[frozenset[str]] = frozenset(level.value for level in Severity)

_SEVERITY_EMOJI: Final[dict[Severity, str]] = {
    Severity.ERROR: ":x:",
    Severity.WARNING: ":warning:",
    Severity.INFO: ":information_source:",
}


def is_known_severity(label: str) -> bool:
    """Return ``True`` when ``label`` names one of the accepted severities."""

    return label in KNOWN_SEVERITIES


def severity_to_markdown(severity: Severity) -> str:
    """Return the GitHub emoji shortcode used to decorate ``severity``."""

    return _SEVERITY_EMOJI.get(severity, ":grey_question:")


__all__ = [
    "KNOWN_SEVERITIES",
    "Severity",
    "is_known_severity",
    "severity_to_markdown",
]
