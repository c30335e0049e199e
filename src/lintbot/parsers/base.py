# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared parser infrastructure and helper utilities."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass


def split_lines(text: str) -> list[str]:
    """Split ``text`` on ``\\n`` only, dropping one trailing ``\\r`` per line.

    Unlike :meth:`str.splitlines`, form feeds and other Unicode line breaks stay
    part of the line. A final terminator does not produce an empty last line.
    """

    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def ensure_lines(value: str | Sequence[str]) -> list[str]:
    """Normalise string-based output into a list of lines.

    Carriage returns left over from ``\\r\\n`` terminated output are dropped so
    field splitting behaves identically across platforms.
    """

    if isinstance(value, str):
        return split_lines(value)
    return [str(item).rstrip("\r") for item in value]


def is_ascii_digits(value: str) -> bool:
    """Return ``True`` when ``value`` is a non-empty run of ASCII digits."""

    return bool(value) and value.isascii() and value.isdigit()


@dataclass(frozen=True, slots=True)
class LineRule:
    """Regular expression applied to every line with a callback on full matches."""

    pattern: re.Pattern[str]
    apply: Callable[[re.Match[str]], None]


def apply_line_rules(lines: Sequence[str], rules: Sequence[LineRule]) -> None:
    """Try every rule against every line.

    Rules are not mutually exclusive: each one that fully matches a line fires
    its callback, in rule order.
    """

    for line in lines:
        for rule in rules:
            match = rule.pattern.fullmatch(line)
            if match:
                rule.apply(match)


__all__ = [
    "LineRule",
    "apply_line_rules",
    "ensure_lines",
    "is_ascii_digits",
    "split_lines",
]
