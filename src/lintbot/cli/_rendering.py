# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console rendering for the ``check`` command."""

from __future__ import annotations

from collections.abc import Sequence

from rich import box
from rich.table import Table
from rich.text import Text

from ..console import get_console_manager
from ..models import BriefResult


def build_brief_table(briefs: Sequence[BriefResult], *, use_color: bool) -> Table:
    """Return a rich table with one row per tool."""

    table = Table(box=box.SIMPLE, pad_edge=False, expand=False)
    table.add_column("Tool", justify="left", no_wrap=True)
    table.add_column("Passed", justify="right")
    table.add_column("Failed", justify="right")
    table.add_column("Ignored", justify="right")
    for brief in briefs:
        style = ("green" if brief.passed else "red") if use_color else None
        table.add_row(
            Text(brief.tool, style=style) if style else Text(brief.tool),
            str(brief.passed_count),
            str(brief.failed_count),
            str(brief.ignored_count),
        )
    return table


def print_brief_table(briefs: Sequence[BriefResult], *, use_color: bool, use_emoji: bool) -> None:
    """Print the summary table to the shared console."""

    console = get_console_manager().get(color=use_color, emoji=use_emoji)
    console.print(build_brief_table(briefs, use_color=use_color))


__all__ = ["build_brief_table", "print_brief_table"]
