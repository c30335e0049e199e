# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Translate rows of a file's current content into review positions."""

from __future__ import annotations

from collections.abc import Sequence

from ..changes import ChangedFile, Hunk


def map_row_to_position(hunks: Sequence[Hunk], row: int) -> int | None:
    """Return the diff position of ``row`` or ``None`` when no hunk covers it.

    The position counts diff lines from the start of the file's diff, so every
    hunk that precedes the matching one contributes its full line count.

    Args:
        hunks: Hunks of one file in diff order.
        row: 1-based row in the file's new content.

    Returns:
        int | None: 1-based review position.
    """

    offset = 0
    for hunk in hunks:
        if hunk.contains_row(row):
            return offset + (row - hunk.new_start) + 1
        offset += hunk.line_count
    return None


def position_in_file(changed: ChangedFile | None, row: int | None) -> int | None:
    """Map ``row`` through the hunks of ``changed``, tolerating missing inputs."""

    if changed is None or row is None:
        return None
    return map_row_to_position(changed.hunks, row)


__all__ = ["map_row_to_position", "position_in_file"]
