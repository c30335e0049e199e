# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Zero-context comparison between current and formatted file content."""

from __future__ import annotations

from difflib import SequenceMatcher

from ..models import FormatChange
from ..parsers.base import split_lines


def split_content(content: bytes) -> list[str]:
    """Decode ``content`` and split it into lines without terminators."""

    return split_lines(content.decode("utf-8", errors="replace"))


def changed_regions(original: bytes, proposed: bytes) -> list[FormatChange]:
    """Return the regions that differ between ``original`` and ``proposed``.

    Each region is anchored at the first affected row of ``original``. A pure
    insertion has no affected row, so it is anchored at the row it follows
    (row 1 for an insertion at the top of the file).

    Args:
        original: Current bytes of the file.
        proposed: Bytes the formatter would write.

    Returns:
        list[FormatChange]: Regions in file order; empty when nothing changed.
    """

    before = split_content(original)
    after = split_content(proposed)
    matcher = SequenceMatcher(None, before, after, autojunk=False)
    regions: list[FormatChange] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            continue
        row = i1 + 1 if tag != "insert" else max(i1, 1)
        regions.append(
            FormatChange(row=row, original=tuple(before[i1:i2]), proposed=tuple(after[j1:j2])),
        )
    return regions


__all__ = ["changed_regions", "split_content"]
