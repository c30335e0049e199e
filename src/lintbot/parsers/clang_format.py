# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser for clang-format ``--output-replacements-xml`` output."""

from __future__ import annotations

import logging
from bisect import bisect_right
from collections.abc import Sequence
from typing import Final
from xml.etree import ElementTree

from ..errors import ParseError
from ..models import Replacement

LOGGER = logging.getLogger(__name__)

TOOL_NAME: Final[str] = "clang-format"
ROOT_TAG: Final[str] = "replacements"
REPLACEMENT_TAG: Final[str] = "replacement"


def line_start_offsets(content: bytes) -> list[int]:
    """Return the byte offset at which every line of ``content`` starts.

    Each line is counted with its ``\\n`` terminator, so the table is the
    running sum of ``len(line) + 1``.
    """

    starts = [0]
    for line in content.split(b"\n")[:-1]:
        starts.append(starts[-1] + len(line) + 1)
    return starts


def offset_to_position(starts: Sequence[int], offset: int, size: int) -> tuple[int, int] | None:
    """Convert a byte ``offset`` into a 1-based ``(row, col)`` pair.

    Args:
        starts: Line start table produced by :func:`line_start_offsets`.
        offset: Byte offset reported by the formatter.
        size: Total byte size of the content the table was built from.

    Returns:
        tuple[int, int] | None: Position of the offset, or ``None`` when it
        does not address a byte of the content.
    """

    if offset < 0 or offset >= size:
        return None
    row = bisect_right(starts, offset)
    return row, offset - starts[row - 1] + 1


def _int_attribute(element: ElementTree.Element, name: str) -> int:
    raw = element.get(name)
    if raw is None:
        raise ParseError(f"replacement is missing the '{name}' attribute", tool=TOOL_NAME)
    try:
        value = int(raw)
    except ValueError as exc:
        raise ParseError(f"replacement {name} '{raw}' is not an integer", tool=TOOL_NAME) from exc
    if value < 0:
        raise ParseError(f"replacement {name} {value} is negative", tool=TOOL_NAME)
    return value


def parse_replacements_xml(stdout: str, *, file: str, content: bytes | None = None) -> list[Replacement]:
    """Parse the replacement XML emitted by clang-format.

    Args:
        stdout: Raw XML document printed by clang-format.
        file: Path of the formatted file, stored on every replacement.
        content: Current bytes of the file. When provided, each replacement
            receives the 1-based row and column of its offset.

    Returns:
        list[Replacement]: Replacements in document order; empty when the
        formatter proposes no change.

    Raises:
        ParseError: If the document is malformed or the root element is not
            ``<replacements>``.
    """

    try:
        root = ElementTree.fromstring(stdout.encode("utf-8"))
    except ElementTree.ParseError as exc:
        raise ParseError(f"malformed replacement XML for {file}: {exc}", tool=TOOL_NAME) from exc
    if root.tag != ROOT_TAG:
        raise ParseError(f"expected <{ROOT_TAG}> root for {file}, found <{root.tag}>", tool=TOOL_NAME)

    starts: list[int] | None = None
    size = 0
    if content is not None:
        starts = line_start_offsets(content)
        size = len(content)

    replacements: list[Replacement] = []
    for element in root.iter(REPLACEMENT_TAG):
        offset = _int_attribute(element, "offset")
        length = _int_attribute(element, "length")
        position = offset_to_position(starts, offset, size) if starts is not None else None
        replacements.append(
            Replacement(
                file=file,
                offset=offset,
                length=length,
                text=element.text or "",
                row=position[0] if position else None,
                col=position[1] if position else None,
            ),
        )
    LOGGER.debug("Parsed %d clang-format replacements for %s", len(replacements), file)
    return replacements


def apply_replacements(content: bytes, replacements: Sequence[Replacement]) -> bytes:
    """Return ``content`` with every replacement applied.

    Replacements are applied from the highest offset down so earlier offsets
    remain valid while the buffer changes.

    Raises:
        ParseError: If a replacement reaches past the end of ``content``.
    """

    result = bytearray(content)
    for replacement in sorted(replacements, key=lambda item: item.offset, reverse=True):
        end = replacement.offset + replacement.length
        if end > len(content):
            raise ParseError(
                f"replacement at offset {replacement.offset} exceeds {replacement.file}",
                tool=TOOL_NAME,
            )
        result[replacement.offset : end] = replacement.text.encode("utf-8")
    return bytes(result)


__all__ = [
    "apply_replacements",
    "line_start_offsets",
    "offset_to_position",
    "parse_replacements_xml",
]
