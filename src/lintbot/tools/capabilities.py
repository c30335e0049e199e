# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Version to platform capability lookup for analyzer families."""

from __future__ import annotations

from collections.abc import Iterable
from itertools import product
from typing import Final, NamedTuple

from packaging.version import InvalidVersion, Version

from ..errors import CapabilityError
from ..platform import Architecture, OperatingSystem, PlatformInfo

ALL_PLATFORMS: Final[frozenset[PlatformInfo]] = frozenset(
    PlatformInfo(os_kind, arch) for os_kind, arch in product(OperatingSystem, Architecture)
)
LINUX_ONLY: Final[frozenset[PlatformInfo]] = frozenset(
    PlatformInfo(OperatingSystem.LINUX, arch) for arch in Architecture
)


class CapabilityRow(NamedTuple):
    """Supported platforms for one family and version.

    ``version`` is ``None`` for the generic row that applies whenever no
    specific row matches.
    """

    family: str
    version: str | None
    platforms: frozenset[PlatformInfo]


def _same_version(left: str, right: str) -> bool:
    try:
        return Version(left) == Version(right)
    except InvalidVersion:
        return left == right


class CapabilityTable:
    """Lookup of supported platforms keyed by family and version."""

    def __init__(self, rows: Iterable[CapabilityRow] = ()) -> None:
        self._rows: list[CapabilityRow] = list(rows)

    def add(self, row: CapabilityRow) -> None:
        """Append ``row``; later specific rows do not shadow earlier ones."""

        self._rows.append(row)

    def row_for(self, family: str, version: str) -> CapabilityRow | None:
        """Return the specific row for ``version`` or the family's generic row."""

        generic: CapabilityRow | None = None
        for row in self._rows:
            if row.family != family:
                continue
            if row.version is None:
                generic = generic or row
            elif _same_version(row.version, version):
                return row
        return generic

    def supports(self, family: str, version: str, platform: PlatformInfo) -> bool:
        """Return ``True`` when ``family`` at ``version`` runs on ``platform``."""

        row = self.row_for(family, version)
        return row is not None and platform in row.platforms

    def ensure_supported(self, family: str, version: str, platform: PlatformInfo) -> None:
        """Raise :class:`CapabilityError` unless the combination is supported."""

        row = self.row_for(family, version)
        if row is None:
            raise CapabilityError(f"{family} {version} has no capability entry")
        if platform not in row.platforms:
            raise CapabilityError(f"{family} {version} is not supported on {platform.describe()}")


def default_capabilities() -> CapabilityTable:
    """Return the built-in capability table for the clang tool families."""

    table = CapabilityTable()
    for family in ("clang-format", "clang-tidy"):
        for pinned in ("18.1.0", "18.1.3"):
            table.add(CapabilityRow(family, pinned, LINUX_ONLY))
        table.add(CapabilityRow(family, None, ALL_PLATFORMS))
    return table


DEFAULT_CAPABILITIES: Final[CapabilityTable] = default_capabilities()


__all__ = [
    "ALL_PLATFORMS",
    "DEFAULT_CAPABILITIES",
    "LINUX_ONLY",
    "CapabilityRow",
    "CapabilityTable",
    "default_capabilities",
]
