# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate analyzer binaries and read their versions."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path
from typing import Final

from packaging.version import InvalidVersion, Version

from ..errors import ConfigurationError
from ..process_utils import CommandRunner, run_command, which

LOGGER = logging.getLogger(__name__)

VERSION_PATTERN: Final[re.Pattern[str]] = re.compile(r"version (\d+\.\d+\.\d+)")
VERSION_PROBE_TIMEOUT: Final[float] = 30.0

Which = Callable[[str], str | None]


def resolve_binary(
    tool: str,
    *,
    version: str | None = None,
    binary: str | None = None,
    lookup: Which = which,
) -> Path:
    """Return the executable to run for ``tool``.

    Args:
        tool: Family name used as the executable stem, e.g. ``clang-tidy``.
        version: Requested version; selects ``<tool>-<version>`` on ``PATH``.
        binary: Explicit executable, either an absolute path or a name found on
            ``PATH``.
        lookup: ``PATH`` search function.

    Returns:
        Path: Absolute path of the executable.

    Raises:
        ConfigurationError: If both ``version`` and ``binary`` are set, or if
            the executable cannot be found.
    """

    if version and binary:
        raise ConfigurationError(
            f"{tool}: specify either a version ({version}) or a binary ({binary}), not both",
        )
    if binary:
        candidate = Path(binary).expanduser()
        if candidate.is_absolute():
            if candidate.is_file():
                return candidate
            raise ConfigurationError(f"{tool}: binary {binary} does not exist")
        found = lookup(binary)
        if found is None:
            raise ConfigurationError(f"{tool}: binary {binary} was not found on PATH")
        return Path(found)

    executable = f"{tool}-{version}" if version else tool
    found = lookup(executable)
    if found is None:
        raise ConfigurationError(f"{tool}: could not find {executable} on PATH")
    return Path(found)


def normalize_version(raw: str | None) -> str | None:
    """Return ``raw`` when it is a valid version string, otherwise ``None``."""

    if not raw:
        return None
    try:
        Version(raw)
    except InvalidVersion:
        return None
    return raw


def detect_version(binary: Path, *, runner: CommandRunner = run_command) -> str | None:
    """Read the version printed by ``<binary> --version``.

    Returns:
        str | None: ``major.minor.patch`` or ``None`` when the probe fails.
    """

    try:
        completed = runner([str(binary), "--version"], timeout=VERSION_PROBE_TIMEOUT)
    except (OSError, ValueError) as exc:
        LOGGER.debug("Version probe for %s failed: %s", binary, exc)
        return None
    match = VERSION_PATTERN.search(f"{completed.stdout or ''}\n{completed.stderr or ''}")
    if match is None:
        return None
    return normalize_version(match.group(1))


def resolve_version(
    binary: Path,
    *,
    requested: str | None,
    runner: CommandRunner = run_command,
) -> str:
    """Return the detected version of ``binary`` falling back to ``requested``.

    Raises:
        ConfigurationError: If the version cannot be detected and none was
            requested.
    """

    detected = detect_version(binary, runner=runner)
    if detected is not None:
        return detected
    if requested:
        LOGGER.debug("Using requested version %s for %s", requested, binary)
        return requested
    raise ConfigurationError(f"Unable to determine the version of {binary}")


__all__ = [
    "VERSION_PATTERN",
    "detect_version",
    "normalize_version",
    "resolve_binary",
    "resolve_version",
]
