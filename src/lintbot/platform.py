# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Operating system and architecture detection."""

from __future__ import annotations

import platform as _platform
import sys
from enum import Enum
from typing import Final, NamedTuple


class OperatingSystem(str, Enum):
    """Operating systems recognised by the capability table."""

    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"


class Architecture(str, Enum):
    """CPU architectures recognised by the capability table."""

    X86_64 = "x86_64"
    ARM64 = "arm64"


class PlatformInfo(NamedTuple):
    """Pair describing the host a tool would run on."""

    os: OperatingSystem
    arch: Architecture

    def describe(self) -> str:
        """Return a ``os/arch`` label for messages."""

        return f"{self.os.value}/{self.arch.value}"


_MACHINE_ALIASES: Final[dict[str, Architecture]] = {
    "x86_64": Architecture.X86_64,
    "amd64": Architecture.X86_64,
    "arm64": Architecture.ARM64,
    "aarch64": Architecture.ARM64,
}


def _detect_os(system_platform: str) -> OperatingSystem:
    if system_platform.startswith("win"):
        return OperatingSystem.WINDOWS
    if system_platform == "darwin":
        return OperatingSystem.MACOS
    return OperatingSystem.LINUX


def detect_platform(
    *,
    system_platform: str | None = None,
    machine: str | None = None,
) -> PlatformInfo:
    """Return the :class:`PlatformInfo` describing the current host.

    Args:
        system_platform: Override for :data:`sys.platform` (used by tests).
        machine: Override for :func:`platform.machine`.

    Returns:
        PlatformInfo: Detected operating system and architecture. Unknown
        machines fall back to x86_64.
    """

    os_kind = _detect_os(system_platform if system_platform is not None else sys.platform)
    raw_machine = (machine if machine is not None else _platform.machine()).lower()
    arch = _MACHINE_ALIASES.get(raw_machine, Architecture.X86_64)
    return PlatformInfo(os=os_kind, arch=arch)


__all__ = ["Architecture", "OperatingSystem", "PlatformInfo", "detect_platform"]
