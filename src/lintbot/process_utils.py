# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import logging
import shutil

# Bandit: subprocess usage is intentional; we provide a controlled wrapper around
# external tool execution, normalising arguments and disabling ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Final, Protocol

LOGGER = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE: Final[int] = 124


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class TimedOutProcess(subprocess.CompletedProcess[str]):
    """Completed process placeholder returned when a command hits its timeout."""


class CommandRunner(Protocol):
    """Callable signature used to execute analyzer commands."""

    def __call__(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """Run ``args`` and return the completed process with captured output."""
        ...


def which(executable: str) -> str | None:
    """Return the absolute path of ``executable`` on ``PATH`` or ``None``."""

    return shutil.which(executable)


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def _ensure_text(value: str | bytes | None) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return value.decode("utf-8", errors="replace")


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    check: bool = False,
    timeout: float | None = None,
) -> subprocess.CompletedProcess[str]:
    """Execute *args* after normalising the executable path.

    Output is always captured as UTF-8 text, with undecodable bytes replaced,
    and stdin is discarded. When ``timeout`` expires the child is killed and a
    :class:`TimedOutProcess` carrying :data:`TIMEOUT_EXIT_CODE` and any partial
    output is returned instead of raising.

    Args:
        args: Command arguments where the first item is the executable.
        cwd: Working directory for the child process.
        env: Optional complete environment for the child process.
        check: Raise :class:`SubprocessExecutionError` on non-zero exit.
        timeout: Optional timeout in seconds.

    Returns:
        subprocess.CompletedProcess[str]: Completed process with captured output.

    Raises:
        SubprocessExecutionError: When ``check`` is true and the command fails.
        FileNotFoundError: When the executable cannot be located.
    """

    normalized = _normalize_args(args)
    LOGGER.debug("Running command: %s", " ".join(normalized))

    try:
        # Bandit: commands originate from validated tool options; we pass
        # argument lists directly without shell expansion.
        completed: subprocess.CompletedProcess[str] = subprocess.run(  # nosec B603
            normalized,
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired as exc:
        stdout = _ensure_text(exc.stdout) or ""
        stderr = _ensure_text(exc.stderr)
        timeout_msg = f"Command timed out after {timeout:.1f}s" if timeout is not None else "Command timed out"
        combined_stderr = f"{stderr}\n{timeout_msg}" if stderr else timeout_msg
        completed = TimedOutProcess(
            args=normalized,
            returncode=TIMEOUT_EXIT_CODE,
            stdout=stdout,
            stderr=combined_stderr,
        )

    if check and completed.returncode != 0:
        raise SubprocessExecutionError(
            normalized,
            completed.returncode,
            completed.stdout if isinstance(completed.stdout, str) else None,
            completed.stderr if isinstance(completed.stderr, str) else None,
        )

    return completed


__all__ = [
    "TIMEOUT_EXIT_CODE",
    "CommandRunner",
    "SubprocessExecutionError",
    "TimedOutProcess",
    "run_command",
    "which",
]
