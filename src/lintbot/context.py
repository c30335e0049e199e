# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Immutable snapshot of the CI environment taken at start-up."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

_PULL_REF: Final[re.Pattern[str]] = re.compile(r"^refs/pull/(\d+)/merge$")


def _optional(environ: Mapping[str, str], key: str) -> str | None:
    value = environ.get(key, "").strip()
    return value or None


def _optional_path(environ: Mapping[str, str], key: str) -> Path | None:
    value = _optional(environ, key)
    return Path(value) if value else None


def parse_pull_request_number(ref: str | None) -> int | None:
    """Return the pull request number encoded in ``refs/pull/<n>/merge``."""

    if not ref:
        return None
    match = _PULL_REF.match(ref)
    return int(match.group(1)) if match else None


class RuntimeContext(BaseModel):
    """Values read once from the environment and passed through the run.

    The token is excluded from ``repr`` so it never reaches logs.
    """

    model_config = ConfigDict(frozen=True)

    repository: str | None = None
    token: str | None = Field(default=None, repr=False)
    event_name: str | None = None
    base_ref: str | None = None
    head_ref: str | None = None
    ref: str | None = None
    sha: str | None = None
    workspace: Path | None = None
    step_summary_path: Path | None = None
    output_path: Path | None = None
    pr_number: int | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> RuntimeContext:
        """Snapshot the ``GITHUB_*`` variables from ``environ`` (``os.environ`` by default)."""

        env = os.environ if environ is None else environ
        ref = _optional(env, "GITHUB_REF")
        return cls(
            repository=_optional(env, "GITHUB_REPOSITORY"),
            token=_optional(env, "GITHUB_TOKEN"),
            event_name=_optional(env, "GITHUB_EVENT_NAME"),
            base_ref=_optional(env, "GITHUB_BASE_REF"),
            head_ref=_optional(env, "GITHUB_HEAD_REF"),
            ref=ref,
            sha=_optional(env, "GITHUB_SHA"),
            workspace=_optional_path(env, "GITHUB_WORKSPACE"),
            step_summary_path=_optional_path(env, "GITHUB_STEP_SUMMARY"),
            output_path=_optional_path(env, "GITHUB_OUTPUT"),
            pr_number=parse_pull_request_number(ref),
        )

    @property
    def is_pull_request(self) -> bool:
        """Return ``True`` when the run was triggered for a pull request."""

        return self.pr_number is not None or (self.event_name or "").startswith("pull_request")


__all__ = ["RuntimeContext", "parse_pull_request_number"]
