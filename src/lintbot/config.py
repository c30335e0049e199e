# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for lintbot."""

from __future__ import annotations

import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError

DEFAULT_FILE_IREGEX: Final[str] = r".*\.(cpp|cc|c\+\+|cxx|c|cl|h|hpp|m|mm|inc)"
CONFIG_FILENAME: Final[str] = "lintbot.toml"
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
DEFAULT_TIMEOUT_SECONDS: Final[float] = 300.0


def _validate_pattern(value: str) -> str:
    try:
        re.compile(value)
    except re.error as exc:
        raise ValueError(f"invalid file_iregex '{value}': {exc}") from exc
    return value


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ToolSettings(BaseModel):
    """Options shared by every analyzer section."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    enabled: bool = True
    fail_fast: bool = False
    version: str | None = None
    binary: str | None = None
    file_iregex: str = DEFAULT_FILE_IREGEX

    @field_validator("version", "binary", mode="before")
    @classmethod
    def _empty_is_unset(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("file_iregex")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        return _validate_pattern(value)


class ClangTidySettings(ToolSettings):
    """clang-tidy specific knobs."""

    database: str = "build"
    checks: str | None = None
    config: str | None = None
    config_file: str | None = None
    header_filter: str | None = None
    line_filter: str | None = None
    allow_no_checks: bool = False
    enable_check_profile: bool = False


class ClangFormatSettings(ToolSettings):
    """clang-format specific knobs."""

    style: str | None = None
    warnings_as_errors: bool = False


class RunnerSettings(BaseModel):
    """Execution behaviour of the analysis runner."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    jobs: int = Field(default=1, ge=1)
    timeout_seconds: float | None = Field(default=DEFAULT_TIMEOUT_SECONDS)

    @field_validator("timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            return None
        return value


class ReportingSettings(BaseModel):
    """Report surfaces to produce once analysis completes."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    step_summary: bool = True
    action_output: bool = True
    issue_comment: bool = True
    pull_request_review: bool = True
    output_dir: Path = Path(".lintbot")


class Config(BaseModel):
    """Top-level lintbot configuration."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid", populate_by_name=True)

    clang_tidy: ClangTidySettings = Field(default_factory=ClangTidySettings, alias="clang-tidy")
    clang_format: ClangFormatSettings = Field(default_factory=ClangFormatSettings, alias="clang-format")
    runner: RunnerSettings = Field(default_factory=RunnerSettings)
    reporting: ReportingSettings = Field(default_factory=ReportingSettings)

    def tool_settings(self, name: str) -> ToolSettings:
        """Return the settings section for the tool family ``name``."""

        sections: dict[str, ToolSettings] = {
            "clang-tidy": self.clang_tidy,
            "clang-format": self.clang_format,
        }
        try:
            return sections[name]
        except KeyError as exc:
            raise ConfigurationError(f"No configuration section for tool '{name}'") from exc


def config_from_mapping(data: Mapping[str, Any]) -> Config:
    """Validate a raw mapping into :class:`Config`.

    Raises:
        ConfigurationError: If the mapping fails validation.
    """

    try:
        return Config.model_validate(dict(data))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid lintbot configuration: {exc}") from exc


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Unable to read configuration file {path}: {exc}") from exc


def load_config(root: Path, *, config_path: Path | None = None) -> Config:
    """Load configuration for the repository rooted at ``root``.

    Lookup order: an explicit ``config_path``, then ``lintbot.toml`` in
    ``root``, then the ``[tool.lintbot]`` table of ``pyproject.toml``. Defaults
    apply when none of them exist.

    Args:
        root: Repository root.
        config_path: Explicit configuration file supplied on the command line.

    Returns:
        Config: Validated configuration.

    Raises:
        ConfigurationError: If a configuration file is unreadable or invalid.
    """

    if config_path is not None:
        if not config_path.is_file():
            raise ConfigurationError(f"Configuration file {config_path} does not exist")
        data = _read_toml(config_path)
        if config_path.name == PYPROJECT_FILENAME:
            data = data.get("tool", {}).get("lintbot", {})
        return config_from_mapping(data)

    candidate = root / CONFIG_FILENAME
    if candidate.is_file():
        return config_from_mapping(_read_toml(candidate))

    pyproject = root / PYPROJECT_FILENAME
    if pyproject.is_file():
        section = _read_toml(pyproject).get("tool", {}).get("lintbot")
        if isinstance(section, Mapping):
            return config_from_mapping(section)
    return Config()


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_FILE_IREGEX",
    "DEFAULT_TIMEOUT_SECONDS",
    "ClangFormatSettings",
    "ClangTidySettings",
    "Config",
    "ReportingSettings",
    "RunnerSettings",
    "ToolSettings",
    "config_from_mapping",
    "load_config",
]
