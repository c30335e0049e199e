# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for configuration loading."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from lintbot.config import DEFAULT_TIMEOUT_SECONDS, Config, config_from_mapping, load_config
from lintbot.errors import ConfigurationError


def test_defaults_when_no_file(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config == Config()
    assert config.clang_tidy.database == "build"
    assert config.runner.jobs == 1
    assert config.runner.timeout_seconds == DEFAULT_TIMEOUT_SECONDS
    assert config.reporting.output_dir == Path(".lintbot")


def test_lintbot_toml_uses_dashed_sections(tmp_path: Path) -> None:
    (tmp_path / "lintbot.toml").write_text(
        textwrap.dedent(
            """
            [clang-tidy]
            version = "18"
            checks = "-*,bugprone-*"
            fail_fast = true

            [clang-format]
            enabled = false

            [runner]
            jobs = 4
            timeout_seconds = 0
            """,
        ),
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.clang_tidy.version == "18"
    assert config.clang_tidy.checks == "-*,bugprone-*"
    assert config.clang_tidy.fail_fast is True
    assert config.clang_format.enabled is False
    assert config.runner.jobs == 4
    assert config.runner.timeout_seconds is None


def test_pyproject_tool_table(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        textwrap.dedent(
            """
            [project]
            name = "demo"

            [tool.lintbot.clang-format]
            style = "file"
            binary = ""
            """,
        ),
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.clang_format.style == "file"
    assert config.clang_format.binary is None


def test_lintbot_toml_wins_over_pyproject(tmp_path: Path) -> None:
    (tmp_path / "lintbot.toml").write_text("[runner]\njobs = 2\n", encoding="utf-8")
    (tmp_path / "pyproject.toml").write_text("[tool.lintbot.runner]\njobs = 8\n", encoding="utf-8")

    assert load_config(tmp_path).runner.jobs == 2


def test_explicit_config_path(tmp_path: Path) -> None:
    custom = tmp_path / "ci" / "pyproject.toml"
    custom.parent.mkdir()
    custom.write_text("[tool.lintbot.clang-tidy]\ndatabase = \"out\"\n", encoding="utf-8")

    assert load_config(tmp_path, config_path=custom).clang_tidy.database == "out"
    with pytest.raises(ConfigurationError, match="does not exist"):
        load_config(tmp_path, config_path=tmp_path / "missing.toml")


def test_invalid_configuration_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        config_from_mapping({"clang-tidy": {"unknown_knob": True}})
    with pytest.raises(ConfigurationError):
        config_from_mapping({"clang-format": {"file_iregex": "(unclosed"}})
    with pytest.raises(ConfigurationError):
        config_from_mapping({"runner": {"jobs": 0}})

    (tmp_path / "lintbot.toml").write_text("[runner\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Unable to read"):
        load_config(tmp_path)


def test_tool_settings_lookup() -> None:
    config = Config()

    assert config.tool_settings("clang-tidy") is config.clang_tidy
    assert config.tool_settings("clang-format") is config.clang_format
    with pytest.raises(ConfigurationError):
        config.tool_settings("cppcheck")
