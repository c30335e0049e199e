# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for binary resolution, capabilities and the tool registry."""

from __future__ import annotations

from pathlib import Path

import pytest
from helpers.fakes import FakeRunner, completed, which_from

from lintbot.config import Config, config_from_mapping
from lintbot.errors import CapabilityError, ConfigurationError
from lintbot.platform import Architecture, OperatingSystem, PlatformInfo
from lintbot.tools.capabilities import DEFAULT_CAPABILITIES, CapabilityRow, CapabilityTable
from lintbot.tools.clang_format import ClangFormatFamily, ClangFormatOption, ClangFormatTool
from lintbot.tools.clang_tidy import ClangTidyFamily, ClangTidyOption, ClangTidyTool
from lintbot.tools.registry import DEFAULT_REGISTRY, ToolRegistry, register_family
from lintbot.tools.resolution import detect_version, resolve_binary, resolve_version

LINUX = PlatformInfo(OperatingSystem.LINUX, Architecture.X86_64)
MACOS = PlatformInfo(OperatingSystem.MACOS, Architecture.ARM64)
WINDOWS = PlatformInfo(OperatingSystem.WINDOWS, Architecture.X86_64)

VERSION_OUTPUT = "Ubuntu LLVM version 18.1.3\n  Optimized build.\n"


def test_version_and_binary_together_are_rejected() -> None:
    with pytest.raises(ConfigurationError, match="not both"):
        resolve_binary("clang-tidy", version="18", binary="/usr/bin/clang-tidy")


def test_version_selects_suffixed_executable() -> None:
    lookup = which_from({"clang-tidy-18": "/usr/bin/clang-tidy-18"})

    assert resolve_binary("clang-tidy", version="18", lookup=lookup) == Path("/usr/bin/clang-tidy-18")


def test_default_executable_lookup() -> None:
    lookup = which_from({"clang-format": "/usr/local/bin/clang-format"})

    assert resolve_binary("clang-format", lookup=lookup) == Path("/usr/local/bin/clang-format")
    with pytest.raises(ConfigurationError, match="could not find clang-tidy"):
        resolve_binary("clang-tidy", lookup=lookup)


def test_explicit_binary(tmp_path: Path) -> None:
    binary = tmp_path / "clang-tidy"
    binary.write_text("#!/bin/sh\n", encoding="utf-8")

    assert resolve_binary("clang-tidy", binary=str(binary), lookup=which_from({})) == binary
    with pytest.raises(ConfigurationError, match="does not exist"):
        resolve_binary("clang-tidy", binary=str(tmp_path / "missing"), lookup=which_from({}))
    with pytest.raises(ConfigurationError, match="not found on PATH"):
        resolve_binary("clang-tidy", binary="my-tidy", lookup=which_from({}))


def test_detect_version() -> None:
    runner = FakeRunner({"--version": completed(stdout=VERSION_OUTPUT)})

    assert detect_version(Path("/usr/bin/clang-tidy"), runner=runner) == "18.1.3"
    assert runner.calls[0][0] == ["/usr/bin/clang-tidy", "--version"]


def test_resolve_version_falls_back_to_request() -> None:
    runner = FakeRunner({"--version": completed(stdout="no version here")})

    assert resolve_version(Path("/bin/x"), requested="17", runner=runner) == "17"


def test_undetectable_version_without_request_is_fatal() -> None:
    runner = FakeRunner({"--version": completed(stdout="no version here")})
    family = ClangTidyFamily(runner=runner, lookup=which_from({"clang-tidy": "/usr/bin/clang-tidy"}))

    with pytest.raises(ConfigurationError, match="Unable to determine the version of /bin/x"):
        resolve_version(Path("/bin/x"), requested=None, runner=runner)
    with pytest.raises(ConfigurationError, match="Unable to determine the version"):
        family.create_option(Config())


def test_capability_table_pins_llvm_18_to_linux() -> None:
    assert DEFAULT_CAPABILITIES.supports("clang-tidy", "18.1.3", LINUX)
    assert not DEFAULT_CAPABILITIES.supports("clang-tidy", "18.1.3", MACOS)
    assert not DEFAULT_CAPABILITIES.supports("clang-format", "18.1.0", WINDOWS)
    assert DEFAULT_CAPABILITIES.supports("clang-format", "17.0.6", WINDOWS)


def test_capability_table_without_generic_row() -> None:
    table = CapabilityTable([CapabilityRow("clang-tidy", "16.0.0", frozenset({LINUX}))])

    with pytest.raises(CapabilityError, match="no capability entry"):
        table.ensure_supported("clang-tidy", "17.0.0", LINUX)
    with pytest.raises(CapabilityError, match="not supported on macos/arm64"):
        table.ensure_supported("clang-tidy", "16.0.0", MACOS)


def test_family_creates_option_from_config() -> None:
    runner = FakeRunner({"--version": completed(stdout=VERSION_OUTPUT)})
    family = ClangTidyFamily(runner=runner, lookup=which_from({"clang-tidy-18": "/usr/bin/clang-tidy-18"}))
    config = config_from_mapping({"clang-tidy": {"version": "18", "checks": "-*,bugprone-*", "fail_fast": True}})

    option = family.create_option(config)

    assert isinstance(option, ClangTidyOption)
    assert option.binary == Path("/usr/bin/clang-tidy-18")
    assert option.version == "18.1.3"
    assert option.checks == "-*,bugprone-*"
    assert option.fail_fast is True


def test_family_rejects_unsupported_platform() -> None:
    family = ClangFormatFamily(
        runner=FakeRunner({"--version": completed(stdout=VERSION_OUTPUT)}),
        lookup=which_from({"clang-format": "/usr/bin/clang-format"}),
    )
    option = family.create_option(Config())

    assert isinstance(family.create_instance(option, LINUX), ClangFormatTool)
    with pytest.raises(CapabilityError):
        family.create_instance(option, MACOS)


def test_family_rejects_foreign_option() -> None:
    option = ClangFormatOption(binary=Path("/usr/bin/clang-format"), version="17.0.0")

    with pytest.raises(ConfigurationError):
        ClangTidyFamily().create_instance(option, LINUX)


def test_clang_tidy_command_line() -> None:
    option = ClangTidyOption(
        binary=Path("/usr/bin/clang-tidy"),
        version="18.1.3",
        database="out",
        checks="-*,misc-*",
        allow_no_checks=True,
        config="{Checks: '*'}",
        config_file=".clang-tidy",
        enable_check_profile=True,
        header_filter=".*",
        line_filter="[]",
    )

    assert ClangTidyTool(option=option).build_command("src/a.cpp") == [
        "/usr/bin/clang-tidy",
        "-p=out",
        "-checks=-*,misc-*",
        "--allow-no-checks",
        "--config={Checks: '*'}",
        "--config-file=.clang-tidy",
        "--enable-check-profile",
        "--header-filter=.*",
        "--line-filter=[]",
        "src/a.cpp",
    ]


def test_clang_format_command_line() -> None:
    option = ClangFormatOption(
        binary=Path("/usr/bin/clang-format"),
        version="18.1.3",
        style="file",
        warnings_as_errors=True,
    )

    assert ClangFormatTool(option=option).build_command("a.cpp") == [
        "/usr/bin/clang-format",
        "--style=file",
        "--Werror",
        "--output-replacements-xml",
        "a.cpp",
    ]


def test_file_regex_matches_case_insensitively() -> None:
    option = ClangTidyOption(binary=Path("/usr/bin/clang-tidy"), version="18.1.3")

    assert option.matches("src/Main.CPP")
    assert option.matches("include/x.hpp")
    assert not option.matches("README.md")
    assert not option.matches("src/a.cpp.orig")


def test_registry_is_ordered_mapping() -> None:
    assert list(DEFAULT_REGISTRY) == ["clang-format", "clang-tidy"]

    registry = ToolRegistry()
    register_family(ClangTidyFamily(), registry)

    assert list(registry) == ["clang-tidy"]
    assert registry.try_get("clang-format") is None
    with pytest.raises(ValueError, match="already registered"):
        register_family(ClangTidyFamily(), registry)
