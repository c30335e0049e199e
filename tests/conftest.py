# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from helpers.fakes import FakeRunner, make_hunk

from lintbot.changes import ChangedFile, Changeset
from lintbot.tools.clang_format import ClangFormatOption, ClangFormatTool
from lintbot.tools.clang_tidy import ClangTidyOption, ClangTidyTool


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def changeset_factory() -> Callable[..., Changeset]:
    """Build a changeset whose files each carry one hunk covering rows 1-50."""

    def _factory(*paths: str, deleted: Sequence[str] = ()) -> Changeset:
        files = [
            ChangedFile(path=path, status="deleted" if path in deleted else "modified", hunks=(make_hunk(1, 50),))
            for path in paths
        ]
        return Changeset(files=tuple(files))

    return _factory


@pytest.fixture
def tidy_tool() -> Callable[..., ClangTidyTool]:
    def _factory(**overrides: object) -> ClangTidyTool:
        data: dict[str, object] = {"binary": Path("/usr/bin/clang-tidy-18"), "version": "18.1.3"}
        data.update(overrides)
        return ClangTidyTool(option=ClangTidyOption.model_validate(data))

    return _factory


@pytest.fixture
def format_tool() -> Callable[..., ClangFormatTool]:
    def _factory(**overrides: object) -> ClangFormatTool:
        data: dict[str, object] = {"binary": Path("/usr/bin/clang-format-18"), "version": "18.1.3"}
        data.update(overrides)
        return ClangFormatTool(option=ClangFormatOption.model_validate(data))

    return _factory
