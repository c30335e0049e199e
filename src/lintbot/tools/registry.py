# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tool registry providing discovery of analyzer families by name."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from .base import ToolFamily
from .clang_format import ClangFormatFamily
from .clang_tidy import ClangTidyFamily


class ToolRegistry(Mapping[str, ToolFamily]):
    """Central registry for analyzer families.

    ``ToolRegistry`` behaves like a read-only mapping whose keys are family
    names and whose values are :class:`ToolFamily` instances. Iteration
    follows registration order, which is also the order tools run and are
    reported in.
    """

    def __init__(self, families: Iterable[ToolFamily] = ()) -> None:
        self._families: dict[str, ToolFamily] = {}
        for family in families:
            self.register(family)

    def register(self, family: ToolFamily) -> None:
        """Register ``family`` enforcing uniqueness by name.

        Raises:
            ValueError: If a family with the same name is already registered.
        """

        if family.name in self._families:
            raise ValueError(f"Tool '{family.name}' already registered")
        self._families[family.name] = family

    def try_get(self, name: str) -> ToolFamily | None:
        """Return the family named ``name`` when registered, otherwise ``None``."""

        return self._families.get(name)

    def families(self) -> tuple[ToolFamily, ...]:
        """Return registered families in execution order."""

        return tuple(self._families.values())

    def __len__(self) -> int:
        return len(self._families)

    def __iter__(self) -> Iterator[str]:
        return iter(self._families)

    def __getitem__(self, name: str) -> ToolFamily:
        return self._families[name]


def default_registry() -> ToolRegistry:
    """Return a registry holding the built-in clang families."""

    return ToolRegistry((ClangFormatFamily(), ClangTidyFamily()))


DEFAULT_REGISTRY = default_registry()


def register_family(family: ToolFamily, registry: ToolRegistry | None = None) -> ToolFamily:
    """Register ``family`` with ``registry`` (the default registry when omitted)."""

    (registry if registry is not None else DEFAULT_REGISTRY).register(family)
    return family


__all__ = ["DEFAULT_REGISTRY", "ToolRegistry", "default_registry", "register_family"]
