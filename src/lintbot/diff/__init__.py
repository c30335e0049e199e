# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diff utilities used to anchor review comments."""

from __future__ import annotations

from .compare import changed_regions, split_content
from .position import map_row_to_position, position_in_file

__all__ = ["changed_regions", "map_row_to_position", "position_in_file", "split_content"]
