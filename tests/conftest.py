# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

TreeBuilder = Callable[[Mapping[str, bytes]], Path]


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeBuilder:
    """Return a helper writing ``{relative path: content}`` under a fresh directory."""

    counter = iter(range(1_000))

    def _build(files: Mapping[str, bytes]) -> Path:
        root = tmp_path / f"tree{next(counter)}"
        root.mkdir()
        for relative, content in files.items():
            target = root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        return root

    return _build


@pytest.fixture
def sample_tree(make_tree: TreeBuilder) -> Path:
    """Return the ``a.txt`` / ``b/c.txt`` reference tree."""

    return make_tree({"a.txt": b"hello", "b/c.txt": b"world"})

