# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Progress events emitted while a set of files is hashed."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .errors import FileReadError


@dataclass(frozen=True, slots=True)
class FileHashed:
    """A file finished hashing successfully."""

    done: int
    total: int
    relative_path: str


@dataclass(frozen=True, slots=True)
class FileFailed:
    """A file could not be hashed; the overall call will fail."""

    done: int
    total: int
    relative_path: str
    error: FileReadError


ProgressEvent = FileHashed | FileFailed
ProgressCallback = Callable[[ProgressEvent], None]


__all__ = ["FileFailed", "FileHashed", "ProgressCallback", "ProgressEvent"]
