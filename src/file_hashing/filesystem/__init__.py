# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem helpers shared by the hashing entry points."""

from __future__ import annotations

from .walk import PATH_SEPARATOR, EntryKind, FileEntry, WalkContext, enumerate_files

__all__ = [
    "EntryKind",
    "FileEntry",
    "PATH_SEPARATOR",
    "WalkContext",
    "enumerate_files",
]
