# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised by file and tree hashing operations."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path


class HashingError(Exception):
    """Base class for every error surfaced by :mod:`file_hashing`."""


class ConfigError(HashingError):
    """Raised when configuration input is invalid."""


class AlgorithmError(HashingError, ValueError):
    """Raised when an algorithm selector cannot produce fixed-size digests."""


class RootNotFoundError(HashingError):
    """Raised when the root handed to a hashing call does not exist."""

    def __init__(self, path: Path) -> None:
        """Create the error for the missing ``path``.

        Args:
            path: Root path supplied by the caller.
        """

        super().__init__(f"path does not exist: {path}")
        self.path = path


class FileReadError(HashingError):
    """Raised when a single file cannot be opened or read to completion."""

    def __init__(self, path: Path, reason: str) -> None:
        """Create the error describing why ``path`` could not be hashed.

        Args:
            path: File that failed to hash.
            reason: Short human-readable description of the failure.
        """

        super().__init__(f"cannot hash {path}: {reason}")
        self.path = path
        self.reason = reason


class EnumerationError(HashingError):
    """Raised when a directory listing fails during tree enumeration."""

    def __init__(self, path: Path, reason: str) -> None:
        """Create the error for the directory that could not be listed.

        Args:
            path: Directory (or entry) whose inspection failed.
            reason: Short human-readable description of the failure.
        """

        super().__init__(f"cannot enumerate {path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True, slots=True)
class FileHashFailure:
    """Per-file failure collected from the parallel hashing phase."""

    relative_path: str
    error: FileReadError


class TreeHashError(HashingError):
    """Raised when one or more per-file hashing tasks failed."""

    def __init__(self, failures: Iterable[FileHashFailure]) -> None:
        """Aggregate ``failures`` into a single error.

        Args:
            failures: Failures collected once every dispatched task settled.
        """

        self.failures: tuple[FileHashFailure, ...] = tuple(sorted(failures, key=lambda item: item.relative_path))
        if not self.failures:
            raise ValueError("TreeHashError requires at least one failure")
        first = self.failures[0]
        extra = len(self.failures) - 1
        suffix = f" (and {extra} more)" if extra else ""
        super().__init__(f"failed to hash {first.relative_path}: {first.error.reason}{suffix}")

    @property
    def first(self) -> FileReadError:
        """Return the underlying error of the first failure in path order."""

        return self.failures[0].error


__all__ = [
    "AlgorithmError",
    "ConfigError",
    "EnumerationError",
    "FileHashFailure",
    "FileReadError",
    "HashingError",
    "RootNotFoundError",
    "TreeHashError",
]
