# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Single-file digest computation."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Final

from .algorithms import DEFAULT_ALGORITHM, AlgorithmFactory, AlgorithmSelector, resolve_algorithm
from .config import DEFAULT_CHUNK_SIZE
from .errors import FileReadError
from .filesystem import EntryKind, FileEntry

_OPEN_FLAGS: Final[int] = os.O_RDONLY | getattr(os, "O_NONBLOCK", 0) | getattr(os, "O_BINARY", 0)


def hash_file(
    path: str | os.PathLike[str],
    algorithm: AlgorithmSelector = DEFAULT_ALGORITHM,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bytes:
    """Return the digest of the bytes stored at ``path``.

    The file is read sequentially in ``chunk_size`` blocks, each fed in order
    to a fresh accumulator.

    Args:
        path: File to hash.
        algorithm: ``hashlib`` name or accumulator factory.
        chunk_size: Size of each read in bytes.

    Returns:
        bytes: Raw digest.

    Raises:
        FileReadError: If the path cannot be opened or read, or is not a
            regular file at the time it is opened.
        AlgorithmError: If ``algorithm`` is not a valid selector.
    """

    return _digest_file(Path(path), resolve_algorithm(algorithm), chunk_size)


def hash_entry(entry: FileEntry, factory: AlgorithmFactory, chunk_size: int) -> bytes:
    """Return the digest contributed by ``entry`` to a tree digest.

    Symlink entries hash the link target text; files hash their contents.
    """

    if entry.kind is EntryKind.SYMLINK:
        try:
            target = os.readlink(entry.absolute_path)
        except OSError as exc:
            raise FileReadError(entry.absolute_path, exc.strerror or str(exc)) from exc
        accumulator = factory()
        accumulator.update(os.fsencode(target))
        return accumulator.digest()
    return _digest_file(entry.absolute_path, factory, chunk_size)


def _digest_file(path: Path, factory: AlgorithmFactory, chunk_size: int) -> bytes:
    """Stream ``path`` through a fresh accumulator and return its digest.

    Args:
        path: File to read.
        factory: Factory producing the accumulator.
        chunk_size: Size of each read in bytes.

    Returns:
        bytes: Raw digest of the file contents.

    Raises:
        ValueError: If ``chunk_size`` is not positive.
        FileReadError: If the path cannot be opened or read, or is not a
            regular file once opened.
    """

    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    accumulator = factory()
    try:
        # Non-blocking open keeps a FIFO swapped in after enumeration from stalling the read.
        descriptor = os.open(path, _OPEN_FLAGS)
        with os.fdopen(descriptor, "rb") as handle:
            if not stat.S_ISREG(os.fstat(handle.fileno()).st_mode):
                raise FileReadError(path, "not a regular file")
            while chunk := handle.read(chunk_size):
                accumulator.update(chunk)
    except OSError as exc:
        raise FileReadError(path, exc.strerror or str(exc)) from exc
    return accumulator.digest()


__all__ = ["hash_entry", "hash_file"]
