# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem enumeration producing the entries of a hashed tree."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from pathlib import Path

from ..config import ErrorPolicy, SymlinkPolicy
from ..errors import EnumerationError, RootNotFoundError

LOGGER = logging.getLogger(__name__)

PATH_SEPARATOR = b"/"


class EntryKind(str, Enum):
    """Kind of filesystem object an entry stands for."""

    FILE = "file"
    SYMLINK = "symlink"


@dataclass(frozen=True)
class FileEntry:
    """Single hashable entry discovered below the scanned root."""

    relative_path: tuple[str, ...]
    absolute_path: Path
    kind: EntryKind = EntryKind.FILE

    @cached_property
    def sort_key(self) -> tuple[bytes, ...]:
        """Return the byte-wise component sequence defining the total order."""

        return tuple(os.fsencode(part) for part in self.relative_path)

    @property
    def path_bytes(self) -> bytes:
        """Return the relative path as ``/``-joined bytes, independent of platform."""

        return PATH_SEPARATOR.join(self.sort_key)

    @property
    def display_path(self) -> str:
        """Return the relative path in POSIX form for messages and listings."""

        return "/".join(self.relative_path)


@dataclass(frozen=True, slots=True)
class WalkContext:
    """Parameters required to walk the filesystem hierarchy."""

    root: Path
    symlinks: SymlinkPolicy
    on_error: ErrorPolicy


def enumerate_files(
    root: Path,
    *,
    symlinks: SymlinkPolicy = SymlinkPolicy.IGNORE,
    on_error: ErrorPolicy = ErrorPolicy.FAIL,
) -> list[FileEntry]:
    """Return every hashable entry reachable under ``root``.

    Directories contribute nothing themselves. Special files (FIFOs, sockets,
    devices) are skipped. When ``root`` is a regular file the result holds a
    single entry named after the file.

    Args:
        root: Directory (or file) to enumerate.
        symlinks: Treatment of symbolic links.
        on_error: Policy applied when a directory or entry cannot be inspected.

    Returns:
        list[FileEntry]: Entries in traversal order; callers sort as needed.

    Raises:
        RootNotFoundError: If ``root`` does not exist.
        EnumerationError: If inspection fails under :attr:`ErrorPolicy.FAIL`.
    """

    root = Path(root)
    if not root.exists():
        raise RootNotFoundError(root)
    if root.is_symlink():
        # The root itself is always resolved; the policy governs links inside it.
        root = root.resolve()
    context = WalkContext(root=root, symlinks=symlinks, on_error=on_error)
    if not root.is_dir():
        return _single_file(context)
    entries = list(_walk(context))
    LOGGER.debug("enumerated %d entries under %s", len(entries), root)
    return entries


def _single_file(context: WalkContext) -> list[FileEntry]:
    """Return the one-entry listing for a root that is not a directory.

    Args:
        context: Walk context whose root is a file.

    Returns:
        list[FileEntry]: The root as a single entry, or nothing when it is not
        a regular file and the error policy tolerates that.
    """

    root = context.root
    try:
        mode = root.stat().st_mode
    except OSError as exc:
        _handle_error(context, root, exc)
        return []
    if not stat.S_ISREG(mode):
        _handle_error(context, root, OSError(f"not a regular file or directory: {root}"))
        return []
    return [FileEntry(relative_path=(root.name,), absolute_path=root)]


def _walk(context: WalkContext) -> Iterator[FileEntry]:
    """Walk ``context.root`` yielding entries permitted by the symlink policy.

    Args:
        context: Immutable walk context containing traversal settings.

    Yields:
        FileEntry: Regular files, plus symlinks under the record policy.
    """

    follow = context.symlinks is SymlinkPolicy.FOLLOW

    def _on_walk_error(exc: OSError) -> None:
        failed = Path(exc.filename) if exc.filename else context.root
        _handle_error(context, failed, exc)

    for dirpath, dirnames, filenames in os.walk(context.root, onerror=_on_walk_error, followlinks=follow):
        current = Path(dirpath)
        prefix = current.relative_to(context.root).parts
        if context.symlinks is SymlinkPolicy.RECORD:
            # Links to directories are listed in ``dirnames`` but never descended.
            for name in dirnames:
                if (current / name).is_symlink():
                    yield FileEntry(
                        relative_path=(*prefix, name),
                        absolute_path=current / name,
                        kind=EntryKind.SYMLINK,
                    )
        for name in filenames:
            entry = _classify(context, current / name, (*prefix, name))
            if entry is not None:
                yield entry


def _classify(context: WalkContext, path: Path, relative: tuple[str, ...]) -> FileEntry | None:
    """Turn a directory listing item into an entry, or ``None`` to skip it.

    Args:
        context: Walk context supplying the symlink and error policies.
        path: Absolute path of the listed item.
        relative: Components of ``path`` below the root.

    Returns:
        FileEntry | None: Entry for a regular file or recorded link.
    """

    try:
        link_mode = path.lstat().st_mode
    except OSError as exc:
        _handle_error(context, path, exc)
        return None
    if stat.S_ISLNK(link_mode):
        if context.symlinks is SymlinkPolicy.IGNORE:
            LOGGER.debug("ignoring symlink %s", path)
            return None
        if context.symlinks is SymlinkPolicy.RECORD:
            return FileEntry(relative_path=relative, absolute_path=path, kind=EntryKind.SYMLINK)
        try:
            mode = path.stat().st_mode
        except OSError as exc:
            _handle_error(context, path, exc)
            return None
    else:
        mode = link_mode
    if stat.S_ISREG(mode):
        return FileEntry(relative_path=relative, absolute_path=path)
    if not stat.S_ISDIR(mode):
        LOGGER.debug("skipping special file %s", path)
    return None


def _handle_error(context: WalkContext, path: Path, exc: OSError) -> None:
    """Apply the configured error policy to a failed inspection.

    Args:
        context: Walk context supplying the error policy.
        path: Directory or entry that could not be inspected.
        exc: Underlying operating system error.

    Raises:
        EnumerationError: Under :attr:`ErrorPolicy.FAIL`.
    """

    reason = exc.strerror or str(exc)
    if context.on_error is ErrorPolicy.FAIL:
        raise EnumerationError(path, reason) from exc
    if context.on_error is ErrorPolicy.WARN:
        LOGGER.warning("skipping %s: %s", path, reason)


__all__ = [
    "EntryKind",
    "FileEntry",
    "PATH_SEPARATOR",
    "WalkContext",
    "enumerate_files",
]
