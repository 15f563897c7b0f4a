# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Parallel hashing of file sets and directory trees.

Per-file digests are computed on a thread pool, gathered in full, sorted by
relative path and only then folded into one accumulator. The fold feeds, for
each entry in order, the ``/``-joined relative path, a NUL terminator and the
entry digest. Completion order therefore never reaches the aggregate.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final

from .algorithms import AlgorithmFactory, AlgorithmSelector, resolve_algorithm
from .config import HashingConfig
from .encoding import DigestEncoding, encode_digest
from .errors import FileHashFailure, FileReadError, TreeHashError
from .file import hash_entry
from .filesystem import FileEntry, enumerate_files
from .progress import FileFailed, FileHashed, ProgressCallback

LOGGER = logging.getLogger(__name__)

ENTRY_TERMINATOR: Final[bytes] = b"\0"


@dataclass(frozen=True, slots=True)
class FileDigestResult:
    """Outcome of hashing a single entry: either a digest or an error."""

    entry: FileEntry
    digest: bytes | None = None
    error: FileReadError | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the entry hashed successfully."""

        return self.error is None


@dataclass(frozen=True, slots=True)
class TreeDigest:
    """Aggregate digest together with the per-entry results it was built from."""

    digest: bytes
    entries: tuple[FileDigestResult, ...]

    def hexdigest(self) -> str:
        """Return the aggregate digest as lowercase hex."""

        return self.digest.hex()

    def encode(self, encoding: DigestEncoding | str = DigestEncoding.HEX) -> str:
        """Return the aggregate digest rendered using ``encoding``."""

        return encode_digest(self.digest, encoding)


@dataclass(slots=True)
class TreeHasher:
    """Hash a batch of entries, serially or across a bounded thread pool."""

    factory: AlgorithmFactory
    chunk_size: int
    jobs: int
    fail_fast: bool = True
    progress: ProgressCallback | None = None

    def hash_entries(self, entries: Sequence[FileEntry]) -> list[FileDigestResult]:
        """Return one successful result per entry.

        Args:
            entries: Entries to hash; each is consumed by exactly one task.

        Returns:
            list[FileDigestResult]: Successful results in completion order.

        Raises:
            TreeHashError: If any entry failed; carries every collected failure.
        """

        if self.jobs > 1 and len(entries) > 1:
            results = self._execute_in_parallel(entries)
        else:
            results = self._execute_serial(entries)
        failures = [
            FileHashFailure(relative_path=result.entry.display_path, error=result.error)
            for result in results
            if result.error is not None
        ]
        if failures:
            raise TreeHashError(failures)
        return results

    def hash_one(self, entry: FileEntry) -> FileDigestResult:
        """Hash ``entry`` capturing any failure as a result value.

        Read failures are kept as-is. Any other exception raised by the task,
        such as one from a caller-supplied accumulator, is wrapped in a
        :class:`FileReadError` so that it reaches the caller as a typed
        per-file failure and still triggers fail-fast cancellation.

        Args:
            entry: Entry to hash.

        Returns:
            FileDigestResult: Digest on success, otherwise the captured error.
        """

        try:
            digest = hash_entry(entry, self.factory, self.chunk_size)
        except FileReadError as exc:
            return FileDigestResult(entry=entry, error=exc)
        except Exception as exc:
            LOGGER.debug("unexpected failure hashing %s", entry.display_path, exc_info=True)
            error = FileReadError(entry.absolute_path, f"{type(exc).__name__}: {exc}")
            error.__cause__ = exc
            return FileDigestResult(entry=entry, error=error)
        return FileDigestResult(entry=entry, digest=digest)

    def _execute_serial(self, entries: Sequence[FileEntry]) -> list[FileDigestResult]:
        """Hash ``entries`` one after another on the calling thread.

        Args:
            entries: Entries to hash in the given order.

        Returns:
            list[FileDigestResult]: Results gathered so far; stops after the
            first failure when fail-fast is enabled.
        """

        results: list[FileDigestResult] = []
        for entry in entries:
            result = self.hash_one(entry)
            results.append(result)
            self._report(result, done=len(results), total=len(entries))
            if not result.ok and self.fail_fast:
                break
        return results

    def _execute_in_parallel(self, entries: Sequence[FileEntry]) -> list[FileDigestResult]:
        """Hash ``entries`` on a bounded thread pool.

        Args:
            entries: Entries to hash; one task is submitted per entry.

        Returns:
            list[FileDigestResult]: Results in completion order. Tasks cancelled
            after a fail-fast failure contribute nothing.
        """

        workers = min(self.jobs, len(entries))
        LOGGER.debug("hashing %d entries with %d workers", len(entries), workers)
        results: list[FileDigestResult] = []
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="file-hashing") as executor:
            future_map = {executor.submit(self.hash_one, entry): entry for entry in entries}
            for future in as_completed(future_map):
                if future.cancelled():
                    continue
                result = future.result()
                results.append(result)
                self._report(result, done=len(results), total=len(entries))
                if not result.ok and self.fail_fast:
                    _cancel_pending(future_map)
        return results

    def _report(self, result: FileDigestResult, *, done: int, total: int) -> None:
        """Forward ``result`` to the progress callback when one is registered."""

        if self.progress is None:
            return
        relative_path = result.entry.display_path
        if result.error is not None:
            self.progress(FileFailed(done=done, total=total, relative_path=relative_path, error=result.error))
        else:
            self.progress(FileHashed(done=done, total=total, relative_path=relative_path))


def combine_digests(results: Iterable[FileDigestResult], factory: AlgorithmFactory) -> bytes:
    """Fold successful ``results`` into one digest in relative-path order.

    Args:
        results: Per-entry results; every one must carry a digest.
        factory: Factory producing the final accumulator.

    Returns:
        bytes: Aggregate digest. With no results this is the digest of an
        accumulator that received no input.
    """

    accumulator = factory()
    for result in sorted(results, key=lambda item: item.entry.sort_key):
        if result.digest is None:
            raise ValueError(f"cannot combine failed entry {result.entry.display_path}")
        accumulator.update(result.entry.path_bytes)
        accumulator.update(ENTRY_TERMINATOR)
        accumulator.update(result.digest)
    return accumulator.digest()


def digest_tree(
    root: str | os.PathLike[str],
    algorithm: AlgorithmSelector | None = None,
    *,
    jobs: int | None = None,
    config: HashingConfig | None = None,
    progress: ProgressCallback | None = None,
) -> TreeDigest:
    """Hash every entry under ``root`` and return the aggregate with its parts.

    Args:
        root: Directory to hash; a regular file yields a single-entry tree.
        algorithm: ``hashlib`` name or accumulator factory; defaults to the
            configured algorithm.
        jobs: Worker count; defaults to the configured value.
        config: Settings for chunk size, symlinks, error policy and fail-fast.
        progress: Optional callback receiving per-file progress events.

    Returns:
        TreeDigest: Aggregate digest and the sorted per-entry results.

    Raises:
        RootNotFoundError: If ``root`` does not exist.
        EnumerationError: If listing fails under the fail-closed policy.
        TreeHashError: If any file could not be hashed.
    """

    settings = config or HashingConfig()
    entries = enumerate_files(Path(root), symlinks=settings.symlinks, on_error=settings.on_error)
    return _digest_entries(entries, algorithm, jobs=jobs, settings=settings, progress=progress)


def hash_directory(
    root: str | os.PathLike[str],
    algorithm: AlgorithmSelector | None = None,
    *,
    jobs: int | None = None,
    config: HashingConfig | None = None,
    progress: ProgressCallback | None = None,
) -> bytes:
    """Return the aggregate digest of the tree rooted at ``root``.

    See :func:`digest_tree` for arguments and errors.
    """

    return digest_tree(root, algorithm, jobs=jobs, config=config, progress=progress).digest


def digest_trees(
    roots: Iterable[str | os.PathLike[str]],
    algorithm: AlgorithmSelector | None = None,
    *,
    jobs: int | None = None,
    config: HashingConfig | None = None,
    progress: ProgressCallback | None = None,
) -> TreeDigest:
    """Hash several trees into one aggregate digest.

    Each root contributes its entries under a leading component equal to the
    root's own name, so ``photos/a.jpg`` and ``music/a.jpg`` stay distinct.
    The result depends on the set of roots, not on the order they are given.

    Args:
        roots: Directories (or files) to hash together.
        algorithm: ``hashlib`` name or accumulator factory; defaults to the
            configured algorithm.
        jobs: Worker count shared by all roots; defaults to the configured value.
        config: Settings for chunk size, symlinks, error policy and fail-fast.
        progress: Optional callback receiving per-file progress events.

    Returns:
        TreeDigest: Aggregate digest and the sorted per-entry results.

    Raises:
        ValueError: If ``roots`` is empty, a root has no name, or two roots
            share a name.
        RootNotFoundError: If a root does not exist.
        EnumerationError: If listing fails under the fail-closed policy.
        TreeHashError: If any file could not be hashed.
    """

    settings = config or HashingConfig()
    labelled = _label_roots(roots)
    entries: list[FileEntry] = []
    for label, root in labelled.items():
        found = enumerate_files(root, symlinks=settings.symlinks, on_error=settings.on_error)
        entries.extend(replace(entry, relative_path=(label, *entry.relative_path)) for entry in found)
    LOGGER.debug("enumerated %d entries across %d roots", len(entries), len(labelled))
    return _digest_entries(entries, algorithm, jobs=jobs, settings=settings, progress=progress)


def hash_directories(
    roots: Iterable[str | os.PathLike[str]],
    algorithm: AlgorithmSelector | None = None,
    *,
    jobs: int | None = None,
    config: HashingConfig | None = None,
    progress: ProgressCallback | None = None,
) -> bytes:
    """Return one aggregate digest covering every tree in ``roots``.

    See :func:`digest_trees` for arguments and errors.
    """

    return digest_trees(roots, algorithm, jobs=jobs, config=config, progress=progress).digest


def hash_files(
    paths: Iterable[str | os.PathLike[str]],
    algorithm: AlgorithmSelector | None = None,
    *,
    root: str | os.PathLike[str] | None = None,
    jobs: int | None = None,
    config: HashingConfig | None = None,
    progress: ProgressCallback | None = None,
) -> bytes:
    """Return the aggregate digest of an explicit set of files.

    Relative paths feeding the combination are taken against ``root`` when
    given, otherwise against the deepest directory containing every path.
    Duplicate paths are hashed once.

    Args:
        paths: Files to hash.
        algorithm: ``hashlib`` name or accumulator factory.
        root: Base directory for relative paths.
        jobs: Worker count; defaults to the configured value.
        config: Settings for chunk size and fail-fast.
        progress: Optional callback receiving per-file progress events.

    Returns:
        bytes: Aggregate digest.

    Raises:
        ValueError: If ``paths`` is empty or a path lies outside ``root``.
        TreeHashError: If any file could not be hashed.
    """

    absolute = list(dict.fromkeys(Path(os.path.abspath(path)) for path in paths))
    if not absolute:
        raise ValueError("at least one path is required")
    base = Path(os.path.abspath(root)) if root is not None else _common_parent(absolute)
    entries: list[FileEntry] = []
    for path in absolute:
        try:
            relative = path.relative_to(base)
        except ValueError as exc:
            raise ValueError(f"{path} is not located under {base}") from exc
        if not relative.parts:
            raise ValueError(f"{path} is the base directory itself, not a file below it")
        entries.append(FileEntry(relative_path=relative.parts, absolute_path=path))
    settings = config or HashingConfig()
    return _digest_entries(entries, algorithm, jobs=jobs, settings=settings, progress=progress).digest


def _digest_entries(
    entries: Sequence[FileEntry],
    algorithm: AlgorithmSelector | None,
    *,
    jobs: int | None,
    settings: HashingConfig,
    progress: ProgressCallback | None,
) -> TreeDigest:
    """Hash ``entries`` and fold the results into a :class:`TreeDigest`.

    Args:
        entries: Entries with their final relative paths.
        algorithm: Explicit selector, or ``None`` for the configured algorithm.
        jobs: Explicit worker count, or ``None`` for the configured value.
        settings: Effective configuration.
        progress: Optional progress callback.

    Returns:
        TreeDigest: Aggregate digest and sorted per-entry results.

    Raises:
        ValueError: If the worker count is below one.
        AlgorithmError: If the selector is invalid.
        TreeHashError: If any entry failed.
    """

    factory = resolve_algorithm(algorithm if algorithm is not None else settings.algorithm)
    worker_count = settings.jobs if jobs is None else jobs
    if worker_count < 1:
        raise ValueError("jobs must be at least 1")
    hasher = TreeHasher(
        factory=factory,
        chunk_size=settings.chunk_size,
        jobs=worker_count,
        fail_fast=settings.fail_fast,
        progress=progress,
    )
    results = sorted(hasher.hash_entries(entries), key=lambda item: item.entry.sort_key)
    return TreeDigest(digest=combine_digests(results, factory), entries=tuple(results))


def _label_roots(roots: Iterable[str | os.PathLike[str]]) -> dict[str, Path]:
    """Map each root to the leading path component its entries are filed under.

    Args:
        roots: Roots handed to :func:`digest_trees`.

    Returns:
        dict[str, Path]: Root name to absolute root path, in input order.

    Raises:
        ValueError: If no roots are given, a root has no final component, or
            two roots share a name.
    """

    labelled: dict[str, Path] = {}
    for root in roots:
        path = Path(os.path.abspath(root))
        label = path.name
        if not label:
            raise ValueError(f"{path} has no name to label its entries with")
        if label in labelled:
            raise ValueError(f"roots {labelled[label]} and {path} share the name {label!r}")
        labelled[label] = path
    if not labelled:
        raise ValueError("at least one root is required")
    return labelled


def _common_parent(paths: Sequence[Path]) -> Path:
    """Return the deepest directory containing the parent of every path in ``paths``."""

    return Path(os.path.commonpath([str(path.parent) for path in paths]))


def _cancel_pending(future_map: dict[Future[FileDigestResult], FileEntry]) -> None:
    """Cancel every future in ``future_map`` that has not started yet."""

    for pending in future_map:
        pending.cancel()


__all__ = [
    "ENTRY_TERMINATOR",
    "FileDigestResult",
    "TreeDigest",
    "TreeHasher",
    "combine_digests",
    "digest_tree",
    "digest_trees",
    "hash_directories",
    "hash_directory",
    "hash_files",
]
