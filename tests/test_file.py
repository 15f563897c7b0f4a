# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for single-file digests."""

from __future__ import annotations

import hashlib
import os
from pathlib import Path

import pytest

from file_hashing import AlgorithmError, FileReadError, hash_file
from file_hashing.file import hash_entry
from file_hashing.filesystem import EntryKind, FileEntry


def test_hash_file_matches_hashlib(tmp_path: Path) -> None:
    target = tmp_path / "data.bin"
    payload = os.urandom(200_000)
    target.write_bytes(payload)

    assert hash_file(target) == hashlib.sha256(payload).digest()
    assert hash_file(str(target), "blake2s") == hashlib.blake2s(payload).digest()


def test_identical_content_gives_identical_digest(tmp_path: Path) -> None:
    first = tmp_path / "first.txt"
    second = tmp_path / "nested" / "second.log"
    second.parent.mkdir()
    first.write_bytes(b"same bytes")
    second.write_bytes(b"same bytes")
    os.utime(second, (0, 0))

    assert hash_file(first) == hash_file(second)


def test_chunk_size_does_not_change_digest(tmp_path: Path) -> None:
    target = tmp_path / "chunks.bin"
    target.write_bytes(os.urandom(10_001))

    assert hash_file(target, chunk_size=1) == hash_file(target, chunk_size=4096) == hash_file(target)


def test_empty_file_hashes_empty_input(tmp_path: Path) -> None:
    target = tmp_path / "empty"
    target.touch()

    assert hash_file(target, "sha1") == hashlib.sha1(b"").digest()


def test_factory_and_name_agree(tmp_path: Path) -> None:
    target = tmp_path / "x.txt"
    target.write_text("contents", encoding="utf-8")

    assert hash_file(target, hashlib.sha3_256) == hash_file(target, "sha3-256")


def test_missing_file_raises_read_error(tmp_path: Path) -> None:
    missing = tmp_path / "missing.txt"

    with pytest.raises(FileReadError) as excinfo:
        hash_file(missing)

    assert excinfo.value.path == missing
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_directory_is_not_a_regular_file(tmp_path: Path) -> None:
    with pytest.raises(FileReadError):
        hash_file(tmp_path)


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="FIFOs unavailable")
def test_fifo_is_rejected_without_blocking(tmp_path: Path) -> None:
    fifo = tmp_path / "pipe"
    os.mkfifo(fifo)

    with pytest.raises(FileReadError) as excinfo:
        hash_file(fifo)

    assert excinfo.value.reason == "not a regular file"


def test_unknown_algorithm_rejected(tmp_path: Path) -> None:
    target = tmp_path / "x.txt"
    target.write_bytes(b"x")

    with pytest.raises(AlgorithmError):
        hash_file(target, "not-a-hash")


def test_non_positive_chunk_size_rejected(tmp_path: Path) -> None:
    target = tmp_path / "x.txt"
    target.write_bytes(b"x")

    with pytest.raises(ValueError):
        hash_file(target, chunk_size=0)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlink_entry_hashes_link_target(tmp_path: Path) -> None:
    link = tmp_path / "link"
    link.symlink_to("somewhere/else.txt")
    entry = FileEntry(relative_path=("link",), absolute_path=link, kind=EntryKind.SYMLINK)

    assert hash_entry(entry, hashlib.sha256, 1024) == hashlib.sha256(b"somewhere/else.txt").digest()
