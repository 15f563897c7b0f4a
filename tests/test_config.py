# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for configuration models and layered loading."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from file_hashing import ConfigError, DigestEncoding, ErrorPolicy, HashingConfig, SymlinkPolicy, load_config
from file_hashing.config_loader import find_pyproject


def test_defaults() -> None:
    config = HashingConfig()

    assert config.algorithm == "sha256"
    assert config.jobs == (os.cpu_count() or 1)
    assert config.chunk_size == 64 * 1024
    assert config.symlinks is SymlinkPolicy.IGNORE
    assert config.on_error is ErrorPolicy.FAIL
    assert config.fail_fast is True
    assert config.encoding is DigestEncoding.HEX


def test_invalid_values_rejected() -> None:
    with pytest.raises(ValueError):
        HashingConfig(jobs=0)
    with pytest.raises(ValueError):
        HashingConfig(algorithm="shake_256")
    with pytest.raises(ValueError):
        HashingConfig(unknown=True)  # type: ignore[call-arg]


def test_assignment_is_validated() -> None:
    config = HashingConfig()

    with pytest.raises(ValueError):
        config.chunk_size = -1


def test_with_overrides_ignores_none() -> None:
    config = HashingConfig(algorithm="sha1", jobs=3)

    updated = config.with_overrides({"algorithm": None, "jobs": 5, "symlinks": "follow"})

    assert updated.algorithm == "sha1"
    assert updated.jobs == 5
    assert updated.symlinks is SymlinkPolicy.FOLLOW
    assert config.jobs == 3


def test_load_config_without_files(tmp_path: Path) -> None:
    assert load_config(tmp_path, overrides={"jobs": 2}).jobs == 2


def test_pyproject_section_is_applied(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.file-hashing]\nalgorithm = "blake2b"\nchunk-size = 1024\non-error = "warn"\n',
        encoding="utf-8",
    )
    nested = tmp_path / "pkg" / "data"
    nested.mkdir(parents=True)

    config = load_config(nested)

    assert find_pyproject(nested) == tmp_path / "pyproject.toml"
    assert config.algorithm == "blake2b"
    assert config.chunk_size == 1024
    assert config.on_error is ErrorPolicy.WARN


def test_dedicated_file_overrides_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.file-hashing]\nalgorithm = "blake2b"\njobs = 2\n', encoding="utf-8")
    (tmp_path / ".file-hashing.toml").write_text('algorithm = "sha512"\n', encoding="utf-8")

    config = load_config(tmp_path, overrides={"jobs": 7})

    assert config.algorithm == "sha512"
    assert config.jobs == 7


def test_explicit_config_file(tmp_path: Path) -> None:
    explicit = tmp_path / "custom.toml"
    explicit.write_text('encoding = "base32"\nsymlinks = "record"\n', encoding="utf-8")

    config = load_config(tmp_path, config_file=explicit)

    assert config.encoding is DigestEncoding.BASE32
    assert config.symlinks is SymlinkPolicy.RECORD


def test_missing_explicit_config_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path, config_file=tmp_path / "absent.toml")


def test_malformed_toml(tmp_path: Path) -> None:
    (tmp_path / ".file-hashing.toml").write_text("algorithm = [", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_value_in_file(tmp_path: Path) -> None:
    (tmp_path / ".file-hashing.toml").write_text('symlinks = "sometimes"\n', encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path)

    assert ".file-hashing.toml" in str(excinfo.value)


def test_file_start_uses_parent_directory(tmp_path: Path) -> None:
    (tmp_path / ".file-hashing.toml").write_text("jobs = 4\n", encoding="utf-8")
    target = tmp_path / "data.bin"
    target.write_bytes(b"x")

    assert load_config(target).jobs == 4
