# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the file-hashing command line interface."""

from __future__ import annotations

import base64
import hashlib
import json
from pathlib import Path

from typer.testing import CliRunner

from file_hashing import hash_directory
from file_hashing.cli.app import app

runner = CliRunner()


def test_file_command_prints_digest_lines(sample_tree: Path) -> None:
    target = sample_tree / "a.txt"

    result = runner.invoke(app, ["file", str(target), "--no-emoji"])

    assert result.exit_code == 0
    assert result.stdout.strip() == f"{hashlib.sha256(b'hello').hexdigest()}  {target}"


def test_file_command_algorithm_and_encoding(sample_tree: Path) -> None:
    target = sample_tree / "b" / "c.txt"

    result = runner.invoke(app, ["file", str(target), "-a", "blake2s", "-e", "base32", "--no-emoji"])

    expected = base64.b32encode(hashlib.blake2s(b"world").digest()).decode("ascii")
    assert result.exit_code == 0
    assert result.stdout.split()[0] == expected


def test_file_command_reports_missing_file(sample_tree: Path) -> None:
    result = runner.invoke(app, ["file", str(sample_tree / "a.txt"), str(sample_tree / "missing"), "--no-emoji"])

    assert result.exit_code == 1
    assert hashlib.sha256(b"hello").hexdigest() in result.output
    assert "missing" in result.output


def test_file_command_keeps_errors_off_stdout(sample_tree: Path) -> None:
    target = sample_tree / "a.txt"
    missing = sample_tree / "missing"

    result = runner.invoke(app, ["file", str(target), str(missing), "--no-emoji"])

    assert result.exit_code == 1
    assert result.stdout == f"{hashlib.sha256(b'hello').hexdigest()}  {target}\n"
    assert "cannot hash" in result.stderr
    assert str(missing) in result.stderr


def test_dir_command_failure_reported_on_stderr(tmp_path: Path) -> None:
    result = runner.invoke(app, ["dir", str(tmp_path / "absent"), "--no-progress", "--no-emoji"])

    assert result.exit_code == 1
    assert result.stdout == ""
    assert "does not exist" in result.stderr


def test_dir_command_prints_aggregate(sample_tree: Path) -> None:
    result = runner.invoke(app, ["dir", str(sample_tree), "--jobs", "2", "--no-progress", "--no-emoji"])

    assert result.exit_code == 0
    assert result.stdout.strip() == f"{hash_directory(sample_tree).hex()}  {sample_tree}"


def test_dir_command_lists_files(sample_tree: Path) -> None:
    result = runner.invoke(app, ["dir", str(sample_tree), "--list", "--no-progress", "--no-emoji"])

    lines = result.stdout.strip().splitlines()
    assert result.exit_code == 0
    assert lines[0] == f"{hashlib.sha256(b'hello').hexdigest()}  a.txt"
    assert lines[1] == f"{hashlib.sha256(b'world').hexdigest()}  b/c.txt"
    assert lines[2].startswith(hash_directory(sample_tree).hex())


def test_dir_command_json(sample_tree: Path) -> None:
    result = runner.invoke(app, ["dir", str(sample_tree), "--json", "-a", "sha512", "--no-emoji"])

    payload = json.loads(result.stdout)
    assert result.exit_code == 0
    assert payload["algorithm"] == "sha512"
    assert payload["digest"] == hash_directory(sample_tree, "sha512").hex()
    assert [item["path"] for item in payload["files"]] == ["a.txt", "b/c.txt"]
    assert {item["kind"] for item in payload["files"]} == {"file"}


def test_dir_command_reads_config_file(sample_tree: Path) -> None:
    (sample_tree.parent / "hashing.toml").write_text('algorithm = "md5"\nencoding = "hex-upper"\n', encoding="utf-8")

    result = runner.invoke(
        app,
        ["dir", str(sample_tree), "--config", str(sample_tree.parent / "hashing.toml"), "--no-progress", "--no-emoji"],
    )

    assert result.exit_code == 0
    assert result.stdout.split()[0] == hash_directory(sample_tree, "md5").hex().upper()


def test_dir_command_missing_root(tmp_path: Path) -> None:
    result = runner.invoke(app, ["dir", str(tmp_path / "absent"), "--no-progress", "--no-emoji"])

    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_dir_command_rejects_bad_algorithm(sample_tree: Path) -> None:
    result = runner.invoke(app, ["dir", str(sample_tree), "-a", "shake_128", "--no-emoji"])

    assert result.exit_code == 2
    assert "variable output length" in result.output


def test_algorithms_command_lists_names() -> None:
    result = runner.invoke(app, ["algorithms"])

    assert result.exit_code == 0
    assert "sha256" in result.stdout.split()


def test_version_option() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.stdout.strip()
