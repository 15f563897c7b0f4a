# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Digests of files and directory trees over any fixed-size hash algorithm."""

from __future__ import annotations

from importlib import metadata

from .algorithms import AlgorithmFactory, DigestAlgorithm, available_algorithms, resolve_algorithm
from .config import ErrorPolicy, HashingConfig, SymlinkPolicy
from .config_loader import load_config
from .encoding import DigestEncoding, encode_digest
from .errors import (
    AlgorithmError,
    ConfigError,
    EnumerationError,
    FileHashFailure,
    FileReadError,
    HashingError,
    RootNotFoundError,
    TreeHashError,
)
from .file import hash_file
from .filesystem import FileEntry, enumerate_files
from .progress import FileFailed, FileHashed, ProgressEvent
from .tree import (
    FileDigestResult,
    TreeDigest,
    combine_digests,
    digest_tree,
    digest_trees,
    hash_directories,
    hash_directory,
    hash_files,
)

__all__ = [
    "AlgorithmError",
    "AlgorithmFactory",
    "ConfigError",
    "DigestAlgorithm",
    "DigestEncoding",
    "EnumerationError",
    "ErrorPolicy",
    "FileDigestResult",
    "FileEntry",
    "FileFailed",
    "FileHashFailure",
    "FileHashed",
    "FileReadError",
    "HashingConfig",
    "HashingError",
    "ProgressEvent",
    "RootNotFoundError",
    "SymlinkPolicy",
    "TreeDigest",
    "TreeHashError",
    "__version__",
    "available_algorithms",
    "combine_digests",
    "digest_tree",
    "digest_trees",
    "encode_digest",
    "enumerate_files",
    "hash_directories",
    "hash_directory",
    "hash_file",
    "hash_files",
    "load_config",
    "resolve_algorithm",
]

try:
    __version__ = metadata.version("file-hashing")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
