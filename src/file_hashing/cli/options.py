# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Reusable Typer option declarations for hashing commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer

from ..config import ErrorPolicy, SymlinkPolicy
from ..encoding import DigestEncoding

ALGORITHM_OPTION = Annotated[
    str | None,
    typer.Option("--algorithm", "-a", help="hashlib algorithm name (see the 'algorithms' command)."),
]
JOBS_OPTION = Annotated[
    int | None,
    typer.Option("--jobs", "-j", min=1, help="Number of worker threads (defaults to CPU count)."),
]
ENCODING_OPTION = Annotated[
    DigestEncoding | None,
    typer.Option("--encoding", "-e", case_sensitive=False, help="Textual encoding of printed digests."),
]
CHUNK_SIZE_OPTION = Annotated[
    int | None,
    typer.Option("--chunk-size", min=1, help="Read size in bytes for each file chunk."),
]
SYMLINKS_OPTION = Annotated[
    SymlinkPolicy | None,
    typer.Option("--symlinks", case_sensitive=False, help="Treatment of symbolic links inside the tree."),
]
ON_ERROR_OPTION = Annotated[
    ErrorPolicy | None,
    typer.Option("--on-error", case_sensitive=False, help="Policy for directories that cannot be listed."),
]
NO_FAIL_FAST_OPTION = Annotated[
    bool,
    typer.Option("--no-fail-fast", help="Hash every file and report all failures instead of stopping early."),
]
CONFIG_OPTION = Annotated[
    Path | None,
    typer.Option("--config", "-c", dir_okay=False, help="Explicit TOML configuration file."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Show debug logging from the hashing library."),
]
PROGRESS_OPTION = Annotated[
    bool,
    typer.Option("--progress/--no-progress", help="Show a progress bar when attached to a terminal."),
]


@dataclass(slots=True)
class HashCLIOptions:
    """Capture option values shared by the hashing commands."""

    algorithm: str | None = None
    jobs: int | None = None
    encoding: DigestEncoding | None = None
    chunk_size: int | None = None
    symlinks: SymlinkPolicy | None = None
    on_error: ErrorPolicy | None = None
    no_fail_fast: bool = False
    config_file: Path | None = None
    emoji: bool = True
    debug: bool = False
    progress: bool = True

    def overrides(self) -> dict[str, Any]:
        """Return config overrides for every option the user supplied."""

        return {
            "algorithm": self.algorithm,
            "jobs": self.jobs,
            "encoding": self.encoding,
            "chunk_size": self.chunk_size,
            "symlinks": self.symlinks,
            "on_error": self.on_error,
            "fail_fast": False if self.no_fail_fast else None,
        }


__all__ = [
    "ALGORITHM_OPTION",
    "CHUNK_SIZE_OPTION",
    "CONFIG_OPTION",
    "DEBUG_OPTION",
    "EMOJI_OPTION",
    "ENCODING_OPTION",
    "HashCLIOptions",
    "JOBS_OPTION",
    "NO_FAIL_FAST_OPTION",
    "ON_ERROR_OPTION",
    "PROGRESS_OPTION",
    "SYMLINKS_OPTION",
]
