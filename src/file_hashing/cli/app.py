# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the hashing commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from .. import __version__
from ..algorithms import available_algorithms
from ..config import HashingConfig
from ..encoding import encode_digest
from ..errors import HashingError, TreeHashError
from ..file import hash_file
from ..tree import TreeDigest, digest_tree
from ._progress import HashProgressController
from .options import (
    ALGORITHM_OPTION,
    CHUNK_SIZE_OPTION,
    CONFIG_OPTION,
    DEBUG_OPTION,
    EMOJI_OPTION,
    ENCODING_OPTION,
    JOBS_OPTION,
    NO_FAIL_FAST_OPTION,
    ON_ERROR_OPTION,
    PROGRESS_OPTION,
    SYMLINKS_OPTION,
    HashCLIOptions,
)
from .shared import EXIT_FAILURE, CLIError, CLILogger, build_cli_logger, resolve_config

app = typer.Typer(
    name="file-hashing",
    help="Compute digests of files and directory trees.",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    """Print the installed version and exit when ``--version`` is given."""

    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Compute digests of files and directory trees."""


@app.command("file")
def file_command(
    paths: Annotated[list[Path], typer.Argument(help="Files to hash.")],
    algorithm: ALGORITHM_OPTION = None,
    encoding: ENCODING_OPTION = None,
    chunk_size: CHUNK_SIZE_OPTION = None,
    config_file: CONFIG_OPTION = None,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Print the digest of each file, one ``<digest>  <path>`` line per file."""

    options = HashCLIOptions(
        algorithm=algorithm,
        encoding=encoding,
        chunk_size=chunk_size,
        config_file=config_file,
        emoji=emoji,
        debug=debug,
    )
    logger = build_cli_logger(emoji=options.emoji, debug=options.debug)
    config = _load_config(paths[0], options, logger)

    failed = False
    for path in paths:
        try:
            digest = hash_file(path, config.algorithm, chunk_size=config.chunk_size)
        except HashingError as exc:
            logger.fail(str(exc))
            failed = True
            continue
        logger.echo(f"{encode_digest(digest, config.encoding)}  {path}")
    raise typer.Exit(code=EXIT_FAILURE if failed else 0)


@app.command("dir")
def dir_command(
    root: Annotated[Path, typer.Argument(help="Directory (or file) to hash.")],
    algorithm: ALGORITHM_OPTION = None,
    jobs: JOBS_OPTION = None,
    encoding: ENCODING_OPTION = None,
    chunk_size: CHUNK_SIZE_OPTION = None,
    symlinks: SYMLINKS_OPTION = None,
    on_error: ON_ERROR_OPTION = None,
    no_fail_fast: NO_FAIL_FAST_OPTION = False,
    config_file: CONFIG_OPTION = None,
    list_files: Annotated[bool, typer.Option("--list", "-l", help="Also print every per-file digest.")] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Emit a JSON document instead of text.")] = False,
    show_progress: PROGRESS_OPTION = True,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Print the aggregate digest of a directory tree."""

    options = HashCLIOptions(
        algorithm=algorithm,
        jobs=jobs,
        encoding=encoding,
        chunk_size=chunk_size,
        symlinks=symlinks,
        on_error=on_error,
        no_fail_fast=no_fail_fast,
        config_file=config_file,
        emoji=emoji,
        debug=debug,
        progress=show_progress,
    )
    logger = build_cli_logger(emoji=options.emoji, debug=options.debug)
    config = _load_config(root, options, logger)
    logger.debug(f"algorithm={config.algorithm} jobs={config.jobs} symlinks={config.symlinks.value}")

    try:
        with HashProgressController(console=logger.console, enabled=options.progress and not as_json) as controller:
            result = digest_tree(root, config=config, progress=controller)
    except TreeHashError as exc:
        logger.fail(str(exc))
        for failure in exc.failures:
            logger.warn(f"{failure.relative_path}: {failure.error.reason}")
        raise typer.Exit(code=EXIT_FAILURE) from exc
    except HashingError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=EXIT_FAILURE) from exc

    if as_json:
        logger.echo(json.dumps(_tree_payload(root, result, config), indent=2))
        raise typer.Exit(code=0)
    if list_files:
        for entry in result.entries:
            digest = entry.digest or b""
            logger.echo(f"{encode_digest(digest, config.encoding)}  {entry.entry.display_path}")
    logger.echo(f"{result.encode(config.encoding)}  {root}")
    raise typer.Exit(code=0)


@app.command("algorithms")
def algorithms_command() -> None:
    """List the hash algorithm names accepted by ``--algorithm``."""

    for name in available_algorithms():
        typer.echo(name)


def _load_config(target: Path, options: HashCLIOptions, logger: CLILogger) -> HashingConfig:
    """Resolve configuration for ``target``, exiting with a usage status on failure.

    Args:
        target: Path being hashed; configuration is discovered from it.
        options: Parsed command-line options supplying overrides.
        logger: Logger used to report configuration errors.

    Returns:
        HashingConfig: Effective configuration.

    Raises:
        typer.Exit: If configuration cannot be loaded or validated.
    """

    try:
        return resolve_config(target, config_file=options.config_file, overrides=options.overrides())
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc


def _tree_payload(root: Path, result: TreeDigest, config: HashingConfig) -> dict[str, object]:
    """Return the JSON document describing ``result`` for ``--json`` output.

    Args:
        root: Root the user asked to hash.
        result: Aggregate digest with its per-entry results.
        config: Configuration naming the algorithm and encoding.

    Returns:
        dict[str, object]: JSON-serialisable payload.
    """

    return {
        "root": str(root),
        "algorithm": config.algorithm,
        "encoding": config.encoding.value,
        "digest": result.encode(config.encoding),
        "files": [
            {
                "path": entry.entry.display_path,
                "kind": entry.entry.kind.value,
                "digest": encode_digest(entry.digest or b"", config.encoding),
            }
            for entry in result.entries
        ],
    }


__all__ = ["app"]
