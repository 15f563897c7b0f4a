# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, config resolution)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from ..config import HashingConfig
from ..config_loader import load_config
from ..errors import ConfigError

EXIT_FAILURE: Final[int] = 1
EXIT_USAGE: Final[int] = 2

FAIL_GLYPH: Final[str] = "❌ "
WARN_GLYPH: Final[str] = "⚠️ "


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = EXIT_FAILURE) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Diagnostics sink for CLI commands.

    Failures, warnings and debug lines go to ``console``, which writes to
    stderr. Results go to stdout through :meth:`echo`, so digest listings stay
    machine-readable when some inputs fail.
    """

    console: Console
    use_emoji: bool
    debug_enabled: bool = False

    def fail(self, message: str) -> None:
        """Report a failure on stderr honouring emoji preferences."""

        self._emit(FAIL_GLYPH, message, style="red")

    def warn(self, message: str) -> None:
        """Report a warning on stderr honouring emoji preferences."""

        self._emit(WARN_GLYPH, message, style="yellow")

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)

    def debug(self, message: str) -> None:
        """Emit a debug message when debug logging is enabled."""

        if self.debug_enabled:
            text = Text("[debug] ", style="bold cyan")
            text.append(message, style="dim")
            self.console.print(text)

    def _emit(self, glyph: str, message: str, *, style: str) -> None:
        """Print ``message`` styled with ``style``, prefixed by ``glyph`` when emoji are on.

        Args:
            glyph: Emoji prefix for the message kind.
            message: Text to print; never interpreted as markup.
            style: Rich style applied to the whole line.
        """

        prefix = glyph if self.use_emoji else ""
        self.console.print(Text(f"{prefix}{message}", style=style))


def build_cli_logger(*, emoji: bool, debug: bool = False, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` configured for the provided emoji preference.

    Args:
        emoji: Whether log output may include emoji glyphs.
        debug: Whether debug logging should be enabled.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger instance bound to a dedicated Rich console on stderr.
    """

    console = Console(no_color=no_color, highlight=False, soft_wrap=True, stderr=True, emoji=False)
    configure_library_logging(console, debug=debug)
    return CLILogger(console=console, use_emoji=emoji, debug_enabled=debug)


def configure_library_logging(console: Console, *, debug: bool) -> None:
    """Route ``file_hashing`` library log records to ``console``.

    Args:
        console: Console receiving rendered records.
        debug: ``True`` to include debug records, otherwise warnings and above.
    """

    package_logger = logging.getLogger("file_hashing")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)
    handler = RichHandler(console=console, show_path=False, show_time=False, markup=False)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.WARNING)


def resolve_config(
    target: Path,
    *,
    config_file: Path | None,
    overrides: Mapping[str, Any],
) -> HashingConfig:
    """Load configuration for ``target`` converting failures into :class:`CLIError`.

    Args:
        target: Path being hashed.
        config_file: Optional explicit configuration file.
        overrides: Values supplied on the command line.

    Returns:
        HashingConfig: Effective configuration.

    Raises:
        CLIError: If configuration cannot be loaded or validated.
    """

    try:
        return load_config(target, config_file=config_file, overrides=overrides)
    except ConfigError as exc:
        raise CLIError(str(exc), exit_code=EXIT_USAGE) from exc


__all__ = [
    "CLIError",
    "CLILogger",
    "EXIT_FAILURE",
    "EXIT_USAGE",
    "build_cli_logger",
    "configure_library_logging",
    "resolve_config",
]
