# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading with layered precedence.

Layers, lowest precedence first: built-in defaults, ``[tool.file-hashing]`` in
the nearest ``pyproject.toml``, a dedicated TOML file, explicit overrides.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from .config import HashingConfig, build_config
from .errors import ConfigError

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEYS: Final[tuple[str, ...]] = ("file-hashing", "file_hashing")
DEFAULT_CONFIG_FILENAME: Final[str] = ".file-hashing.toml"


def load_config(
    start: Path,
    *,
    config_file: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> HashingConfig:
    """Return the effective configuration for hashing below ``start``.

    Args:
        start: Path being hashed; configuration is discovered from its directory upwards.
        config_file: Explicit TOML file to load; must exist when provided.
        overrides: Final overrides (typically CLI options); ``None`` values are ignored.

    Returns:
        HashingConfig: Validated configuration.

    Raises:
        ConfigError: If a configuration file is missing, malformed, or invalid.
    """

    base_dir = start if start.is_dir() else start.parent
    merged: dict[str, Any] = {}
    sources: list[str] = []

    pyproject = find_pyproject(base_dir)
    if pyproject is not None:
        section = _pyproject_section(pyproject)
        if section:
            merged.update(section)
            sources.append(str(pyproject))

    if config_file is not None:
        if not config_file.is_file():
            raise ConfigError(f"configuration file not found: {config_file}")
        merged.update(_read_toml(config_file))
        sources.append(str(config_file))
    else:
        candidate = base_dir / DEFAULT_CONFIG_FILENAME
        if candidate.is_file():
            merged.update(_read_toml(candidate))
            sources.append(str(candidate))

    config = build_config(merged, source=", ".join(sources) or "defaults")
    if overrides:
        config = config.with_overrides(dict(overrides))
    return config


def find_pyproject(start: Path) -> Path | None:
    """Return the nearest ``pyproject.toml`` at or above ``start``."""

    current = start.resolve()
    for directory in (current, *current.parents):
        candidate = directory / PYPROJECT_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _pyproject_section(path: Path) -> dict[str, Any]:
    """Return the ``[tool.file-hashing]`` table of ``path``, or an empty dict.

    Args:
        path: ``pyproject.toml`` to inspect.

    Returns:
        dict[str, Any]: Raw section values.

    Raises:
        ConfigError: If the section exists but is not a table.
    """

    data = _read_toml(path)
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    for key in PYPROJECT_SECTION_KEYS:
        section = tool_section.get(key)
        if isinstance(section, Mapping):
            return dict(section)
        if section is not None:
            raise ConfigError(f"[tool.{key}] in {path} must be a table")
    return {}


def _read_toml(path: Path) -> dict[str, Any]:
    """Parse ``path`` as TOML, reporting failures as :class:`ConfigError`."""

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"malformed TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc


__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "PYPROJECT_FILENAME",
    "find_pyproject",
    "load_config",
]
