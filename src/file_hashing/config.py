# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for file and tree hashing."""

from __future__ import annotations

import os
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .algorithms import DEFAULT_ALGORITHM, resolve_algorithm
from .encoding import DigestEncoding
from .errors import AlgorithmError, ConfigError

DEFAULT_CHUNK_SIZE: Final[int] = 64 * 1024


class SymlinkPolicy(str, Enum):
    """How symbolic links met during enumeration are treated."""

    IGNORE = "ignore"
    FOLLOW = "follow"
    RECORD = "record"


class ErrorPolicy(str, Enum):
    """What enumeration does when a directory cannot be listed."""

    FAIL = "fail"
    SKIP = "skip"
    WARN = "warn"


def default_parallel_jobs() -> int:
    """Return the number of available CPU cores (minimum of 1)."""
    return os.cpu_count() or 1


class HashingConfig(BaseModel):
    """Settings shared by file, multi-file and tree hashing calls."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    algorithm: str = DEFAULT_ALGORITHM
    jobs: int = Field(default_factory=default_parallel_jobs, ge=1)
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    symlinks: SymlinkPolicy = SymlinkPolicy.IGNORE
    on_error: ErrorPolicy = ErrorPolicy.FAIL
    fail_fast: bool = True
    encoding: DigestEncoding = DigestEncoding.HEX

    @field_validator("algorithm")
    @classmethod
    def _validate_algorithm(cls, value: str) -> str:
        try:
            resolve_algorithm(value)
        except AlgorithmError as exc:
            raise ValueError(str(exc)) from exc
        return value.strip().lower()

    def with_overrides(self, overrides: dict[str, Any]) -> HashingConfig:
        """Return a copy of the config with non-``None`` ``overrides`` applied.

        Args:
            overrides: Field values to apply; ``None`` entries are ignored.

        Returns:
            HashingConfig: Validated configuration including the overrides.

        Raises:
            ConfigError: If any override fails validation.
        """

        payload = self.model_dump()
        payload.update({key: value for key, value in overrides.items() if value is not None})
        return build_config(payload, source="overrides")


def build_config(data: dict[str, Any], *, source: str) -> HashingConfig:
    """Validate ``data`` into a :class:`HashingConfig`.

    Args:
        data: Raw mapping of field names to values.
        source: Description of where ``data`` came from, used in errors.

    Returns:
        HashingConfig: Validated configuration.

    Raises:
        ConfigError: If ``data`` contains unknown keys or invalid values.
    """

    normalized = {str(key).replace("-", "_"): value for key, value in data.items()}
    try:
        return HashingConfig.model_validate(normalized)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration in {source}: {exc}") from exc


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "ErrorPolicy",
    "HashingConfig",
    "SymlinkPolicy",
    "build_config",
    "default_parallel_jobs",
]
