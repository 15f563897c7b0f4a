# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Digest algorithm capability and selector resolution.

Any object exposing ``update(bytes)`` and ``digest() -> bytes`` can act as an
accumulator. Callers hand the hashing functions either a zero-argument factory
producing such objects (``hashlib.sha256`` works as-is) or the name of a
``hashlib`` algorithm.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from functools import partial
from typing import Final, Protocol, runtime_checkable

from .errors import AlgorithmError

DEFAULT_ALGORITHM: Final[str] = "sha256"
_VARIABLE_LENGTH: Final[frozenset[str]] = frozenset({"shake_128", "shake_256"})


@runtime_checkable
class DigestAlgorithm(Protocol):
    """Accumulator ingesting byte chunks and finalising to a fixed-size digest."""

    def update(self, data: bytes, /) -> None:
        """Feed ``data`` into the accumulator."""

    def digest(self) -> bytes:
        """Return the digest of everything fed so far."""


AlgorithmFactory = Callable[[], DigestAlgorithm]
AlgorithmSelector = str | AlgorithmFactory


def available_algorithms() -> tuple[str, ...]:
    """Return the sorted ``hashlib`` names accepted by :func:`resolve_algorithm`.

    Returns:
        tuple[str, ...]: Fixed-size algorithm names available on this interpreter.
    """

    names = {name.lower() for name in hashlib.algorithms_available}
    return tuple(sorted(name for name in names if name not in _VARIABLE_LENGTH))


def resolve_algorithm(selector: AlgorithmSelector) -> AlgorithmFactory:
    """Return a factory producing fresh accumulators for ``selector``.

    Args:
        selector: ``hashlib`` algorithm name or a zero-argument factory.

    Returns:
        AlgorithmFactory: Callable returning a new accumulator per invocation.

    Raises:
        AlgorithmError: If the name is unknown, the algorithm has a variable
            output length, or ``selector`` is neither a name nor a callable.
    """

    if isinstance(selector, str):
        return _factory_for_name(selector)
    if callable(selector):
        _check_factory(selector)
        return selector
    raise AlgorithmError(f"unsupported algorithm selector: {selector!r}")


def _check_factory(factory: AlgorithmFactory) -> None:
    """Verify that ``factory`` builds accumulators with a fixed-size digest.

    A throwaway accumulator is built and finalised without input. Callables such
    as ``hashlib.shake_128`` fail here because their ``digest`` needs a length.

    Args:
        factory: Candidate accumulator factory.

    Raises:
        AlgorithmError: If the accumulator cannot be built or finalised, or its
            digest is not ``bytes``.
    """

    label = getattr(factory, "__name__", repr(factory))
    try:
        digest = factory().digest()
    except Exception as exc:
        raise AlgorithmError(f"{label} cannot produce a fixed-size digest: {exc}") from exc
    if not isinstance(digest, bytes):
        raise AlgorithmError(f"{label} digest() returned {type(digest).__name__}, expected bytes")


def _factory_for_name(name: str) -> AlgorithmFactory:
    """Return the ``hashlib`` factory registered under ``name``.

    Args:
        name: Algorithm name; case and ``-``/``_`` spelling are normalised.

    Returns:
        AlgorithmFactory: ``hashlib`` constructor or a ``hashlib.new`` partial.

    Raises:
        AlgorithmError: If the name is unknown or has a variable output length.
    """

    lowered = name.strip().lower()
    # ``sha3-256`` and ``sha3_256`` both name the same algorithm.
    for candidate in dict.fromkeys((lowered, lowered.replace("-", "_"))):
        if candidate in _VARIABLE_LENGTH:
            raise AlgorithmError(f"{name} has a variable output length; choose a fixed-size algorithm")
        try:
            hashlib.new(candidate)
        except ValueError:
            continue
        constructor = getattr(hashlib, candidate, None)
        if callable(constructor):
            return constructor
        return partial(hashlib.new, candidate)
    raise AlgorithmError(f"unknown hash algorithm: {name}")


__all__ = [
    "DEFAULT_ALGORITHM",
    "AlgorithmFactory",
    "AlgorithmSelector",
    "DigestAlgorithm",
    "available_algorithms",
    "resolve_algorithm",
]
