# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Textual encodings for raw digest bytes."""

from __future__ import annotations

import base64
from enum import Enum


class DigestEncoding(str, Enum):
    """Supported textual renderings of a digest."""

    HEX = "hex"
    HEX_UPPER = "hex-upper"
    BASE32 = "base32"
    BASE64 = "base64"


def encode_digest(digest: bytes, encoding: DigestEncoding | str = DigestEncoding.HEX) -> str:
    """Return ``digest`` rendered using ``encoding``.

    Args:
        digest: Raw digest bytes.
        encoding: Target encoding; lowercase hex by default.

    Returns:
        str: Encoded digest text.

    Raises:
        ValueError: If ``encoding`` does not name a supported encoding.
    """

    selected = DigestEncoding(encoding)
    if selected is DigestEncoding.HEX:
        return digest.hex()
    if selected is DigestEncoding.HEX_UPPER:
        return digest.hex().upper()
    if selected is DigestEncoding.BASE32:
        return base64.b32encode(digest).decode("ascii")
    return base64.b64encode(digest).decode("ascii")


__all__ = ["DigestEncoding", "encode_digest"]
