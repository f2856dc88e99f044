from __future__ import annotations

import base64
import hashlib
from enum import Enum

from datamanager_util.common.errors import EmptyInputError


class Encoding(str, Enum):
    HEX = "hex"
    BASE64 = "base64"


def _require_bytes(value: bytes) -> bytes:
    if not isinstance(value, (bytes, bytearray)):
        raise TypeError(f"expected bytes, got {type(value).__name__}")
    if len(value) == 0:
        raise EmptyInputError("Bytes empty.")
    return bytes(value)


def hash_string(value: str) -> bytes:
    """Return the raw SHA256 digest (32 bytes) of the trimmed UTF-8 string."""
    if not isinstance(value, str):
        raise TypeError(f"expected str, got {type(value).__name__}")
    trimmed = value.strip()
    if not trimmed:
        raise EmptyInputError("String is blank or empty.")
    return hashlib.sha256(trimmed.encode("utf-8")).digest()


def hex_encode(data: bytes) -> str:
    return _require_bytes(data).hex()


def base64_encode(data: bytes) -> str:
    return base64.b64encode(_require_bytes(data)).decode("ascii")


def encode_digest(data: bytes, encoding: Encoding | str) -> str:
    if Encoding(encoding) is Encoding.HEX:
        return hex_encode(data)
    return base64_encode(data)


def hash_and_encode(normalized: str, encoding: Encoding | str) -> str:
    """Hash an already-normalized value and render the digest."""
    return encode_digest(hash_string(normalized), encoding)


__all__ = [
    "Encoding",
    "base64_encode",
    "encode_digest",
    "hash_and_encode",
    "hash_string",
    "hex_encode",
]
