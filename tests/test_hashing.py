from __future__ import annotations

import base64
import re

import pytest

from datamanager_util.common.errors import EmptyInputError
from datamanager_util.common.hashing import (
    Encoding,
    base64_encode,
    encode_digest,
    hash_and_encode,
    hash_string,
    hex_encode,
)


@pytest.mark.parametrize(
    ("value", "expected_hex"),
    [
        ("alexz@example.com", "509e933019bb285a134a9334b8bb679dff79d0ce023d529af4bd744d47b4fd8a"),
        ("+18005550100", "fb4f73a6ec5fdb7077d564cdd22c3554b43ce49168550c3b12c547b78c517b30"),
        ("abc", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
        ("  abc\n", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
    ],
)
def test_hash_string_returns_raw_digest(value: str, expected_hex: str) -> None:
    digest = hash_string(value)
    assert isinstance(digest, bytes)
    assert len(digest) == 32
    assert digest == bytes.fromhex(expected_hex)


@pytest.mark.parametrize("value", ["", " ", "   "])
def test_hash_string_rejects_blank(value: str) -> None:
    with pytest.raises(EmptyInputError):
        hash_string(value)


def test_hash_string_rejects_none() -> None:
    with pytest.raises(TypeError):
        hash_string(None)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"acK123", "61634b313233"),
        (b"999_XYZ", "3939395f58595a"),
    ],
)
def test_hex_encode(data: bytes, expected: str) -> None:
    assert hex_encode(data) == expected


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"acK123", "YWNLMTIz"),
        (b"999_XYZ", "OTk5X1hZWg=="),
    ],
)
def test_base64_encode(data: bytes, expected: str) -> None:
    encoded = base64_encode(data)
    assert encoded == expected
    assert base64.b64decode(encoded) == data


@pytest.mark.parametrize("encoder", [hex_encode, base64_encode])
def test_encoders_reject_empty_bytes(encoder) -> None:  # noqa: ANN001
    with pytest.raises(EmptyInputError):
        encoder(b"")


@pytest.mark.parametrize("encoder", [hex_encode, base64_encode])
def test_encoders_reject_none(encoder) -> None:  # noqa: ANN001
    with pytest.raises(TypeError):
        encoder(None)


def test_hex_of_hash_is_64_lowercase_chars() -> None:
    for value in ["a", "quinn", "+441134960987", "ünïcödé"]:
        assert re.fullmatch(r"[0-9a-f]{64}", hex_encode(hash_string(value)))


def test_encode_digest_dispatches_on_encoding() -> None:
    digest = hash_string("abc")
    assert encode_digest(digest, Encoding.HEX) == digest.hex()
    assert encode_digest(digest, Encoding.BASE64) == base64.b64encode(digest).decode("ascii")
    assert encode_digest(digest, "base64") == encode_digest(digest, Encoding.BASE64)


def test_encode_digest_rejects_unknown_encoding() -> None:
    with pytest.raises(ValueError):
        encode_digest(b"\x00", "base32")


def test_hash_and_encode() -> None:
    assert (
        hash_and_encode("alexz@example.com", Encoding.BASE64)
        == "UJ6TMBm7KFoTSpM0uLtnnf950M4CPVKa9L10TUe0/Yo="
    )
