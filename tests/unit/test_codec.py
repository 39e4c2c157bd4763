"""Unit tests for IdentifierCodec."""

from __future__ import annotations

import pytest
from bson import ObjectId

from mongo_docstore.codec import SUPPORTED_LENGTHS, IdentifierCodec
from mongo_docstore.identifier import generate


@pytest.mark.parametrize("length", SUPPORTED_LENGTHS)
def test_decode_encode_roundtrip(length: int) -> None:
    codec = IdentifierCodec(length)
    for _ in range(20):
        value = generate(length)
        assert codec.decode(codec.encode(value)) == value


def test_encode_left_pads_short_identifier() -> None:
    codec = IdentifierCodec(4)
    key = codec.encode("BTk")  # hex 0539
    assert isinstance(key, ObjectId)
    assert str(key) == "0" * 20 + "0539"


def test_full_length_identifier_uses_whole_key() -> None:
    codec = IdentifierCodec(16)
    key = ObjectId()
    value = codec.decode(key)
    assert len(value) == 16
    assert codec.encode(value) == key


def test_decode_reads_trailing_digits_only() -> None:
    codec = IdentifierCodec(4)
    key = ObjectId("ffffffffffffffffff000000")
    assert codec.decode(key) == "AAAA"


def test_default_length_is_sixteen() -> None:
    assert IdentifierCodec().length == 16


@pytest.mark.parametrize("length", [0, 3, 6, 24])
def test_rejects_unsupported_length(length: int) -> None:
    with pytest.raises(ValueError):
        IdentifierCodec(length)
