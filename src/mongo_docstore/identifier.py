"""Base64url identifiers and their hexadecimal (binary) form."""

from __future__ import annotations

import base64
import binascii
import re
import secrets
from typing import Protocol

from .exceptions import IdentifierError

_ALPHABET = re.compile(r"^[A-Za-z0-9_-]*$")


def from_hexadecimal(value: str) -> str:
    """Encode hexadecimal digits as an unpadded base64url identifier."""
    if len(value) % 2:
        value = "0" + value
    try:
        raw = bytes.fromhex(value)
    except ValueError as e:
        raise IdentifierError(f"Not a hexadecimal value: {value!r}") from e
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def to_hexadecimal(identifier: str) -> str:
    """Decode an unpadded base64url identifier to hexadecimal digits."""
    if not _ALPHABET.match(identifier) or len(identifier) % 4 == 1:
        raise IdentifierError(f"Malformed identifier: {identifier!r}")
    padded = identifier + "=" * (-len(identifier) % 4)
    try:
        return base64.urlsafe_b64decode(padded).hex()
    except (binascii.Error, ValueError) as e:
        raise IdentifierError(f"Malformed identifier: {identifier!r}") from e


def _check_length(length: int) -> None:
    if length <= 0 or length % 4:
        raise ValueError(
            f"Identifier length must be a positive multiple of 4: {length}"
        )


def generate(length: int = 16) -> str:
    """Mint a random identifier of ``length`` characters (a multiple of 4)."""
    _check_length(length)
    return from_hexadecimal(secrets.token_bytes(length * 3 // 4).hex())


class IdentifierGenerator(Protocol):
    """
    Protocol for identifier generation strategies.
    Lets callers mint identifiers of a collection's configured length.
    """

    def next_id(self) -> str:
        """Generates the next unique identifier."""
        ...


class Base64IdentifierGenerator(IdentifierGenerator):
    """Random base64url identifiers of a fixed length."""

    def __init__(self, length: int = 16) -> None:
        _check_length(length)
        self.length = length

    def next_id(self) -> str:
        return generate(self.length)
