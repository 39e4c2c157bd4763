"""IdentifierCodec: base64url identifiers <-> ObjectId keys."""

from __future__ import annotations

from bson import ObjectId

from .identifier import from_hexadecimal, to_hexadecimal

SUPPORTED_LENGTHS = (4, 8, 12, 16)

_KEY_HEX_LENGTH = 24


class IdentifierCodec:
    """
    Map fixed-length identifiers onto 12-byte ObjectId keys.

    ``length`` counts base64url characters, so an identifier carries
    ``length * 3 / 2`` hexadecimal digits. Shorter identifiers are left-padded
    with zeros into the key and only the trailing digits are read back.
    """

    def __init__(self, length: int = 16) -> None:
        if length not in SUPPORTED_LENGTHS:
            raise ValueError(
                f"Identifier length must be one of {SUPPORTED_LENGTHS}, got {length!r}"
            )
        self.length = length
        self._hex_length = length * 3 // 2

    def encode(self, value: str) -> ObjectId:
        """Convert an identifier into its ObjectId key."""
        digits = to_hexadecimal(value)
        return ObjectId(digits.rjust(_KEY_HEX_LENGTH, "0")[:_KEY_HEX_LENGTH])

    def decode(self, key: ObjectId) -> str:
        """Convert an ObjectId key back into an identifier."""
        return from_hexadecimal(str(key)[_KEY_HEX_LENGTH - self._hex_length :])
