"""
Account addresses derived from secp256k1 public keys.

An address is the last 20 bytes of the keccak-256 hash of the 64-byte
uncompressed public point (x || y, without the 0x04 marker).

Its text form is the EIP-55 checksum encoding: each hex letter is upper-cased
when the matching nibble of keccak256(lowercase_hex) is 8 or more.

References:
- EIP-55: https://eips.ethereum.org/EIPS/eip-55
"""

from __future__ import annotations

from typing import ClassVar

from typing_extensions import Self

from .crypto import encode_uncompressed, keccak256
from .crypto.secp256k1 import UNCOMPRESSED_PUBKEY_SIZE, Point
from .types import FixedBytes, decode_hex, strip_hex_prefix

ADDRESS_SIZE = 20
"""Address size in bytes."""


def to_checksum_address(raw: bytes) -> str:
    """
    Encode 20 raw address bytes in EIP-55 checksum form.

    Args:
        raw: 20-byte address.

    Returns:
        '0x' followed by 40 mixed-case hex digits.
    """
    if len(raw) != ADDRESS_SIZE:
        raise ValueError(f"Address must be {ADDRESS_SIZE} bytes, got {len(raw)}")

    lower = raw.hex()
    digest = keccak256(lower.encode("ascii")).hex()
    return "0x" + "".join(
        char.upper() if int(nibble, 16) >= 8 else char for char, nibble in zip(lower, digest)
    )


class Address(FixedBytes):
    """20-byte account address."""

    LENGTH: ClassVar[int] = ADDRESS_SIZE

    def encode(self) -> str:
        """Return the EIP-55 checksum form."""
        return to_checksum_address(self)

    @classmethod
    def decode(cls, text: str) -> Self:  # type: ignore[override]
        """
        Parse an address from text.

        All-lowercase and all-uppercase hex carry no checksum and are accepted
        as-is. Mixed case must match the EIP-55 checksum exactly.

        Raises:
            ValueError: If the text is not 20 bytes of hex or the checksum fails.
        """
        body = strip_hex_prefix(text.strip())
        address = cls(decode_hex(body))

        if body not in (body.lower(), body.upper()) and address.encode()[2:] != body:
            raise ValueError(f"Address checksum mismatch: {text}")
        return address

    def __str__(self) -> str:
        return self.encode()


def address_from_public_key(public_key: bytes) -> Address:
    """
    Derive the address of an uncompressed public key.

    Args:
        public_key: 65-byte uncompressed key (0x04 || x || y) or the
            64-byte x || y concatenation.

    Returns:
        The 20-byte address.
    """
    if len(public_key) == UNCOMPRESSED_PUBKEY_SIZE and public_key[0] == 0x04:
        public_key = public_key[1:]
    if len(public_key) != 64:
        raise ValueError(f"Invalid uncompressed public key length: {len(public_key)}")

    return Address(keccak256(public_key)[-ADDRESS_SIZE:])


def address_from_point(point: Point) -> Address:
    """Derive the address of an affine public point."""
    return address_from_public_key(encode_uncompressed(point))
