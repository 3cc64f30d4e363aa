"""
Recoverable secp256k1 signatures.

A signature is 65 bytes:

    r (32 bytes, big-endian) || s (32 bytes, big-endian) || v (1 byte)

`v` carries the parity of the ephemeral point's y-coordinate, so the signer's
public key can be recovered from the signature and digest alone. Signatures
produced here use v = 27 + parity. When reading, a bare parity (0/1) is also
accepted. EIP-155 values are rejected.

The text form is 130 lowercase hex digits with no '0x' prefix.
"""

from __future__ import annotations

from typing import ClassVar

from typing_extensions import Self

from .crypto.secp256k1 import SCALAR_SIZE, is_valid_scalar
from .exceptions import InvalidEncodingError, InvalidSignatureFormatError
from .types import FixedBytes, decode_hex, strip_hex_prefix

SIGNATURE_SIZE = 65
"""Encoded signature size in bytes."""

LEGACY_V_OFFSET = 27
"""Offset added to the parity to form the legacy v byte."""


class Signature(FixedBytes):
    """65-byte recoverable signature (r || s || v)."""

    LENGTH: ClassVar[int] = SIGNATURE_SIZE

    @classmethod
    def from_components(cls, r: int, s: int, v: int) -> Self:
        """Pack signature components into the 65-byte layout."""
        return cls(r.to_bytes(SCALAR_SIZE, "big") + s.to_bytes(SCALAR_SIZE, "big") + bytes([v]))

    def encode(self) -> str:
        """Return the signature as lowercase hex without a prefix."""
        return self.hex()

    @classmethod
    def decode(cls, text: str) -> Self:  # type: ignore[override]
        """
        Parse a hex-encoded signature.

        A leading '0x' is tolerated. Only the encoding and length are checked
        here; component ranges are checked by `components`.

        Raises:
            InvalidEncodingError: If the text is not hex or not exactly 65 bytes.
        """
        try:
            raw = decode_hex(strip_hex_prefix(text.strip()))
        except ValueError as e:
            raise InvalidEncodingError(f"Signature is not a valid hex string: {e}") from e

        if len(raw) != cls.LENGTH:
            raise InvalidEncodingError(
                f"Signature must be {cls.LENGTH} bytes, got {len(raw)}"
            )
        return cls(raw)

    @property
    def r(self) -> int:
        """The x-coordinate component."""
        return int.from_bytes(self[:SCALAR_SIZE], "big")

    @property
    def s(self) -> int:
        """The proof component."""
        return int.from_bytes(self[SCALAR_SIZE : 2 * SCALAR_SIZE], "big")

    @property
    def v(self) -> int:
        """The raw recovery byte."""
        return self[-1]

    def components(self) -> tuple[int, int, int]:
        """
        Return (r, s, parity) after range checks.

        Raises:
            InvalidSignatureFormatError: If r or s is outside [1, n-1], or v is
                not a recognized recovery value.
        """
        r, s, v = self.r, self.s, self.v

        if not is_valid_scalar(r):
            raise InvalidSignatureFormatError("Signature r component is out of range")
        if not is_valid_scalar(s):
            raise InvalidSignatureFormatError("Signature s component is out of range")

        if v in (0, 1):
            parity = v
        elif v in (LEGACY_V_OFFSET, LEGACY_V_OFFSET + 1):
            parity = v - LEGACY_V_OFFSET
        else:
            raise InvalidSignatureFormatError(f"Invalid recovery id: {v}")

        return r, s, parity
