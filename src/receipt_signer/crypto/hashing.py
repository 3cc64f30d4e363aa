"""
Keccak-256 and EIP-191 message hashing.

A personal message is never signed directly. It is first wrapped as:

    "\\x19Ethereum Signed Message:\\n" || len(message) || message

and the keccak-256 digest of that is signed. The 0x19 lead byte cannot
start a valid RLP transaction, so a signed message can never be replayed
as a transaction signed by the same key.

References:
- EIP-191: https://eips.ethereum.org/EIPS/eip-191
"""

from __future__ import annotations

from typing import Final

from Crypto.Hash import keccak

SIGNED_MESSAGE_PREFIX: Final = b"\x19Ethereum Signed Message:\n"
"""Domain separator for personal messages per EIP-191 version 0x45."""

DIGEST_SIZE: Final = 32
"""Keccak-256 digest size in bytes."""


def keccak256(data: bytes) -> bytes:
    """Return the 32-byte keccak-256 digest of `data`."""
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()


def to_message_bytes(message: bytes | str) -> bytes:
    """Normalize a message to bytes. Text is encoded as UTF-8."""
    if isinstance(message, str):
        return message.encode("utf-8")
    return bytes(message)


def hash_message(message: bytes | str) -> bytes:
    """
    Compute the EIP-191 digest of a personal message.

    The length is the decimal byte length of the message, written as ASCII.

    Args:
        message: Raw message bytes, or text to be UTF-8 encoded.

    Returns:
        32-byte keccak-256 digest.
    """
    data = to_message_bytes(message)
    return keccak256(SIGNED_MESSAGE_PREFIX + str(len(data)).encode("ascii") + data)
