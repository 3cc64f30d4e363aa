"""
Curve and hash primitives.

- secp256k1 point arithmetic and public key recovery
- keccak-256 and the EIP-191 personal message digest
"""

from .hashing import SIGNED_MESSAGE_PREFIX, hash_message, keccak256
from .secp256k1 import (
    HALF_N,
    N,
    Point,
    encode_uncompressed,
    is_valid_scalar,
    public_point,
    recover_public_point,
)

__all__ = [
    "HALF_N",
    "N",
    "Point",
    "SIGNED_MESSAGE_PREFIX",
    "encode_uncompressed",
    "hash_message",
    "is_valid_scalar",
    "keccak256",
    "public_point",
    "recover_public_point",
]
