"""
Process-lifetime custody of the signing key.

The KeyStore is created once at startup, either from a supplied hex secret
or from a freshly drawn scalar, and is read-only afterwards. The private key
never leaves this module: callers get the address, the public key, and
digest signatures, nothing else.
"""

from __future__ import annotations

import logging
import random
import secrets

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed, decode_dss_signature

from .address import Address, address_from_point
from .config import SignerConfig
from .crypto.secp256k1 import (
    N,
    SCALAR_SIZE,
    Point,
    encode_uncompressed,
    is_valid_scalar,
    public_point,
)
from .exceptions import KeyFormatError
from .types import decode_hex, strip_hex_prefix

logger = logging.getLogger(__name__)


def parse_private_key(secret: str) -> int:
    """
    Parse a hex-encoded private scalar.

    Args:
        secret: 64 hex digits, optionally prefixed with '0x'.

    Returns:
        The scalar as an integer in [1, n-1].

    Raises:
        KeyFormatError: If the text is not hex, not 32 bytes, or out of range.
    """
    try:
        raw = decode_hex(strip_hex_prefix(secret.strip()))
    except ValueError as e:
        raise KeyFormatError("not a valid hex string") from e

    if len(raw) != SCALAR_SIZE:
        raise KeyFormatError(f"expected {SCALAR_SIZE} bytes, got {len(raw)}")

    scalar = int.from_bytes(raw, "big")
    if not is_valid_scalar(scalar):
        raise KeyFormatError("scalar is outside the secp256k1 group order")
    return scalar


class KeyStore:
    """
    Holds one secp256k1 keypair and its cached address.

    Instances are immutable and safe to share between threads and tasks.
    """

    __slots__ = ("_private_key", "_public_point", "_address")

    def __init__(self, private_key: ec.EllipticCurvePrivateKey) -> None:
        if not isinstance(private_key.curve, ec.SECP256K1):
            raise KeyFormatError(f"expected a secp256k1 key, got {private_key.curve.name}")

        self._private_key = private_key
        self._public_point = public_point(private_key)
        self._address = address_from_point(self._public_point)

    @classmethod
    def create(cls, secret: str | None = None, rng: random.Random | None = None) -> KeyStore:
        """
        Create the KeyStore from a secret, or generate a new key.

        Args:
            secret: Hex private key, with or without '0x'. None generates a key.
            rng: Source for key generation. Defaults to the operating
                system's CSPRNG. Ignored when `secret` is given.

        Returns:
            A ready KeyStore.

        Raises:
            KeyFormatError: If `secret` is malformed.
        """
        if secret is not None:
            scalar = parse_private_key(secret)
            keystore = cls(ec.derive_private_key(scalar, ec.SECP256K1()))
            logger.info(
                "Wallet created from the provided signing key, address=%s", keystore.address()
            )
            return keystore

        source = rng if rng is not None else secrets.SystemRandom()
        scalar = source.randrange(1, N)
        keystore = cls(ec.derive_private_key(scalar, ec.SECP256K1()))
        logger.warning(
            "Random wallet created. Make sure to provide a signing key in prod! address=%s",
            keystore.address(),
        )
        return keystore

    @classmethod
    def from_config(cls, config: SignerConfig, rng: random.Random | None = None) -> KeyStore:
        """Create the KeyStore from configuration."""
        return cls.create(config.signing_key, rng=rng)

    def address(self) -> Address:
        """Return the cached address of this keypair."""
        return self._address

    @property
    def public_point(self) -> Point:
        """The affine public point."""
        return self._public_point

    def public_key_bytes(self) -> bytes:
        """Return the 65-byte uncompressed public key (0x04 || x || y)."""
        return encode_uncompressed(self._public_point)

    def sign_digest(self, digest: bytes, *, deterministic: bool = False) -> tuple[int, int]:
        """
        Sign a 32-byte digest with ECDSA.

        Args:
            digest: The already-hashed message.
            deterministic: Use RFC 6979 nonces instead of random ones.

        Returns:
            The (r, s) signature components. `s` is not normalized.
        """
        # Prehashed carries only the digest length. The digest is keccak-256,
        # which has the same size as SHA-256.
        der_signature = self._private_key.sign(
            digest,
            ec.ECDSA(Prehashed(hashes.SHA256()), deterministic_signing=deterministic),
        )
        return decode_dss_signature(der_signature)

    def __repr__(self) -> str:
        return f"KeyStore(address={self._address})"
