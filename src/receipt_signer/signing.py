"""
Message signing.

    digest    = keccak256("\\x19Ethereum Signed Message:\\n" || len(m) || m)
    (r, s)    = ECDSA-secp256k1(private_key, digest)
    s         = min(s, n - s)
    v         = 27 + parity(R.y)

The key backend does not report R, so the parity is found by recovering the
public key for both candidates and keeping the one that matches.
"""

from __future__ import annotations

import logging

from cryptography.exceptions import UnsupportedAlgorithm

from .crypto import HALF_N, N, hash_message, recover_public_point
from .exceptions import SignatureCreationError
from .keystore import KeyStore
from .signature import LEGACY_V_OFFSET, Signature

logger = logging.getLogger(__name__)


class SigningService:
    """Signs messages with the KeyStore's private key."""

    def __init__(self, keystore: KeyStore, *, deterministic: bool = False) -> None:
        """
        Args:
            keystore: Source of the signing key.
            deterministic: Use RFC 6979 nonces. The default draws a random
                nonce per call, so signing the same message twice gives
                different (equally valid) signatures.
        """
        self._keystore = keystore
        self._deterministic = deterministic

    @property
    def keystore(self) -> KeyStore:
        return self._keystore

    def sign(self, message: bytes | str) -> Signature:
        """
        Sign a message.

        Args:
            message: Raw bytes, or text to be UTF-8 encoded.

        Returns:
            The 65-byte recoverable signature.

        Raises:
            SignatureCreationError: If the signing primitive fails.
        """
        digest = hash_message(message)

        try:
            r, s = self._keystore.sign_digest(digest, deterministic=self._deterministic)
        except (ValueError, UnsupportedAlgorithm) as e:
            logger.error("Signing primitive failed: %s", e)
            raise SignatureCreationError(f"Signing primitive failed: {e}") from e

        if s > HALF_N:
            s = N - s

        for parity in (0, 1):
            if recover_public_point(digest, r, s, parity) == self._keystore.public_point:
                return Signature.from_components(r, s, LEGACY_V_OFFSET + parity)

        logger.error("No recovery id reproduces the signing key")
        raise SignatureCreationError("No recovery id reproduces the signing key")

    def sign_hex(self, message: bytes | str) -> str:
        """Sign a message and return the encoded signature."""
        return self.sign(message).encode()
