"""
Signature verification by address recovery.

Verification never needs the signer's public key. The public point is
recovered from the signature and the message digest, hashed to an address,
and compared with the address the caller expects.
"""

from __future__ import annotations

import logging

from .address import Address, address_from_point
from .crypto import hash_message, recover_public_point
from .exceptions import SignatureMismatchError, VerificationError
from .keystore import KeyStore
from .signature import Signature

logger = logging.getLogger(__name__)


class VerificationService:
    """Checks signatures against an expected address."""

    def __init__(self, keystore: KeyStore) -> None:
        self._keystore = keystore

    @staticmethod
    def _coerce_signature(signature: Signature | str) -> Signature:
        if isinstance(signature, Signature):
            return signature
        return Signature.decode(signature)

    def recover(self, message: bytes | str, signature: Signature | str) -> Address:
        """
        Recover the address that signed a message.

        Args:
            message: The signed message.
            signature: A Signature or its hex encoding.

        Returns:
            The signer's address.

        Raises:
            InvalidEncodingError: If the hex is malformed or not 65 bytes.
            InvalidSignatureFormatError: If r, s or v are out of range.
            SignatureMismatchError: If no public key can be recovered.
        """
        r, s, parity = self._coerce_signature(signature).components()

        point = recover_public_point(hash_message(message), r, s, parity)
        if point is None:
            raise SignatureMismatchError()
        return address_from_point(point)

    def verify(
        self,
        message: bytes | str,
        signature: Signature | str,
        expected_address: Address | str | None = None,
    ) -> None:
        """
        Verify that `signature` over `message` was made by `expected_address`.

        Args:
            message: The signed message.
            signature: A Signature or its hex encoding.
            expected_address: The claimed signer. Defaults to this KeyStore's
                own address.

        Raises:
            InvalidEncodingError: If the hex is malformed or not 65 bytes.
            InvalidSignatureFormatError: If r, s or v are out of range.
            SignatureMismatchError: If the signature recovers to another address.
        """
        if expected_address is None:
            expected = self._keystore.address()
        elif isinstance(expected_address, Address):
            expected = expected_address
        else:
            expected = Address.decode(expected_address)

        try:
            recovered = self.recover(message, signature)
        except SignatureMismatchError as e:
            raise SignatureMismatchError(expected=expected) from e

        if recovered != expected:
            logger.debug("Signature recovered to %s, expected %s", recovered, expected)
            raise SignatureMismatchError(expected=expected, recovered=recovered)

    def is_valid(
        self,
        message: bytes | str,
        signature: Signature | str,
        expected_address: Address | str | None = None,
    ) -> bool:
        """Return True if `verify` passes, False on any verification error."""
        try:
            self.verify(message, signature, expected_address)
        except VerificationError:
            return False
        return True
