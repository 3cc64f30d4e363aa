"""Exception hierarchy for key custody, signing and verification."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .address import Address


class SignerError(Exception):
    """
    Base exception for all signer errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class KeyFormatError(SignerError, ValueError):
    """
    Raised when a supplied signing key cannot be used.

    Raised at startup only. A service must not run without a usable key.

    Attributes:
        detail: What was wrong with the key. Never contains key material.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid signing key: {detail}")


class SignatureCreationError(SignerError):
    """Raised when the underlying signing primitive fails."""


class VerificationError(SignerError):
    """Base class for errors returned by signature verification."""


class InvalidEncodingError(VerificationError, ValueError):
    """Raised when a signature is not hex or does not decode to 65 bytes."""


class InvalidSignatureFormatError(VerificationError, ValueError):
    """Raised when a 65-byte signature holds out-of-range components."""


class SignatureMismatchError(VerificationError):
    """
    Raised when a signature does not recover to the expected address.

    Attributes:
        expected: The address the caller expected, if one was given.
        recovered: The address the signature recovered to, or None if
            no public key could be recovered at all.
    """

    def __init__(
        self,
        *,
        expected: Address | None = None,
        recovered: Address | None = None,
    ) -> None:
        self.expected = expected
        self.recovered = recovered

        if recovered is None:
            msg = "Signature does not recover to a public key"
        elif expected is None:
            msg = f"Signature recovers to {recovered}"
        else:
            msg = f"Signature recovers to {recovered}, expected {expected}"

        super().__init__(msg)
