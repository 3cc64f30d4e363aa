"""
Signing identity for receipt services.

A single secp256k1 keypair is held for the process lifetime. Messages are
signed with EIP-191 domain separation and verified by recovering the signer's
address from the signature.
"""

from .address import Address, address_from_public_key, to_checksum_address
from .config import SignerConfig
from .exceptions import (
    InvalidEncodingError,
    InvalidSignatureFormatError,
    KeyFormatError,
    SignatureCreationError,
    SignatureMismatchError,
    SignerError,
    VerificationError,
)
from .keystore import KeyStore
from .signature import Signature
from .signing import SigningService
from .verification import VerificationService

__version__ = "0.1.0"

__all__ = [
    # Components
    "KeyStore",
    "SigningService",
    "VerificationService",
    "SignerConfig",
    # Value types
    "Address",
    "Signature",
    "address_from_public_key",
    "to_checksum_address",
    # Exceptions
    "SignerError",
    "KeyFormatError",
    "SignatureCreationError",
    "VerificationError",
    "InvalidEncodingError",
    "InvalidSignatureFormatError",
    "SignatureMismatchError",
]
