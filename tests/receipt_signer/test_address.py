"""Tests for addresses and EIP-55 checksum encoding."""

import pytest
from pydantic import BaseModel, ValidationError

from receipt_signer import Address, address_from_public_key, to_checksum_address
from receipt_signer.address import address_from_point
from receipt_signer.crypto.secp256k1 import G, encode_uncompressed
from tests.receipt_signer.helpers import TEST_ADDRESS

def _flip_first_letter(address: str) -> str:
    """Swap the case of the first hex letter of a checksum address."""
    body = address[2:]
    index = next(i for i, c in enumerate(body) if c.isalpha())
    return "0x" + body[:index] + body[index].swapcase() + body[index + 1 :]


EIP55_VECTORS = [
    "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
    "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
    "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
    "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
]
"""Reference vectors from EIP-55."""


class TestChecksumEncoding:
    """Tests for to_checksum_address and Address.encode."""

    @pytest.mark.parametrize("checksummed", EIP55_VECTORS)
    def test_eip55_vectors(self, checksummed: str) -> None:
        """Lowercase input re-encodes to the reference casing."""
        raw = bytes.fromhex(checksummed[2:].lower())
        assert to_checksum_address(raw) == checksummed

    @pytest.mark.parametrize("checksummed", EIP55_VECTORS)
    def test_encode_matches_function(self, checksummed: str) -> None:
        """Address.encode uses the same encoding."""
        address = Address(bytes.fromhex(checksummed[2:]))
        assert address.encode() == checksummed
        assert str(address) == checksummed

    def test_wrong_length_rejected(self) -> None:
        """Only 20-byte inputs have a checksum form."""
        with pytest.raises(ValueError, match="20 bytes"):
            to_checksum_address(b"\x00" * 19)


class TestAddressDecode:
    """Tests for Address.decode."""

    @pytest.mark.parametrize("checksummed", EIP55_VECTORS)
    def test_checksum_roundtrip(self, checksummed: str) -> None:
        """A valid checksum address decodes and re-encodes unchanged."""
        assert Address.decode(checksummed).encode() == checksummed

    def test_lowercase_accepted(self) -> None:
        """All-lowercase carries no checksum and is accepted."""
        lower = TEST_ADDRESS.lower()
        assert Address.decode(lower) == Address.decode(TEST_ADDRESS)

    def test_uppercase_accepted(self) -> None:
        """All-uppercase carries no checksum and is accepted."""
        upper = "0x" + TEST_ADDRESS[2:].upper()
        assert Address.decode(upper) == Address.decode(TEST_ADDRESS)

    def test_without_prefix(self) -> None:
        """The 0x prefix is optional."""
        assert Address.decode(TEST_ADDRESS[2:]) == Address.decode(TEST_ADDRESS)

    def test_bad_checksum_rejected(self) -> None:
        """Mixed case with a wrong letter casing is rejected."""
        with pytest.raises(ValueError, match="checksum"):
            Address.decode(_flip_first_letter(TEST_ADDRESS))

    @pytest.mark.parametrize(
        "text",
        [
            "0x1234",
            "0x" + "zz" * 20,
            "0x" + "00" * 21,
            "",
        ],
    )
    def test_malformed_rejected(self, text: str) -> None:
        """Non-hex or wrong-length text is rejected."""
        with pytest.raises(ValueError):
            Address.decode(text)


class TestAddressDerivation:
    """Tests for deriving addresses from public keys."""

    def test_uncompressed_and_raw_agree(self) -> None:
        """The 0x04 marker is optional."""
        encoded = encode_uncompressed(G)
        assert address_from_public_key(encoded) == address_from_public_key(encoded[1:])

    def test_point_and_bytes_agree(self) -> None:
        """Deriving from a point matches deriving from its encoding."""
        assert address_from_point(G) == address_from_public_key(encode_uncompressed(G))

    def test_deterministic(self) -> None:
        """Derivation is a pure function of the public key."""
        assert address_from_point(G) == address_from_point(G)

    def test_invalid_length_rejected(self) -> None:
        """Compressed keys are not accepted."""
        with pytest.raises(ValueError, match="public key length"):
            address_from_public_key(b"\x02" + b"\x11" * 32)


class TestAddressValueType:
    """Tests for Address as a value type."""

    def test_length_enforced(self) -> None:
        """Addresses are exactly 20 bytes."""
        with pytest.raises(ValueError, match="exactly 20 bytes"):
            Address(b"\x00" * 32)

    def test_repr_shows_checksum(self) -> None:
        """repr uses the checksum form."""
        assert repr(Address.decode(TEST_ADDRESS)) == f"Address({TEST_ADDRESS})"

    def test_hashable(self) -> None:
        """Equal addresses hash equally."""
        assert len({Address.decode(TEST_ADDRESS), Address.decode(TEST_ADDRESS.lower())}) == 1

    def test_pydantic_serializes_checksum(self) -> None:
        """As a model field, an address serializes to its checksum string."""

        class Receipt(BaseModel):
            signer: Address

        receipt = Receipt(signer=TEST_ADDRESS.lower())

        assert isinstance(receipt.signer, Address)
        assert receipt.model_dump(mode="json") == {"signer": TEST_ADDRESS}
        assert receipt.model_dump_json() == f'{{"signer":"{TEST_ADDRESS}"}}'

    def test_pydantic_rejects_bad_checksum(self) -> None:
        """Model validation surfaces checksum errors."""
        class Receipt(BaseModel):
            signer: Address

        with pytest.raises(ValidationError):
            Receipt(signer=_flip_first_letter(TEST_ADDRESS))
