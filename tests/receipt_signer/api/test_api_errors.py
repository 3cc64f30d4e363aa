"""Tests for the error-to-response mapping."""

import json

import pytest

from receipt_signer import (
    InvalidEncodingError,
    InvalidSignatureFormatError,
    KeyFormatError,
    SignatureCreationError,
    SignatureMismatchError,
    SignerError,
)
from receipt_signer.api import ERROR_RESPONSES, error_response, error_status_and_body


class TestErrorStatusAndBody:
    """Tests for the mapping table lookup."""

    @pytest.mark.parametrize(
        ("error", "status", "message"),
        [
            (SignatureCreationError("boom"), 500, "couldn't sign the receipt"),
            (InvalidEncodingError("bad hex"), 400, "signature is not a valid hex string"),
            (InvalidSignatureFormatError("bad r"), 400, "couldn't create signature from string"),
            (SignatureMismatchError(), 400, "couldn't create signature from string"),
        ],
    )
    def test_mapped_errors(self, error: SignerError, status: int, message: str) -> None:
        """Each call-time error kind has a fixed status and message."""
        assert error_status_and_body(error) == (status, {"error": message})

    def test_internal_detail_not_exposed(self) -> None:
        """The client message does not include the internal detail."""
        _, body = error_status_and_body(InvalidEncodingError("odd number of hex digits: 3"))
        assert "odd" not in body["error"]

    def test_subclass_resolves_to_parent(self) -> None:
        """Subclasses inherit their parent's mapping."""

        class TruncatedSignature(InvalidEncodingError):
            pass

        status, body = error_status_and_body(TruncatedSignature("short"))
        assert status == 400
        assert body == {"error": "signature is not a valid hex string"}

    def test_unmapped_error_falls_back(self) -> None:
        """Startup errors have no client mapping and fall back to 500."""
        status, body = error_status_and_body(KeyFormatError("bad"))
        assert status == 500
        assert body == {"error": "internal error"}

    def test_table_covers_call_time_errors(self) -> None:
        """Every call-time error kind is mapped."""
        assert set(ERROR_RESPONSES) == {
            SignatureCreationError,
            InvalidEncodingError,
            InvalidSignatureFormatError,
            SignatureMismatchError,
        }


class TestErrorResponse:
    """Tests for the aiohttp response builder."""

    def test_json_body(self) -> None:
        """The response carries status and JSON body."""
        response = error_response(InvalidEncodingError("bad hex"))

        assert response.status == 400
        assert response.content_type == "application/json"
        assert json.loads(response.body) == {"error": "signature is not a valid hex string"}

    def test_server_fault(self) -> None:
        """Signing failures are server faults."""
        response = error_response(SignatureCreationError("boom"))

        assert response.status == 500
        assert json.loads(response.body) == {"error": "couldn't sign the receipt"}
