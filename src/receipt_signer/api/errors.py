"""
Translation of signer errors into HTTP responses.

The core exceptions know nothing about HTTP. This table is the single place
where an error kind is given a status code and a client-facing message.
"""

from __future__ import annotations

from http import HTTPStatus

from aiohttp import web

from ..exceptions import (
    InvalidEncodingError,
    InvalidSignatureFormatError,
    SignatureCreationError,
    SignatureMismatchError,
    SignerError,
)

ERROR_RESPONSES: dict[type[SignerError], tuple[HTTPStatus, str]] = {
    SignatureCreationError: (HTTPStatus.INTERNAL_SERVER_ERROR, "couldn't sign the receipt"),
    InvalidEncodingError: (HTTPStatus.BAD_REQUEST, "signature is not a valid hex string"),
    InvalidSignatureFormatError: (HTTPStatus.BAD_REQUEST, "couldn't create signature from string"),
    SignatureMismatchError: (HTTPStatus.BAD_REQUEST, "couldn't create signature from string"),
}
"""Status and client message for each error kind."""

FALLBACK_RESPONSE: tuple[HTTPStatus, str] = (HTTPStatus.INTERNAL_SERVER_ERROR, "internal error")
"""Used for errors without an entry in ERROR_RESPONSES."""


def error_status_and_body(error: SignerError) -> tuple[int, dict[str, str]]:
    """
    Look up the response for an error.

    Subclasses resolve to their nearest mapped ancestor.

    Returns:
        (status code, JSON body of the form {"error": message}).
    """
    for klass in type(error).__mro__:
        if klass in ERROR_RESPONSES:
            status, message = ERROR_RESPONSES[klass]
            break
    else:
        status, message = FALLBACK_RESPONSE

    return int(status), {"error": message}


def error_response(error: SignerError) -> web.Response:
    """Build the JSON error response for an error."""
    status, body = error_status_and_body(error)
    return web.json_response(body, status=status)
