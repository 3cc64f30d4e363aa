"""HTTP-facing helpers for services that expose the signer."""

from .errors import ERROR_RESPONSES, error_response, error_status_and_body

__all__ = [
    "ERROR_RESPONSES",
    "error_response",
    "error_status_and_body",
]
